"""
FastAPI dependencies exposing the handles created at startup.
"""
from fastapi import Request

from pastebin.config import Settings
from pastebin.service import PasteService
from pastebin.stores.base import PasteStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> PasteStore:
    return request.app.state.store


def get_service(request: Request) -> PasteService:
    return request.app.state.service
