"""
Health check route.
"""
import logging

from fastapi import APIRouter, Depends, Response

from pastebin.dependencies import get_store
from pastebin.models import HealthCheck
from pastebin.stores.base import PasteStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/api/healthz",
    response_model=HealthCheck,
    responses={503: {"model": HealthCheck, "description": "Store unreachable"}},
)
def health_check(response: Response, store: PasteStore = Depends(get_store)) -> HealthCheck:
    """
    Health check endpoint.
    Returns 200 with ok=true if the store answers a ping, 503 with ok=false otherwise.
    """
    is_healthy = store.ping()
    if not is_healthy:
        logger.warning("Health check failed: store did not answer")
        response.status_code = 503
    return HealthCheck(ok=is_healthy)
