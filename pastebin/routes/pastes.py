"""
Paste routes.
Handles create, fetch (API), and view (HTML) operations.
"""
import html
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, Request
from fastapi.responses import HTMLResponse

from pastebin.clock import resolve_now
from pastebin.config import Settings
from pastebin.dependencies import get_service, get_settings
from pastebin.exceptions import PasteNotFoundError
from pastebin.models import ErrorResponse, PasteCreate, PasteResponse, PasteView
from pastebin.service import PasteService

router = APIRouter()

CREATE_EXAMPLE = {"content": "hello", "ttl_seconds": 600, "max_views": 5}


def build_paste_url(request: Request, settings: Settings, paste_id: str) -> str:
    """Shareable URL, based on APP_DOMAIN or else the host the request came in on."""
    base_url = settings.APP_DOMAIN or str(request.base_url)
    return f"{base_url.rstrip('/')}/p/{paste_id}"


@router.post(
    "/api/pastes",
    response_model=PasteResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_paste(
    request: Request,
    payload: PasteCreate = Body(..., examples=[CREATE_EXAMPLE]),
    x_test_now_ms: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    service: PasteService = Depends(get_service),
) -> PasteResponse:
    """
    Create a new paste.

    Args:
        payload: Paste data (content, optional ttl_seconds, optional max_views)
        x_test_now_ms: Optional test timestamp (TEST_MODE only)

    Returns:
        Paste ID and shareable URL

    Raises:
        ValidationError: If a field or the test header is invalid (400)
    """
    # The body is validated before this runs, so field errors win over a bad test header
    now = resolve_now(
        x_test_now_ms,
        test_mode=settings.TEST_MODE,
        strict=payload.ttl_seconds is not None,
    )
    paste = service.create(
        payload.content,
        ttl_seconds=payload.ttl_seconds,
        max_views=payload.max_views,
        now=now,
    )

    return PasteResponse(id=paste.id, url=build_paste_url(request, settings, paste.id))


@router.get(
    "/api/pastes/{paste_id}",
    response_model=PasteView,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def fetch_paste(
    paste_id: str,
    x_test_now_ms: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    service: PasteService = Depends(get_service),
) -> PasteView:
    """
    Fetch a paste (API endpoint).
    Each successful fetch increments the view count.

    Raises:
        PasteNotFoundError: If paste not found, expired, or view limit exceeded (404)
    """
    now = resolve_now(x_test_now_ms, test_mode=settings.TEST_MODE)
    return service.fetch(paste_id, now)


@router.get("/p/{paste_id}", response_class=HTMLResponse)
def view_paste(
    paste_id: str,
    x_test_now_ms: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    service: PasteService = Depends(get_service),
) -> HTMLResponse:
    """
    View a paste as HTML.
    Counts as a view exactly like the API fetch.
    """
    now = resolve_now(x_test_now_ms, test_mode=settings.TEST_MODE)
    try:
        paste = service.fetch(paste_id, now)
    except PasteNotFoundError:
        return HTMLResponse(_render_404_page(), status_code=404)

    return HTMLResponse(_render_paste_page(paste_id, paste))


PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - Pastebin Lite</title>
    <style>
        body {{ font-family: -apple-system, "Segoe UI", Roboto, Arial, sans-serif; background: #f4f4f8; padding: 20px; }}
        .container {{ background: white; border-radius: 10px; max-width: 900px; margin: 0 auto; padding: 40px; }}
        .meta {{ color: #666; font-size: 12px; margin-bottom: 20px; font-family: monospace; word-break: break-all; }}
        pre {{ background: #f5f5f5; border: 1px solid #ddd; border-radius: 5px; padding: 20px; white-space: pre-wrap; word-wrap: break-word; }}
    </style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>"""


def _render_paste_page(paste_id: str, paste: PasteView) -> str:
    """Render paste content, HTML-escaped."""
    meta = [f"ID: {html.escape(paste_id)}"]
    if paste.remaining_views is not None:
        meta.append(f"Views left: {paste.remaining_views}")
    if paste.expires_at is not None:
        meta.append(f"Expires: {paste.expires_at}")

    body = (
        "        <h1>Pastebin Lite</h1>\n"
        f"        <div class=\"meta\">{' | '.join(meta)}</div>\n"
        f"        <pre>{html.escape(paste.content)}</pre>"
    )
    return PAGE_TEMPLATE.format(title="Paste", body=body)


def _render_404_page() -> str:
    """Render a 404 error page."""
    body = (
        "        <h1>404</h1>\n"
        "        <p>This paste was not found, has expired, or its view limit has been exceeded.</p>"
    )
    return PAGE_TEMPLATE.format(title="Not Found", body=body)
