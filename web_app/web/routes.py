"""Web interface routes implementation."""

import os
from typing import Optional

from fastapi import APIRouter, Request, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from quicklink.common.headers import build_base_url
from quicklink.common.timestamps import from_ms
from quicklink.storage.base import StorageError

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def _parse_validity(value: str) -> Optional[float]:
    """Blank means default; anything else must be a number."""
    value = (value or "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError("Validity must be a number of minutes")


def _render_form(request: Request, status_code: int = 200, **context) -> HTMLResponse:
    config = request.app.state.config
    values = {
        "url": "",
        "validity": config.default_validity_minutes,
        "custom_code": "",
        "result": None,
        "error": None,
    }
    values.update(context)
    return templates.TemplateResponse(request, "index.html", values, status_code=status_code)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the shorten form."""
    return _render_form(request)


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
async def shorten_form(
    request: Request,
    url: str = Form(""),
    validity: str = Form(""),
    custom_code: str = Form(""),
):
    """Handle the shorten form. Invalid input re-renders the form with an inline error."""
    service = request.app.state.service
    config = request.app.state.config

    origin = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    try:
        record = service.shorten(
            url,
            validity_minutes=_parse_validity(validity),
            custom_code=custom_code,
            origin=origin,
        )
    except ValueError as e:
        return _render_form(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            url=url,
            validity=validity,
            custom_code=custom_code,
            error=str(e),
        )
    except StorageError as e:
        return _render_form(
            request,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            url=url,
            validity=validity,
            custom_code=custom_code,
            error=f"Could not save the link: {e}",
        )

    return _render_form(request, result=record)


@router.get("/stats", response_class=HTMLResponse, include_in_schema=False)
async def stats_page(request: Request):
    """Show the statistics table."""
    service = request.app.state.service

    return templates.TemplateResponse(
        request,
        "stats.html",
        {
            "records": service.list_links(),
            "now": from_ms(service.store.clock()),
        },
    )


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str, ref: Optional[str] = None):
    """Redirect to the original URL, or back to the form for unknown codes.

    ``ref`` carries the referrer of a forwarded fragment link; when present
    it is recorded instead of the Referer header, which then only names
    this site's own form page.
    """
    service = request.app.state.service
    referrer = ref if ref is not None else request.headers.get("referer", "")

    try:
        original = service.resolve(code, referrer=referrer)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Storage error: {e}",
        )

    if original is None:
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

    return RedirectResponse(url=original, status_code=status.HTTP_302_FOUND)
