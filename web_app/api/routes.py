"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from datetime import datetime, timezone
from typing import List

from .schemas import (
    ShortenRequest,
    LinkResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from quicklink.common.headers import build_base_url
from quicklink.common.timestamps import from_ms
from quicklink.storage.base import StorageError

router = APIRouter()


def _now(request: Request) -> datetime:
    return from_ms(request.app.state.service.store.clock())


@router.post(
    "/shorten",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
    summary="Create short URL",
    description="Create a short link. Optionally provide a validity in minutes and a custom code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a short link."""
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
            body.url,
            validity_minutes=body.validity_minutes,
            custom_code=body.custom_code,
            origin=origin,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Storage error: {e}",
        )

    return LinkResponse.from_record(record, _now(request))


@router.get(
    "/links",
    response_model=List[LinkResponse],
    summary="List short links",
    description="List every short link in creation order.",
)
async def list_links(request: Request):
    """List short links with their statistics."""
    service = request.app.state.service
    now = _now(request)

    return [LinkResponse.from_record(record, now) for record in service.list_links()]


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get short link",
    description="Get a short link and its visit history without recording a visit.",
)
async def get_link(request: Request, code: str):
    """Get information about a short link."""
    service = request.app.state.service

    record = service.get_link(code)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{code}' not found",
        )

    return LinkResponse.from_record(record, _now(request))


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get totals across all short links.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    return StatisticsResponse(**service.get_statistics())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the storage backend is reachable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        storage="healthy" if health["storage"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
