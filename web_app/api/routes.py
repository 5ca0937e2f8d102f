"""API routes implementation."""

from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from shortener.common.url_builder import build_base_url, build_short_url
from shortener.common.validators import is_valid_short_code
from shortener.database.models import URLMapping

from .schemas import (
    ShortenRequest,
    URLDetailResponse,
    MessageResponse,
    HealthResponse,
    ErrorResponse,
)

API_VERSION = "1.0.0"

router = APIRouter()


def _detail(request: Request, mapping: URLMapping) -> URLDetailResponse:
    """Build the response body for one mapping, including its short URL."""
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return URLDetailResponse(
        short_code=mapping.short_code,
        short_url=build_short_url(mapping.short_code, base_url, config.path_prefix),
        long_url=mapping.long_url,
        created_at=mapping.created_at,
    )


def _require_valid_code(short_code: str) -> None:
    is_valid, error = is_valid_short_code(short_code)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)


@router.post(
    "/shorten",
    response_model=URLDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "No unique short code could be allocated"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Create short URL",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    mapping = await service.create_short_url(body.long_url)
    return _detail(request, mapping)


@router.get(
    "/shorten",
    response_model=List[URLDetailResponse],
    summary="List short URLs",
    description="List every short URL, oldest first.",
)
async def list_urls(request: Request):
    service = request.app.state.service
    mappings = await service.list_all()
    return [_detail(request, mapping) for mapping in mappings]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="ok" if health["overall"] else "degraded",
        version=API_VERSION,
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
    )


@router.get(
    "/{short_code}",
    response_model=URLDetailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed short code"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get short URL details",
)
async def get_url_details(request: Request, short_code: str):
    _require_valid_code(short_code)
    service = request.app.state.service
    mapping = await service.get_mapping(short_code)
    return _detail(request, mapping)


@router.delete(
    "/{short_code}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed short code"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Delete short URL",
)
async def delete_url(request: Request, short_code: str):
    _require_valid_code(short_code)
    service = request.app.state.service
    await service.delete(short_code)
    return MessageResponse(message="short url deleted successfully")
