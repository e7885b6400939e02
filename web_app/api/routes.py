"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Request, Response, status
from datetime import datetime, timezone

from .schemas import (
    LinkCreateRequest,
    LinkResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)

router = APIRouter()

STORE_ERRORS = {
    500: {"model": ErrorResponse, "description": "Internal server error"},
    503: {"model": ErrorResponse, "description": "Link store unavailable or timed out"},
}


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses=STORE_ERRORS,
    summary="List links",
    description="List every link. Order is unspecified; clients sort and filter.",
)
async def list_links(request: Request):
    """List all links."""
    service = request.app.state.service
    links = await service.list_links()
    return [LinkResponse.from_link(link) for link in links]


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or code"},
        409: {"model": ErrorResponse, "description": "Code already exists"},
        **STORE_ERRORS,
    },
    summary="Create link",
    description="Create a link. Optionally provide a custom 6-8 character code.",
)
async def create_link(request: Request, body: LinkCreateRequest):
    """Create a link."""
    service = request.app.state.service
    link = await service.create_link(url=body.url, code=body.code)
    return LinkResponse.from_link(link)


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Link not found"},
        **STORE_ERRORS,
    },
    summary="Get link",
    description="Get a link and its click statistics without counting a visit.",
)
async def get_link(request: Request, code: str):
    """Get a single link."""
    service = request.app.state.service
    link = await service.get_link(code)
    return LinkResponse.from_link(link)


@router.delete(
    "/links/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"model": ErrorResponse, "description": "Link not found"},
        **STORE_ERRORS,
    },
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    """Delete a link."""
    service = request.app.state.service
    await service.delete_link(code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    responses=STORE_ERRORS,
    summary="Get statistics",
    description="Total links and total clicks.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service
    stats = await service.get_statistics()
    return StatisticsResponse(total_links=stats["total_links"], total_clicks=stats["total_clicks"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its link store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
