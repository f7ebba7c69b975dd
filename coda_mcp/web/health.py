"""Health endpoint. Answered without touching tool dispatch."""

from typing import Sequence

from fastapi import APIRouter
from pydantic import BaseModel

from coda_mcp.config import Settings


class HealthResponse(BaseModel):
    status: str = "ok"
    server: str
    version: str


def create_health_router(settings: Settings, paths: Sequence[str] = ("/health",)) -> APIRouter:
    router = APIRouter(tags=["Health"])

    async def health() -> HealthResponse:
        return HealthResponse(server=settings.server_name, version=settings.server_version)

    for path in paths:
        router.add_api_route(path, health, methods=["GET"], response_model=HealthResponse)
    return router
