"""Health check."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from src.api.registry import registry

router = APIRouter(prefix="/api/v1", tags=["health"])

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    status: str
    version: str
    services_ready: bool
    rpc_ok: bool
    redis_ok: bool


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report whether services are wired, the RPC node is healthy and Redis answers."""
    services_ready = all(
        s is not None for s in (registry.rpc, registry.price_resolver, registry.wallet_store)
    )

    rpc_ok = False
    if registry.rpc is not None:
        rpc_ok = await registry.rpc.get_health()

    redis_ok = False
    if registry.wallet_store is not None:
        redis_ok = await registry.wallet_store.ping()

    return HealthResponse(
        status="ok" if services_ready and rpc_ok and redis_ok else "degraded",
        version=VERSION,
        services_ready=services_ready,
        rpc_ok=rpc_ok,
        redis_ok=redis_ok,
    )
