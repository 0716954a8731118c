"""FastAPI application factory for the net-worth API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from src.api.middleware import SecurityHeadersMiddleware
from src.api.registry import registry
from src.db.redis import close_redis, create_redis
from src.db.tracked_wallets import TrackedWalletStore
from src.parsers.prices.base import build_price_resolver
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.portfolio.constants import TOKEN_SYMBOLS


async def init_services() -> None:
    """Build clients from settings and publish them on the registry."""
    registry.rpc = SolanaRpcClient(settings.rpc_url, timeout=settings.rpc_timeout_sec)
    registry.price_resolver = build_price_resolver(settings)
    registry.redis = create_redis(settings.redis_url)
    registry.wallet_store = TrackedWalletStore(registry.redis, key=settings.tracked_wallets_key)
    registry.token_symbols = {**TOKEN_SYMBOLS, **settings.extra_token_symbols}
    logger.info(f"[API] Services ready (price provider: {settings.price_provider})")


async def close_services() -> None:
    if registry.rpc is not None:
        await registry.rpc.close()
    if registry.price_resolver is not None:
        await registry.price_resolver.close()
    await close_redis(registry.redis)
    registry.rpc = None
    registry.price_resolver = None
    registry.redis = None
    registry.wallet_store = None


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    await init_services()
    try:
        yield
    finally:
        await close_services()


def create_app(*, manage_services: bool = True) -> FastAPI:
    """Build and configure the FastAPI application.

    ``manage_services=False`` skips client construction (tests inject their own).
    """
    app = FastAPI(
        title="Solana Net Worth API",
        version="0.1.0",
        docs_url="/api/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.api_debug else None,
        lifespan=lifespan if manage_services else None,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    from src.api.routers.health import router as health_router
    from src.api.routers.wallets import router as wallets_router

    app.include_router(health_router)
    app.include_router(wallets_router)

    return app
