"""Tracked wallets: list with net worth, add, remove, details, history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger

from config.settings import settings
from src.api.dependencies import get_price_resolver, get_rpc, get_token_symbols, get_wallet_store
from src.api.schemas import (
    AddWalletRequest,
    NetWorthOut,
    TrackedWalletsResponse,
    TransactionOut,
    TransactionsResponse,
    WalletValuationOut,
)
from src.db.tracked_wallets import TrackedWalletStore
from src.parsers.prices.base import PriceResolver
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.portfolio.address import is_valid_address
from src.portfolio.aggregate import load_net_worth
from src.portfolio.exceptions import DuplicateAddressError, InvalidAddressError, ValuationError
from src.portfolio.history import recent_transactions
from src.portfolio.valuation import value_wallet

router = APIRouter(prefix="/api/v1/wallets", tags=["wallets"])


@router.get("", response_model=NetWorthOut)
async def net_worth(
    store: TrackedWalletStore = Depends(get_wallet_store),
    rpc: SolanaRpcClient = Depends(get_rpc),
    resolver: PriceResolver = Depends(get_price_resolver),
    symbols: dict[str, str] = Depends(get_token_symbols),
) -> NetWorthOut:
    """Value all tracked wallets. Wallets that fail are listed under ``failed``."""
    summary = await load_net_worth(store, rpc, resolver, symbols=symbols)
    return NetWorthOut.from_summary(summary)


@router.post("", response_model=TrackedWalletsResponse, status_code=status.HTTP_201_CREATED)
async def add_wallet(
    body: AddWalletRequest,
    store: TrackedWalletStore = Depends(get_wallet_store),
) -> TrackedWalletsResponse:
    try:
        await store.add(body.address)
    except InvalidAddressError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DuplicateAddressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return TrackedWalletsResponse(addresses=await store.get_all())


@router.delete("/{address}", response_model=TrackedWalletsResponse)
async def remove_wallet(
    address: str,
    store: TrackedWalletStore = Depends(get_wallet_store),
) -> TrackedWalletsResponse:
    if not await store.remove(address):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not tracked")
    return TrackedWalletsResponse(addresses=await store.get_all())


@router.get("/{address}", response_model=WalletValuationOut)
async def wallet_details(
    address: str,
    rpc: SolanaRpcClient = Depends(get_rpc),
    resolver: PriceResolver = Depends(get_price_resolver),
    symbols: dict[str, str] = Depends(get_token_symbols),
) -> WalletValuationOut:
    try:
        valuation = await value_wallet(rpc, resolver, address, symbols=symbols)
    except ValuationError as e:
        if isinstance(e.cause, InvalidAddressError):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e.cause)) from e
        logger.warning(f"[API] Valuation failed for {address[:8]}: {e.cause}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to fetch wallet data"
        ) from e
    return WalletValuationOut.from_valuation(valuation)


@router.get("/{address}/transactions", response_model=TransactionsResponse)
async def wallet_transactions(
    address: str,
    limit: int = Query(settings.history_limit, ge=1, le=settings.history_max_limit),
    rpc: SolanaRpcClient = Depends(get_rpc),
) -> TransactionsResponse:
    if not is_valid_address(address):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Solana address")
    txs = await recent_transactions(
        rpc, address, limit, negligible_delta=settings.negligible_delta_sol
    )
    return TransactionsResponse(
        address=address,
        transactions=[TransactionOut.from_transaction(t) for t in txs],
    )
