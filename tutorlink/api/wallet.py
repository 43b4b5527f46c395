"""Wallet transaction endpoints."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, status

from tutorlink.api.dependencies import get_current_user_id, get_wallet_service
from tutorlink.schemas.records import (
    CreateWalletTransactionRequest,
    UpdateWalletTransactionStatus,
    WalletTransactionView,
)
from tutorlink.services.wallet_service import WalletTransactionService

router = APIRouter(prefix="/wallet", tags=["wallet"])


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
def create_transaction(
    request: CreateWalletTransactionRequest,
    service: WalletTransactionService = Depends(get_wallet_service),
    _user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    return {"transaction_id": service.create_transaction(request)}


@router.get("/transactions/{transaction_id}", response_model=WalletTransactionView)
def get_transaction(
    transaction_id: str, service: WalletTransactionService = Depends(get_wallet_service)
) -> WalletTransactionView:
    return service.get_transaction_by_id(transaction_id)


@router.put("/transactions/{transaction_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_transaction_status(
    transaction_id: str,
    request: UpdateWalletTransactionStatus,
    service: WalletTransactionService = Depends(get_wallet_service),
    _user_id: str = Depends(get_current_user_id),
) -> None:
    service.update_transaction_status(transaction_id, request.status)


@router.get("/parent/{parent_id}/transactions", response_model=list[WalletTransactionView])
def list_parent_transactions(
    parent_id: str, service: WalletTransactionService = Depends(get_wallet_service)
) -> list[WalletTransactionView]:
    return service.get_transactions_by_parent_id(parent_id)


@router.get("/parent/{parent_id}/balance")
def get_parent_balance(
    parent_id: str, service: WalletTransactionService = Depends(get_wallet_service)
) -> dict[str, Decimal]:
    return {"balance": service.get_parent_wallet_balance(parent_id)}
