"""
Unified account ledger routes: balance and transactions.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.schemas.common import CreatedResponse, SuccessResponse
from app.schemas.transaction import (
    TransactionCreate, TransactionResponse, BalanceResponse, AdjustedBalanceResponse
)
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore
from app.services.ledger_sync import LedgerSynchronizer
from app.services.balance_service import account_balance, debt_adjusted_balance

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Ledger income minus ledger expenses, rounded to cents."""
    balance = EntityStore(db).with_schema_retry(
        "account balance",
        lambda: account_balance(db, identity.user_id)
    )
    return BalanceResponse(balance=balance)


@router.get("/balance/adjusted", response_model=AdjustedBalanceResponse)
async def get_adjusted_balance(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Balance combined with pending debts."""
    result = EntityStore(db).with_schema_retry(
        "debt adjusted balance",
        lambda: debt_adjusted_balance(db, identity.user_id)
    )
    return AdjustedBalanceResponse(**result)


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    type: Optional[str] = Query(None),
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get ledger rows for the current user, newest first."""
    return EntityStore(db).read("account_transaction", identity.user_id, {"type": type})


@router.post("/transactions", response_model=CreatedResponse)
async def create_transaction(
    transaction_data: TransactionCreate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Add a ledger row and the matching income or expense entry."""
    row, synced = LedgerSynchronizer(db).create_transaction(identity.user_id, transaction_data.model_dump())
    return CreatedResponse(id=row.id, mirror_synced=synced)


@router.delete("/transactions/{transaction_id}", response_model=SuccessResponse)
async def delete_transaction(
    transaction_id: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Delete a ledger row together with its income or expense entry."""
    LedgerSynchronizer(db).delete_transaction(transaction_id, identity.user_id)
    return SuccessResponse()
