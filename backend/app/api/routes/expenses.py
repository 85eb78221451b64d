"""
Expense routes. Every write is mirrored into the account ledger.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.schemas.common import CreatedResponse, SuccessResponse
from app.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore
from app.services.ledger_sync import LedgerSynchronizer

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get all expenses for the current user, newest first."""
    return EntityStore(db).read("expense", identity.user_id)


@router.post("", response_model=CreatedResponse)
async def create_expense(
    expense_data: ExpenseCreate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Add an expense and its ledger entry. Category defaults to "Other"."""
    row, synced = LedgerSynchronizer(db).create_expense(identity.user_id, expense_data.model_dump())
    return CreatedResponse(id=row.id, mirror_synced=synced)


@router.patch("/{expense_id}", response_model=SuccessResponse)
async def update_expense(
    expense_id: str,
    expense_data: ExpenseUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Update only the supplied fields of an expense and its ledger entry."""
    LedgerSynchronizer(db).update_expense(
        expense_id, identity.user_id, expense_data.model_dump(exclude_unset=True)
    )
    return SuccessResponse()


@router.delete("/{expense_id}", response_model=SuccessResponse)
async def delete_expense(
    expense_id: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Delete an expense and its ledger entry."""
    LedgerSynchronizer(db).delete_expense(expense_id, identity.user_id)
    return SuccessResponse()
