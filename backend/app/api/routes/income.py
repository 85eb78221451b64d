"""
Income routes. Every write is mirrored into the account ledger.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.schemas.common import CreatedResponse, SuccessResponse
from app.schemas.income import IncomeCreate, IncomeUpdate, IncomeResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore
from app.services.ledger_sync import LedgerSynchronizer

router = APIRouter(prefix="/income", tags=["income"])


@router.get("", response_model=List[IncomeResponse])
async def list_income(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get all income for the current user, newest first."""
    return EntityStore(db).read("income", identity.user_id)


@router.post("", response_model=CreatedResponse)
async def create_income(
    income_data: IncomeCreate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Add income and its ledger entry."""
    row, synced = LedgerSynchronizer(db).create_income(identity.user_id, income_data.model_dump())
    return CreatedResponse(id=row.id, mirror_synced=synced)


@router.patch("/{income_id}", response_model=SuccessResponse)
async def update_income(
    income_id: str,
    income_data: IncomeUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Update only the supplied fields of an income entry and its ledger entry."""
    LedgerSynchronizer(db).update_income(
        income_id, identity.user_id, income_data.model_dump(exclude_unset=True)
    )
    return SuccessResponse()


@router.delete("/{income_id}", response_model=SuccessResponse)
async def delete_income(
    income_id: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Delete an income entry and its ledger entry."""
    LedgerSynchronizer(db).delete_income(income_id, identity.user_id)
    return SuccessResponse()
