"""
Debt routes. Debts are independent of the ledger and only adjust the
displayed balance.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.enums import DebtType
from app.schemas.common import CreatedResponse, SuccessResponse, TotalResponse
from app.schemas.debt import DebtCreate, DebtUpdate, DebtResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore
from app.services.balance_service import total_debts

router = APIRouter(prefix="/debts", tags=["debts"])


@router.get("", response_model=List[DebtResponse])
async def list_debts(
    type: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get debts for the current user, optionally filtered by type and status."""
    return EntityStore(db).read("debt", identity.user_id, {"type": type, "status": status})


@router.post("", response_model=CreatedResponse, response_model_exclude_none=True)
async def create_debt(
    debt_data: DebtCreate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Record a debt. Status defaults to "pending"."""
    store = EntityStore(db)
    values = store.validate_create("debt", debt_data.model_dump())
    store.ensure_user(identity.user_id)
    row = store.create("debt", identity.user_id, values, validated=True)
    return CreatedResponse(id=row.id)


@router.get("/total-given", response_model=TotalResponse)
async def get_total_given(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Total of pending debts the user has lent out."""
    total = EntityStore(db).with_schema_retry(
        "total debts given",
        lambda: total_debts(db, identity.user_id, DebtType.GIVEN.value)
    )
    return TotalResponse(total=total)


@router.get("/total-received", response_model=TotalResponse)
async def get_total_received(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Total of pending debts the user has borrowed."""
    total = EntityStore(db).with_schema_retry(
        "total debts received",
        lambda: total_debts(db, identity.user_id, DebtType.RECEIVED.value)
    )
    return TotalResponse(total=total)


@router.patch("/{debt_id}", response_model=SuccessResponse)
async def update_debt(
    debt_id: str,
    debt_data: DebtUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Update only the supplied fields of a debt."""
    EntityStore(db).update("debt", debt_id, identity.user_id, debt_data.model_dump(exclude_unset=True))
    return SuccessResponse()


@router.delete("/{debt_id}", response_model=SuccessResponse)
async def delete_debt(
    debt_id: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Delete a debt."""
    EntityStore(db).delete("debt", debt_id, identity.user_id)
    return SuccessResponse()
