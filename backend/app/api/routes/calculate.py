"""
Monthly total routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.schemas.common import TotalResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore
from app.services.balance_service import monthly_total

router = APIRouter(prefix="/calculate", tags=["calculate"])


def _monthly(db: Session, user_id: str, kind: str, month: Optional[int], year: Optional[int]) -> TotalResponse:
    total = EntityStore(db).with_schema_retry(
        f"monthly {kind}",
        lambda: monthly_total(db, user_id, kind, month, year)
    )
    return TotalResponse(total=total)


@router.get("/monthly-income", response_model=TotalResponse)
async def get_monthly_income(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1900),
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Income total for a month (defaults to the current month)."""
    return _monthly(db, identity.user_id, "income", month, year)


@router.get("/monthly-expenses", response_model=TotalResponse)
async def get_monthly_expenses(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1900),
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Expense total for a month (defaults to the current month)."""
    return _monthly(db, identity.user_id, "expense", month, year)
