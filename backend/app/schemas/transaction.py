"""
Pydantic schemas for the unified account ledger.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date
from decimal import Decimal


class TransactionCreate(BaseModel):
    """Schema for a ledger entry created through the unified endpoint."""
    id: Optional[str] = None
    type: Optional[str] = None  # income or expense
    amount: Optional[Decimal] = None
    name: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt_date] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None
    note: Optional[str] = None


class TransactionResponse(BaseModel):
    """Schema for ledger row response."""
    id: str
    type: str
    amount: float
    name: str
    category: Optional[str] = None
    date: dt_date
    account_type: Optional[str] = None
    note: Optional[str] = None

    class Config:
        from_attributes = True


class BalanceResponse(BaseModel):
    """Ledger balance."""
    balance: float


class AdjustedBalanceResponse(BalanceResponse):
    """Balance combined with pending debts."""
    pending_debts_given: float
    pending_debts_received: float
    adjusted_balance: float


class ReconcileResponse(BaseModel):
    """Outcome of a ledger reconciliation pass."""
    success: bool = True
    mirrors_created: int
    orphan_transaction_ids: list
