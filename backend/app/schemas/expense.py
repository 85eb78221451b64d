"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date
from decimal import Decimal


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    id: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None  # Defaults to "Other"
    date: Optional[dt_date] = None
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None


class ExpenseUpdate(BaseModel):
    """Schema for expense update."""
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    date: Optional[dt_date] = None
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: str
    amount: float
    category: Optional[str] = None
    date: dt_date
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None

    class Config:
        from_attributes = True
