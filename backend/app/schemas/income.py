"""
Pydantic schemas for Income entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date
from decimal import Decimal


class IncomeCreate(BaseModel):
    """Schema for income creation. Required fields are checked by the store."""
    id: Optional[str] = None
    amount: Optional[Decimal] = None
    source: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt_date] = None
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None


class IncomeUpdate(BaseModel):
    """Schema for partial income update; only fields sent are applied."""
    amount: Optional[Decimal] = None
    source: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt_date] = None
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None


class IncomeResponse(BaseModel):
    """Schema for income response."""
    id: str
    amount: float
    source: Optional[str] = None
    category: Optional[str] = None
    date: dt_date
    description: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None

    class Config:
        from_attributes = True
