"""
Pydantic schemas for Debt entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date
from decimal import Decimal


class DebtCreate(BaseModel):
    """Schema for debt creation."""
    id: Optional[str] = None
    type: Optional[str] = None  # given or received
    amount: Optional[Decimal] = None
    person_name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt_date] = None
    status: Optional[str] = None  # Defaults to pending


class DebtUpdate(BaseModel):
    """Schema for debt update."""
    status: Optional[str] = None
    amount: Optional[Decimal] = None
    person_name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt_date] = None


class DebtResponse(BaseModel):
    """Schema for debt response."""
    id: str
    type: str
    amount: float
    person_name: str
    description: Optional[str] = None
    date: dt_date
    status: str

    class Config:
        from_attributes = True
