"""
Pydantic schemas for UserSettings.
"""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class CustomCategory(BaseModel):
    """User-defined income or expense category."""
    id: str
    name: str
    icon: Optional[str] = None
    type: str  # income or expense


class AccountEntry(BaseModel):
    """User-defined account."""
    id: str
    name: str
    type: str  # bank, cash or card


class SettingsPayload(BaseModel):
    """Schema for saving settings; omitted fields fall back to defaults on POST."""
    currency: Optional[str] = None
    language: Optional[str] = None
    custom_categories: Optional[List[CustomCategory]] = None
    accounts: Optional[List[AccountEntry]] = None
    analytics_preferences: Optional[Dict[str, Any]] = None


class SettingsResponse(BaseModel):
    """Schema for settings response."""
    currency: str
    language: str
    custom_categories: List[Dict[str, Any]] = []
    accounts: List[Dict[str, Any]] = []
    analytics_preferences: Dict[str, Any] = {}


class ColumnInfo(BaseModel):
    """Live column of a table."""
    name: str
    type: str


class MigrationResponse(BaseModel):
    """Result of an explicit settings migration."""
    success: bool = True
    message: str
    added_columns: List[str]
    columns: List[ColumnInfo]
    column_count: int
