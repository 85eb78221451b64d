"""
Shared response schemas.
"""
from pydantic import BaseModel
from typing import Optional


class SuccessResponse(BaseModel):
    """Acknowledgement for update/delete; never reveals how many rows matched."""
    success: bool = True


class CreatedResponse(SuccessResponse):
    """Acknowledgement for a create, with the assigned id."""
    id: str
    mirror_synced: Optional[bool] = None


class TotalResponse(BaseModel):
    """A single aggregated amount."""
    total: float
