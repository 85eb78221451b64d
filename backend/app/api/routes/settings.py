"""
User settings routes. Each call brings the settings table schema up to date first.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.settings import SettingsPayload, SettingsResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services import settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get settings, or defaults if none were saved."""
    return settings_service.get_settings(db, identity.user_id)


@router.post("", response_model=SettingsResponse)
async def save_settings(
    settings_data: SettingsPayload,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Save all settings; omitted fields are reset to defaults."""
    return settings_service.save_settings(db, identity.user_id, settings_data.model_dump())


@router.put("", response_model=SettingsResponse)
async def update_settings(
    settings_data: SettingsPayload,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Change only the supplied settings."""
    return settings_service.update_settings(db, identity.user_id, settings_data.model_dump())
