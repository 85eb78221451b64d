"""
User settings persistence.

The settings table is the one whose columns keep growing, so every read and
write runs the migrator first. A migration failure aborts the request rather
than writing into a stale column set.
"""
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings as app_settings
from app.core.errors import translate_db_error
from app.db.migrator import SchemaMigrator
from app.models import UserSettings
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


def default_settings() -> Dict[str, Any]:
    return {
        "currency": app_settings.DEFAULT_CURRENCY,
        "language": app_settings.DEFAULT_LANGUAGE,
        "custom_categories": [],
        "accounts": [],
        "analytics_preferences": {},
    }


def _serialize(row: UserSettings) -> Dict[str, Any]:
    defaults = default_settings()
    return {
        "currency": row.currency or defaults["currency"],
        "language": row.language or defaults["language"],
        "custom_categories": row.custom_categories or [],
        "accounts": row.accounts or [],
        "analytics_preferences": row.analytics_preferences or {},
    }


def _find(db: Session, user_id: str):
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, f"{action} settings") from exc


def get_settings(db: Session, user_id: str) -> Dict[str, Any]:
    """Stored settings, or defaults when the user has none yet."""
    SchemaMigrator.for_session(db).migrate_user_settings()
    row = _find(db, user_id)
    if row is None:
        return default_settings()
    return _serialize(row)


def save_settings(db: Session, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Replace all settings; omitted fields are reset to their defaults."""
    SchemaMigrator.for_session(db).migrate_user_settings()
    EntityStore(db).ensure_user(user_id)
    values = default_settings()
    values.update({key: value for key, value in payload.items() if value})

    row = _find(db, user_id)
    if row is None:
        row = UserSettings(user_id=user_id, **values)
        db.add(row)
    else:
        for key, value in values.items():
            setattr(row, key, value)
    _commit(db, "save")
    db.refresh(row)
    logger.info("Saved settings for user %s", user_id)
    return _serialize(row)


def update_settings(db: Session, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Change only the supplied, non-empty settings; create the row if missing."""
    SchemaMigrator.for_session(db).migrate_user_settings()
    EntityStore(db).ensure_user(user_id)
    changes = {key: value for key, value in payload.items() if value}

    row = _find(db, user_id)
    if row is None:
        values = default_settings()
        values.update(changes)
        row = UserSettings(user_id=user_id, **values)
        db.add(row)
    else:
        for key, value in changes.items():
            setattr(row, key, value)
    _commit(db, "update")
    db.refresh(row)
    logger.info("Updated settings for user %s (%s)", user_id, ", ".join(sorted(changes)) or "no changes")
    return _serialize(row)
