"""
Operational routes: explicit schema migration and ledger reconciliation.
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.core.errors import NotFoundError
from app.core.utils import format_response
from app.db.session import get_db
from app.db.migrator import SchemaMigrator
from app.models import UserSettings
from app.schemas.settings import ColumnInfo, MigrationResponse
from app.schemas.transaction import ReconcileResponse
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.ledger_sync import LedgerSynchronizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/database", tags=["database"])


@router.get("/tables")
async def list_tables(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """List live tables with their column counts."""
    migrator = SchemaMigrator.for_session(db)
    tables = [
        {"table_name": name, "column_count": len(migrator.live_columns(name))}
        for name in migrator.live_tables()
    ]
    return format_response(tables)


@router.get("/table/{name}", response_model=List[ColumnInfo])
async def describe_table(
    name: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Live columns of one table."""
    migrator = SchemaMigrator.for_session(db)
    if name not in migrator.live_tables():
        raise NotFoundError(f"Table {name} does not exist")
    return migrator.live_columns(name)


@router.post("/create-tables")
async def create_tables(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Create every missing table and column. Existing data is never touched."""
    SchemaMigrator.for_session(db).create_all_tables()
    logger.info("Tables created on request of user %s", identity.user_id)
    return format_response(None, "All tables created successfully")


@router.post("/migrate-settings", response_model=MigrationResponse)
async def migrate_settings(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Add any missing user_settings columns and report the live column set."""
    migrator = SchemaMigrator.for_session(db)
    added = migrator.migrate_user_settings()
    columns = migrator.live_columns(UserSettings.__tablename__)
    return MigrationResponse(
        message="Migration completed successfully",
        added_columns=added,
        columns=columns,
        column_count=len(columns)
    )


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_ledger(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Recreate missing ledger entries for the current user's income and expenses."""
    created, orphans = LedgerSynchronizer(db).reconcile(identity.user_id)
    return ReconcileResponse(mirrors_created=created, orphan_transaction_ids=orphans)
