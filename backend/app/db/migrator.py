"""
Additive, idempotent schema migrator for live databases.

Tables are created when absent and evolvable columns are added when absent;
nothing is ever dropped, renamed or truncated. Every step tolerates a
concurrent caller winning the race, so the migrator can run on every cold
start and before any write that depends on a recently added column.
"""
import logging
from typing import Dict, List

from sqlalchemy import Table, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateColumn

from app.core.errors import SchemaMissingError, StoreError, is_already_exists
from app.db.base import Base
from app.models import User, UserSettings
from app.models.user_settings import EVOLVABLE_COLUMNS

logger = logging.getLogger(__name__)


class SchemaMigrator:
    """Brings the live schema up to the models' expected shape."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def for_session(cls, db: Session) -> "SchemaMigrator":
        """Build a migrator bound to the same database as a session."""
        return cls(db.get_bind())

    def live_tables(self) -> List[str]:
        return sorted(inspect(self.engine).get_table_names())

    def live_columns(self, table: str) -> List[Dict[str, str]]:
        """Columns currently present in ``table`` as ``[{name, type}]``."""
        try:
            columns = inspect(self.engine).get_columns(table)
        except NoSuchTableError as exc:
            raise SchemaMissingError(f"Table {table} does not exist") from exc
        return [{"name": column["name"], "type": str(column["type"])} for column in columns]

    def ensure_table(self, name: str, definition: Table) -> bool:
        """Create ``name`` from ``definition`` if absent. Returns True if created."""
        if name in self.live_tables():
            return False
        try:
            definition.create(bind=self.engine, checkfirst=True)
        except SQLAlchemyError as exc:
            if is_already_exists(exc):
                logger.info("Table %s created concurrently by another caller", name)
                return False
            logger.error("Failed to create table %s: %s", name, exc)
            raise StoreError(f"Failed to create table {name}: {exc}") from exc
        logger.info("Created table %s", name)
        return True

    def ensure_column(self, table: str, column_name: str, add_column_statement: str) -> bool:
        """
        Add ``column_name`` to ``table`` by running ``add_column_statement``
        when the live table lacks it. Returns True if the column was added.

        A duplicate-column error from a concurrent caller counts as success;
        any other error aborts with StoreError.
        """
        existing = {column["name"] for column in self.live_columns(table)}
        if column_name in existing:
            logger.debug("Column %s.%s already exists", table, column_name)
            return False
        try:
            with self.engine.begin() as conn:
                conn.execute(text(add_column_statement))
        except SQLAlchemyError as exc:
            if is_already_exists(exc):
                logger.info("Column %s.%s already exists (race condition)", table, column_name)
                return False
            logger.error("Error adding column %s.%s: %s", table, column_name, exc)
            raise StoreError(f"Failed to add required column {table}.{column_name}: {exc}") from exc
        logger.info("Added column %s.%s", table, column_name)
        return True

    def add_column_statement(self, model, column_name: str) -> str:
        """Render ``ALTER TABLE ... ADD COLUMN`` for a model column in this dialect."""
        column = model.__table__.c[column_name]
        preparer = self.engine.dialect.identifier_preparer
        ddl = CreateColumn(column).compile(dialect=self.engine.dialect)
        return f"ALTER TABLE {preparer.quote(model.__tablename__)} ADD COLUMN {ddl}"

    def migrate_user_settings(self) -> List[str]:
        """Ensure user_settings and its evolvable columns exist. Returns added columns."""
        self.ensure_table(User.__tablename__, User.__table__)
        self.ensure_table(UserSettings.__tablename__, UserSettings.__table__)

        table = UserSettings.__tablename__
        added = []
        for column_name in EVOLVABLE_COLUMNS:
            statement = self.add_column_statement(UserSettings, column_name)
            if self.ensure_column(table, column_name, statement):
                added.append(column_name)

        present = {column["name"] for column in self.live_columns(table)}
        missing = [name for name in EVOLVABLE_COLUMNS if name not in present]
        if missing:
            raise StoreError(f"Columns still missing after migration: {', '.join(missing)}")

        if added:
            logger.info("Added %d column(s) to %s: %s", len(added), table, ", ".join(added))
        else:
            logger.debug("%s table is up to date", table)
        return added

    def create_all_tables(self) -> None:
        """Ensure every model table exists, then migrate evolvable columns."""
        for table in Base.metadata.sorted_tables:
            self.ensure_table(table.name, table)
        self.migrate_user_settings()
