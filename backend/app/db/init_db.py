"""
Database initialization script.

Usage:
    python -m app.db.init_db
"""
import logging
from app.core.config import settings
from app.db.session import engine
from app.db.migrator import SchemaMigrator


def init_db():
    """Create missing tables and columns without touching existing data."""
    SchemaMigrator(engine).create_all_tables()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
