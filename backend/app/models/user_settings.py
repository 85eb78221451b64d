"""
Per-user preferences. The column set of this table grows over time and is
brought up to date on live databases by the schema migrator.
"""
from sqlalchemy import Column, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.core.config import settings
from app.db.base import BaseModel


class UserSettings(BaseModel):
    """One settings row per user."""
    __tablename__ = "user_settings"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    currency = Column(String(10), nullable=True, default=settings.DEFAULT_CURRENCY,
                      server_default=settings.DEFAULT_CURRENCY)
    language = Column(String(10), nullable=True, default=settings.DEFAULT_LANGUAGE,
                      server_default=settings.DEFAULT_LANGUAGE)
    # JSON columns carry no server default so the ALTER works on every backend
    custom_categories = Column(JSON, nullable=True, default=list)  # [{id, name, icon, type}]
    accounts = Column(JSON, nullable=True, default=list)  # [{id, name, type}]
    analytics_preferences = Column(JSON, nullable=True, default=dict)

    # Relationships
    user = relationship("User", back_populates="settings")


# Columns added after the table already held production rows, in the order
# they were introduced. Each must be nullable or carry a server default.
EVOLVABLE_COLUMNS = (
    "language",
    "currency",
    "custom_categories",
    "accounts",
    "analytics_preferences",
)
