"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Expense(BaseModel):
    """Expense entry; mirrored into account_transactions under the same id."""
    __tablename__ = "expenses"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, default="Other", index=True)
    date = Column(Date, nullable=False, index=True)
    account_id = Column(String(255), nullable=True)
    account_type = Column(String(20), nullable=True, index=True)

    # Relationships
    user = relationship("User", back_populates="expenses")
