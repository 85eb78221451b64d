"""
Income model for money coming in.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Income(BaseModel):
    """Income entry; mirrored into account_transactions under the same id."""
    __tablename__ = "income"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    source = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)
    account_id = Column(String(255), nullable=True)
    account_type = Column(String(20), nullable=True, index=True)  # bank, cash or card

    # Relationships
    user = relationship("User", back_populates="income")
