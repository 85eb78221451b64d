"""
Unified ledger model used for balance computation.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class AccountTransaction(BaseModel):
    """Ledger row mirroring one income or expense entry (same primary key)."""
    __tablename__ = "account_transactions"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(10), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    date = Column(Date, nullable=False, index=True)
    account_type = Column(String(20), nullable=True, index=True)
    note = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="account_transactions")

    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_account_transactions_type"),
    )
