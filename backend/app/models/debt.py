"""
Debt model for money lent or borrowed.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Debt(BaseModel):
    """Debt record; adjusts the balance separately and is never mirrored into the ledger."""
    __tablename__ = "debts"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    person_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    # Relationships
    user = relationship("User", back_populates="debts")

    __table_args__ = (
        CheckConstraint("type IN ('given', 'received')", name="ck_debts_type"),
        CheckConstraint("status IN ('pending', 'paid', 'received')", name="ck_debts_status"),
    )
