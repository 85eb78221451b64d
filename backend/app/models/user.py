"""
User model for authentication and ownership of financial records.
"""
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """User identity; every financial row is owned by exactly one user."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # Null for external identity providers
    name = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)

    # Relationships
    income = relationship("Income", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    account_transactions = relationship("AccountTransaction", back_populates="user", cascade="all, delete-orphan")
    debts = relationship("Debt", back_populates="user", cascade="all, delete-orphan")
    settings = relationship("UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan")
