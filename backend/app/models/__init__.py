"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.income import Income
from app.models.expense import Expense
from app.models.account_transaction import AccountTransaction
from app.models.debt import Debt
from app.models.user_settings import UserSettings
from app.models.enums import AccountType, TransactionType, DebtType, DebtStatus

__all__ = [
    "User",
    "Income",
    "Expense",
    "AccountTransaction",
    "Debt",
    "UserSettings",
    "AccountType",
    "TransactionType",
    "DebtType",
    "DebtStatus",
]
