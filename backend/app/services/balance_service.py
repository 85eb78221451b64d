"""
Balance and aggregate calculations.

Read-only; every query is scoped to one user. Sums are accumulated as
Decimal by the database and rounded to cents here; conversion to float
happens only in the response schemas.
"""
from datetime import date
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.errors import ValidationError
from app.core.utils import to_cents
from app.models import AccountTransaction, Debt, Expense, Income
from app.models.enums import DebtStatus, DebtType, TransactionType

MONTHLY_MODELS = {
    "income": Income,
    "expense": Expense,
}


def _sum(db: Session, column, *criteria) -> Decimal:
    total = db.query(func.coalesce(func.sum(column), 0)).filter(*criteria).scalar()
    return to_cents(total)


def account_balance(db: Session, user_id: str) -> Decimal:
    """Ledger income minus ledger expenses for a user."""
    income = _sum(
        db, AccountTransaction.amount,
        AccountTransaction.user_id == user_id,
        AccountTransaction.type == TransactionType.INCOME.value,
    )
    expenses = _sum(
        db, AccountTransaction.amount,
        AccountTransaction.user_id == user_id,
        AccountTransaction.type == TransactionType.EXPENSE.value,
    )
    return to_cents(income - expenses)


def month_bounds(month: int, year: int):
    """First day of the month and first day of the following month."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    try:
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    except ValueError:
        raise ValidationError(f"Year {year} is out of range")
    return start, end


def monthly_total(db: Session, user_id: str, kind: str,
                  month: Optional[int] = None, year: Optional[int] = None) -> Decimal:
    """Sum of income or expense rows dated within the given month (default: current)."""
    model = MONTHLY_MODELS.get(kind)
    if model is None:
        raise ValidationError('Kind must be "income" or "expense"')
    today = date.today()
    start, end = month_bounds(month or today.month, year or today.year)
    return _sum(
        db, model.amount,
        model.user_id == user_id,
        model.date >= start,
        model.date < end,
    )


def total_debts(db: Session, user_id: str, debt_type: str,
                status: str = DebtStatus.PENDING.value) -> Decimal:
    """Sum of debts of one type and status."""
    return _sum(
        db, Debt.amount,
        Debt.user_id == user_id,
        Debt.type == debt_type,
        Debt.status == status,
    )


def debt_adjusted_balance(db: Session, user_id: str) -> Dict[str, Decimal]:
    """
    Combine the ledger balance with pending debts for display.

    Money lent out is added back while any is pending; otherwise money still
    owed to others is subtracted.
    """
    balance = account_balance(db, user_id)
    given = total_debts(db, user_id, DebtType.GIVEN.value)
    received = total_debts(db, user_id, DebtType.RECEIVED.value)
    if given > 0:
        adjusted = balance + given
    elif received > 0:
        adjusted = balance - received
    else:
        adjusted = balance
    return {
        "balance": balance,
        "pending_debts_given": given,
        "pending_debts_received": received,
        "adjusted_balance": to_cents(adjusted),
    }
