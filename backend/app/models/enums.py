"""
Enumerations shared by the financial models.
"""
import enum


class AccountType(str, enum.Enum):
    """Kind of account money moves through."""
    BANK = "bank"
    CASH = "cash"
    CARD = "card"


class TransactionType(str, enum.Enum):
    """Direction of a ledger row."""
    INCOME = "income"
    EXPENSE = "expense"


class DebtType(str, enum.Enum):
    """Whether money was lent (given) or borrowed (received)."""
    GIVEN = "given"
    RECEIVED = "received"


class DebtStatus(str, enum.Enum):
    """Settlement state of a debt."""
    PENDING = "pending"
    PAID = "paid"
    RECEIVED = "received"


def values_of(enum_cls) -> tuple:
    return tuple(member.value for member in enum_cls)
