"""
Dual-write protocol keeping the unified account ledger in step with the
income and expense tables.

The two views of one financial event share a primary key, so the mirror row
can always be found by id alone. The primary write always happens first and
stands on its own: a failed mirror write is logged and reported, never
retried or rolled back, and can be repaired later with ``reconcile``.
"""
import logging
from typing import Any, Callable, Dict, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import LedgerError
from app.models import AccountTransaction, Expense, Income
from app.models.enums import TransactionType
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

# (origin field, ledger field) pairs used to push partial updates
INCOME_MIRROR_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("amount", "amount"),
    ("source", "name"),
    ("category", "category"),
    ("date", "date"),
    ("description", "note"),
    ("account_type", "account_type"),
)

EXPENSE_MIRROR_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("amount", "amount"),
    ("description", "name"),
    ("category", "category"),
    ("date", "date"),
    ("description", "note"),
    ("account_type", "account_type"),
)

DEFAULT_LABELS = {
    TransactionType.INCOME.value: "Income",
    TransactionType.EXPENSE.value: "Expense",
}


def mirror_changes(field_map: Tuple[Tuple[str, str], ...], changes: Dict[str, Any],
                   label: str) -> Dict[str, Any]:
    """Translate the supplied origin fields into ledger fields; others stay untouched."""
    mirrored = {}
    for origin_field, ledger_field in field_map:
        if origin_field in changes:
            mirrored[ledger_field] = changes[origin_field]
    if "name" in mirrored and not mirrored["name"]:
        mirrored["name"] = label
    return mirrored


def income_to_transaction(values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": values["id"],
        "type": TransactionType.INCOME.value,
        "amount": values["amount"],
        "name": values.get("source") or DEFAULT_LABELS[TransactionType.INCOME.value],
        "category": values.get("category"),
        "date": values["date"],
        "account_type": values.get("account_type"),
        "note": values.get("description"),
    }


def expense_to_transaction(values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": values["id"],
        "type": TransactionType.EXPENSE.value,
        "amount": values["amount"],
        "name": values.get("description") or values.get("category") or DEFAULT_LABELS[TransactionType.EXPENSE.value],
        "category": values.get("category"),
        "date": values["date"],
        "account_type": values.get("account_type"),
        "note": values.get("description"),
    }


def transaction_to_origin(values: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Entity name and row values for the income/expense twin of a ledger entry."""
    common = {
        "id": values["id"],
        "amount": values["amount"],
        "date": values["date"],
        "description": values.get("note"),
        "account_id": values.get("account_id"),
        "account_type": values.get("account_type"),
    }
    if values["type"] == TransactionType.INCOME.value:
        return "income", dict(common, source=values["name"], category=values.get("category"))
    return "expense", dict(common, category=values.get("category") or "Other")


class LedgerSynchronizer:
    """Runs income/expense/ledger mutations under the dual-write protocol."""

    def __init__(self, db: Session, store: EntityStore = None):
        self.db = db
        self.store = store or EntityStore(db)

    def _mirror(self, action: str, entity_id: str, user_id: str, write: Callable[[], Any]) -> bool:
        """Perform a mirror write; failure is logged and reported, not raised."""
        try:
            write()
        except (LedgerError, SQLAlchemyError) as exc:
            self.db.rollback()
            logger.error(
                "Mirror %s failed for %s (user %s); ledger views are inconsistent until reconciled: %s",
                action, entity_id, user_id, exc
            )
            return False
        return True

    def _create_with_mirror(self, entity: str, user_id: str, payload: Dict[str, Any],
                            to_transaction: Callable[[Dict[str, Any]], Dict[str, Any]]):
        values = self.store.validate_create(entity, payload)
        self.store.ensure_user(user_id)
        row = self.store.create(entity, user_id, values, validated=True)
        values["id"] = row.id
        synced = self._mirror(
            "create", row.id, user_id,
            lambda: self.store.create("account_transaction", user_id, to_transaction(values), validated=True),
        )
        return row, synced

    def create_income(self, user_id: str, payload: Dict[str, Any]):
        """Write the income row, then its ledger twin. Returns ``(row, mirror_synced)``."""
        return self._create_with_mirror("income", user_id, payload, income_to_transaction)

    def create_expense(self, user_id: str, payload: Dict[str, Any]):
        """Write the expense row, then its ledger twin. Returns ``(row, mirror_synced)``."""
        return self._create_with_mirror("expense", user_id, payload, expense_to_transaction)

    def create_transaction(self, user_id: str, payload: Dict[str, Any]):
        """Write a ledger row from the unified endpoint, then its income/expense twin."""
        values = self.store.validate_create("account_transaction", payload)
        self.store.ensure_user(user_id)
        row = self.store.create("account_transaction", user_id, values, validated=True)
        values["id"] = row.id
        entity, origin_values = transaction_to_origin(values)
        synced = self._mirror(
            "create", row.id, user_id,
            lambda: self.store.create(entity, user_id, origin_values, validated=True),
        )
        return row, synced

    def _update_with_mirror(self, entity: str, entity_id: str, user_id: str, changes: Dict[str, Any],
                            field_map: Tuple[Tuple[str, str], ...], label: str) -> int:
        values = self.store.validate_update(entity, changes)
        if not values:
            return 0
        count = self.store.update(entity, entity_id, user_id, values, validated=True)
        mirrored = mirror_changes(field_map, values, label)
        if count and mirrored:
            self._mirror(
                "update", entity_id, user_id,
                lambda: self.store.update("account_transaction", entity_id, user_id, mirrored,
                                          validated=True, match={"type": entity}),
            )
        return count

    def update_income(self, entity_id: str, user_id: str, changes: Dict[str, Any]) -> int:
        """Partially update an income row and push the supplied fields to its twin."""
        return self._update_with_mirror("income", entity_id, user_id, changes,
                                        INCOME_MIRROR_FIELDS, DEFAULT_LABELS["income"])

    def update_expense(self, entity_id: str, user_id: str, changes: Dict[str, Any]) -> int:
        """Partially update an expense row and push the supplied fields to its twin."""
        return self._update_with_mirror("expense", entity_id, user_id, changes,
                                        EXPENSE_MIRROR_FIELDS, DEFAULT_LABELS["expense"])

    def _delete_with_mirror(self, entity: str, entity_id: str, user_id: str) -> int:
        count = self.store.delete(entity, entity_id, user_id)
        if count:
            self._mirror(
                "delete", entity_id, user_id,
                lambda: self.store.delete("account_transaction", entity_id, user_id, match={"type": entity}),
            )
        return count

    def delete_income(self, entity_id: str, user_id: str) -> int:
        return self._delete_with_mirror("income", entity_id, user_id)

    def delete_expense(self, entity_id: str, user_id: str) -> int:
        return self._delete_with_mirror("expense", entity_id, user_id)

    def delete_transaction(self, entity_id: str, user_id: str) -> int:
        """Delete a ledger row and cascade to the income or expense twin of the same kind."""
        row = self.store.get("account_transaction", entity_id, user_id)
        if row is None:
            return 0
        entity = row.type
        count = self.store.delete("account_transaction", entity_id, user_id, match={"type": entity})
        if count:
            self._mirror(
                "delete", entity_id, user_id,
                lambda: self.store.delete(entity, entity_id, user_id),
            )
        return count

    def reconcile(self, user_id: str) -> Tuple[int, List[str]]:
        """
        Repair missing ledger twins for one user.

        Anti-joins income and expenses against the ledger by primary key,
        inserts the missing ledger rows, and returns the number created along
        with ledger ids that have no origin row.
        """
        ledger_ids = {
            row_id for (row_id,) in self.db.query(AccountTransaction.id).filter(
                AccountTransaction.user_id == user_id
            ).all()
        }
        created = 0
        origin_ids = set()
        for model, to_transaction in ((Income, income_to_transaction), (Expense, expense_to_transaction)):
            rows = self.db.query(model).filter(model.user_id == user_id).all()
            for row in rows:
                origin_ids.add(row.id)
                if row.id in ledger_ids:
                    continue
                values = {column: getattr(row, column) for column in model.__table__.columns.keys()}
                self.store.create("account_transaction", user_id, to_transaction(values), validated=True)
                created += 1

        orphans = sorted(ledger_ids - origin_ids)
        logger.info("Reconciled ledger for user %s: %d mirror(s) created, %d orphan(s)",
                    user_id, created, len(orphans))
        return created, orphans
