"""
Scoped CRUD for the financial entities.

Every operation is constrained by ``user_id``: updates and deletes match on
``(id, user_id)`` and report how many rows they affected, which may be zero
when the id is unknown or owned by someone else. Callers must not turn that
count into an existence signal.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    NotFoundError, SchemaMissingError, ValidationError, translate_db_error,
)
from app.db.base import generate_id
from app.db.migrator import SchemaMigrator
from app.models import AccountTransaction, Debt, Expense, Income, User
from app.models.enums import AccountType, DebtStatus, DebtType, TransactionType, values_of

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EntitySpec:
    """Describes how one entity is validated and persisted."""
    name: str
    model: type
    required: Tuple[str, ...]
    updatable: Tuple[str, ...]
    defaults: Dict[str, Any] = field(default_factory=dict)
    choices: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    filterable: Tuple[str, ...] = ()


ENTITIES: Dict[str, EntitySpec] = {
    "income": EntitySpec(
        name="income",
        model=Income,
        required=("amount", "source", "date"),
        updatable=("amount", "source", "category", "date", "description", "account_id", "account_type"),
        choices={"account_type": values_of(AccountType)},
        filterable=("category", "account_type"),
    ),
    "expense": EntitySpec(
        name="expense",
        model=Expense,
        required=("amount", "date"),
        updatable=("amount", "category", "date", "description", "account_id", "account_type"),
        defaults={"category": "Other"},
        choices={"account_type": values_of(AccountType)},
        filterable=("category", "account_type"),
    ),
    "account_transaction": EntitySpec(
        name="account_transaction",
        model=AccountTransaction,
        required=("type", "amount", "name", "date"),
        updatable=("amount", "name", "category", "date", "account_type", "note"),
        choices={"type": values_of(TransactionType), "account_type": values_of(AccountType)},
        filterable=("type", "account_type"),
    ),
    "debt": EntitySpec(
        name="debt",
        model=Debt,
        required=("type", "amount", "person_name", "date"),
        updatable=("status", "amount", "person_name", "description", "date"),
        defaults={"status": DebtStatus.PENDING.value},
        choices={"type": values_of(DebtType), "status": values_of(DebtStatus)},
        filterable=("type", "status"),
    ),
}


def get_spec(entity: str) -> EntitySpec:
    try:
        return ENTITIES[entity]
    except KeyError:
        raise ValueError(f"Unknown entity: {entity}")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_amount(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a positive number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be a positive number")
    return amount


def _check_choices(spec: EntitySpec, values: Dict[str, Any]) -> None:
    for column, allowed in spec.choices.items():
        value = values.get(column)
        if value is not None and value not in allowed:
            options = ", ".join(f'"{option}"' for option in allowed)
            raise ValidationError(f"{column} must be one of {options}")


class EntityStore:
    """CRUD for income, expenses, ledger rows and debts, scoped by user."""

    def __init__(self, db: Session, migrator: Optional[SchemaMigrator] = None):
        self.db = db
        self.migrator = migrator or SchemaMigrator.for_session(db)

    def with_schema_retry(self, description: str, operation: Callable[[], T]) -> T:
        """
        Run ``operation``; if it fails because schema is missing, run the
        migrator and retry exactly once.
        """
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.db.rollback()
            error = translate_db_error(exc, description)
            if not isinstance(error, SchemaMissingError):
                raise error from exc
            logger.warning("%s hit missing schema, running migrator before retry: %s", description, exc)

        self.migrator.create_all_tables()
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_db_error(exc, description) from exc

    def ensure_user(self, user_id: str) -> None:
        """Fail with a clear diagnostic before writing rows for an unknown user."""
        exists = self.with_schema_retry(
            "check user",
            lambda: self.db.query(User.id).filter(User.id == user_id).first(),
        )
        if not exists:
            logger.error("User %s not found in database", user_id)
            raise NotFoundError(f"User with ID {user_id} does not exist in database")

    def validate_create(self, entity: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Apply defaults and check required fields and enumerated values."""
        spec = get_spec(entity)
        values = {column: value for column, value in payload.items() if value is not None}
        for column, default in spec.defaults.items():
            if _is_blank(values.get(column)):
                values[column] = default

        missing = [column for column in spec.required if _is_blank(values.get(column))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        values["amount"] = _check_amount(values["amount"])
        _check_choices(spec, values)
        return values

    def validate_update(self, entity: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Keep only updatable fields and check the ones supplied."""
        spec = get_spec(entity)
        values = {column: value for column, value in changes.items() if column in spec.updatable}
        if "amount" in values:
            values["amount"] = _check_amount(values["amount"])
        for column in spec.required:
            if column in values and _is_blank(values[column]):
                raise ValidationError(f"{column} cannot be empty")
        _check_choices(spec, values)
        return values

    def create(self, entity: str, user_id: str, payload: Dict[str, Any], validated: bool = False):
        """Insert a row owned by ``user_id`` and return it."""
        spec = get_spec(entity)
        values = dict(payload) if validated else self.validate_create(entity, payload)
        values["id"] = values.get("id") or generate_id()
        values["user_id"] = user_id
        columns = set(spec.model.__table__.columns.keys())
        row_values = {column: value for column, value in values.items() if column in columns}

        def insert():
            row = spec.model(**row_values)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row

        row = self.with_schema_retry(f"create {entity}", insert)
        logger.info("Created %s %s for user %s", entity, row.id, user_id)
        return row

    def _scoped(self, model, entity_id: str, user_id: str, match: Optional[Dict[str, Any]]):
        query = self.db.query(model).filter(model.id == entity_id, model.user_id == user_id)
        for column, value in (match or {}).items():
            query = query.filter(getattr(model, column) == value)
        return query

    def update(self, entity: str, entity_id: str, user_id: str, changes: Dict[str, Any],
               validated: bool = False, match: Optional[Dict[str, Any]] = None) -> int:
        """
        Apply a partial update; returns the number of rows affected (0 is not an error).

        ``match`` adds equality conditions on top of ``(id, user_id)``.
        """
        spec = get_spec(entity)
        values = dict(changes) if validated else self.validate_update(entity, changes)
        if not values:
            return 0
        values["updated_at"] = datetime.now(timezone.utc).replace(tzinfo=None)
        model = spec.model

        def apply():
            count = self._scoped(model, entity_id, user_id, match).update(values, synchronize_session=False)
            self.db.commit()
            return count

        count = self.with_schema_retry(f"update {entity}", apply)
        logger.debug("Updated %s %s for user %s (%d row(s))", entity, entity_id, user_id, count)
        return count

    def delete(self, entity: str, entity_id: str, user_id: str,
               match: Optional[Dict[str, Any]] = None) -> int:
        """Hard delete scoped by ``(id, user_id)``; returns the affected row count."""
        model = get_spec(entity).model

        def remove():
            count = self._scoped(model, entity_id, user_id, match).delete(synchronize_session=False)
            self.db.commit()
            return count

        count = self.with_schema_retry(f"delete {entity}", remove)
        logger.debug("Deleted %s %s for user %s (%d row(s))", entity, entity_id, user_id, count)
        return count

    def get(self, entity: str, entity_id: str, user_id: str):
        """Fetch one row owned by ``user_id`` or None."""
        model = get_spec(entity).model
        return self.with_schema_retry(
            f"get {entity}",
            lambda: self._scoped(model, entity_id, user_id, None).first(),
        )

    def read(self, entity: str, user_id: str, filters: Optional[Dict[str, Any]] = None) -> List:
        """All rows owned by ``user_id``, newest first."""
        spec = get_spec(entity)
        model = spec.model
        filters = {column: value for column, value in (filters or {}).items() if value is not None}
        unknown = [column for column in filters if column not in spec.filterable]
        if unknown:
            raise ValidationError(f"Cannot filter {entity} by: {', '.join(unknown)}")

        def select():
            query = self.db.query(model).filter(model.user_id == user_id)
            for column, value in filters.items():
                query = query.filter(getattr(model, column) == value)
            return query.order_by(model.date.desc(), model.created_at.desc()).all()

        return self.with_schema_retry(f"read {entity}", select)
