"""Mapper functions to convert raw data records into domain entities.

Records arrive from the data provider as plain mappings (decoded JSON rows).
This layer validates them once, so the analytics can trust every entity it
receives.
"""

import re
from decimal import Decimal
from typing import Any, Mapping, Optional

from finsight.domain import entities as domain
from finsight.domain.errors import ValidationError, invalid_field, missing_field
from finsight.utils.amount_parser import parse_amount
from finsight.utils.date_parser import to_datetime

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_TRUE_VALUES = {"true", "1", "yes", "y", "sim"}
_FALSE_VALUES = {"false", "0", "no", "n", "nao", "não", ""}


def _require(record: Mapping[str, Any], kind: str, field: str) -> Any:
    value = record.get(field)
    if value is None:
        raise ValidationError(missing_field(kind, field))
    return value


def _amount(record: Mapping[str, Any], kind: str, field: str):
    value = _require(record, kind, field)
    try:
        return parse_amount(value)
    except ValueError as e:
        raise ValidationError(invalid_field(kind, field, value, str(e))) from e


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _flag(record: Mapping[str, Any], kind: str, field: str) -> bool:
    value = record.get(field)
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES | _FALSE_VALUES:
        return value.strip().lower() in _TRUE_VALUES
    raise ValidationError(invalid_field(kind, field, value, "expected a boolean"))


def transaction_from_record(record: Mapping[str, Any]) -> domain.Transaction:
    """Convert a raw transaction record into a Transaction entity.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    kind = "transaction"
    amount = _amount(record, kind, "amount")
    if amount < 0:
        raise ValidationError(invalid_field(kind, "amount", record["amount"], "must not be negative"))

    raw_type = _require(record, kind, "type")
    try:
        txn_type = domain.TransactionType(str(raw_type).strip().lower())
    except ValueError as e:
        raise ValidationError(
            invalid_field(kind, "type", raw_type, "expected 'income' or 'expense'")
        ) from e

    raw_date = _require(record, kind, "date")
    try:
        txn_date = to_datetime(raw_date)
    except ValueError as e:
        raise ValidationError(invalid_field(kind, "date", raw_date, str(e))) from e

    return domain.Transaction(
        amount=amount,
        type=txn_type,
        date=txn_date,
        description=_optional_str(record.get("description")),
        is_recurring=_flag(record, kind, "is_recurring"),
        recurrence_interval=_optional_str(record.get("recurrence_interval")),
        category_id=_optional_str(record.get("category_id")),
        id=_optional_str(record.get("id")),
        wallet_id=_optional_str(record.get("wallet_id")),
    )


def wallet_from_record(record: Mapping[str, Any]) -> domain.Wallet:
    """Convert a raw wallet record into a Wallet entity."""
    return domain.Wallet(
        balance=_amount(record, "wallet", "balance"),
        id=_optional_str(record.get("id")),
        name=_optional_str(record.get("name")),
    )


def category_from_record(record: Mapping[str, Any]) -> domain.Category:
    """Convert a raw category record into a Category entity."""
    kind = "category"
    category_type = record.get("type")
    bucket = record.get("bucket")
    try:
        return domain.Category(
            id=str(_require(record, kind, "id")),
            name=str(_require(record, kind, "name")),
            type=domain.TransactionType(category_type) if category_type else None,
            bucket=domain.Bucket(bucket) if bucket else None,
        )
    except ValueError as e:
        if isinstance(e, ValidationError):
            raise
        raise ValidationError(
            invalid_field(kind, "type/bucket", (category_type, bucket), str(e))
        ) from e


def budget_from_record(record: Mapping[str, Any]) -> domain.Budget:
    """Convert a raw budget record into a Budget entity."""
    kind = "budget"
    month = str(_require(record, kind, "month"))
    if not _MONTH_PATTERN.match(month):
        raise ValidationError(invalid_field(kind, "month", month, "expected YYYY-MM"))

    amount = _amount(record, kind, "amount")
    if amount < 0:
        raise ValidationError(invalid_field(kind, "amount", record["amount"], "must not be negative"))

    return domain.Budget(
        category_id=str(_require(record, kind, "category_id")),
        amount=amount,
        month=month,
    )


def goal_from_record(record: Mapping[str, Any]) -> domain.SavingsGoal:
    """Convert a raw savings goal record into a SavingsGoal entity.

    ``current_amount`` defaults to zero and ``deadline`` is optional.
    """
    kind = "goal"
    target = _amount(record, kind, "target_amount")
    current = Decimal("0")
    if record.get("current_amount") is not None:
        current = _amount(record, kind, "current_amount")
    for field, value in (("target_amount", target), ("current_amount", current)):
        if value < 0:
            raise ValidationError(invalid_field(kind, field, record[field], "must not be negative"))

    deadline = None
    raw_deadline = record.get("deadline")
    if raw_deadline is not None:
        try:
            deadline = to_datetime(raw_deadline)
        except ValueError as e:
            raise ValidationError(invalid_field(kind, "deadline", raw_deadline, str(e))) from e

    return domain.SavingsGoal(
        name=str(_require(record, kind, "name")),
        target_amount=target,
        current_amount=current,
        deadline=deadline,
        id=_optional_str(record.get("id")),
    )
