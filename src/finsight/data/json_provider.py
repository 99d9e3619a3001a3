"""JSON snapshot data provider."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

from finsight.data.base import DataProvider
from finsight.data.mappers import (
    budget_from_record,
    category_from_record,
    goal_from_record,
    transaction_from_record,
    wallet_from_record,
)
from finsight.domain.entities import Budget, Category, SavingsGoal, Transaction, Wallet
from finsight.domain.errors import (
    NotFoundError,
    ValidationError,
    data_file_not_found,
    malformed_data_file,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFileProvider(DataProvider):
    """Data provider reading a JSON export of a user's records.

    The file holds one object with optional ``transactions``, ``wallets``,
    ``categories``, ``budgets`` and ``goals`` lists. It is read lazily on
    first access and validated as a whole, so a bad record fails the load
    instead of silently skewing a report.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the provider.

        Args:
            path: Path to the JSON snapshot
        """
        self.path = Path(path)
        self._loaded: Optional[dict[str, list]] = None

    def load(self) -> None:
        """Read and validate the snapshot.

        Raises:
            NotFoundError: If the file does not exist
            ValidationError: If the file or one of its records is malformed
        """
        if not self.path.exists():
            raise NotFoundError(data_file_not_found(str(self.path)))

        try:
            with self.path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(malformed_data_file(str(self.path), str(e))) from e

        if not isinstance(raw, dict):
            raise ValidationError(
                malformed_data_file(str(self.path), "top-level value must be an object")
            )

        self._loaded = {
            "transactions": self._map(raw, "transactions", transaction_from_record),
            "wallets": self._map(raw, "wallets", wallet_from_record),
            "categories": self._map(raw, "categories", category_from_record),
            "budgets": self._map(raw, "budgets", budget_from_record),
            "goals": self._map(raw, "goals", goal_from_record),
        }
        logger.info(
            "Loaded %d transactions and %d wallets from %s",
            len(self._loaded["transactions"]),
            len(self._loaded["wallets"]),
            self.path,
        )

    def _map(self, raw: dict[str, Any], key: str, mapper: Callable[[Any], T]) -> list[T]:
        records = raw.get(key)
        if records is None:
            logger.debug("No '%s' list in %s, treating as empty", key, self.path)
            return []
        if not isinstance(records, list):
            raise ValidationError(malformed_data_file(str(self.path), f"'{key}' must be a list"))

        mapped = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValidationError(
                    malformed_data_file(str(self.path), f"{key}[{index}] must be an object")
                )
            try:
                mapped.append(mapper(record))
            except ValidationError as e:
                raise ValidationError(f"{key}[{index}]: {e}") from e
        return mapped

    def _records(self, key: str) -> list:
        if self._loaded is None:
            self.load()
        return list(self._loaded[key])

    def list_transactions(self) -> list[Transaction]:
        return self._records("transactions")

    def list_wallets(self) -> list[Wallet]:
        return self._records("wallets")

    def list_categories(self) -> list[Category]:
        return self._records("categories")

    def list_budgets(self) -> list[Budget]:
        return self._records("budgets")

    def list_goals(self) -> list[SavingsGoal]:
        return self._records("goals")
