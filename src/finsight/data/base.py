"""Abstract data provider interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from finsight.domain.entities import Budget, Category, SavingsGoal, Transaction, Wallet


class DataProvider(ABC):
    """Source of the records the analytics run on.

    Implementations hand back records already scoped to a single user; no
    authorization happens past this point.
    """

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions."""
        pass

    @abstractmethod
    def list_wallets(self) -> list[Wallet]:
        """List all wallets."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets."""
        pass

    @abstractmethod
    def list_goals(self) -> list[SavingsGoal]:
        """List all savings goals."""
        pass
