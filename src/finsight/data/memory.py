"""In-memory data provider."""

from typing import Iterable, Optional

from finsight.data.base import DataProvider
from finsight.domain.entities import Budget, Category, SavingsGoal, Transaction, Wallet


class InMemoryProvider(DataProvider):
    """Data provider over records already held in memory."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        wallets: Optional[Iterable[Wallet]] = None,
        categories: Optional[Iterable[Category]] = None,
        budgets: Optional[Iterable[Budget]] = None,
        goals: Optional[Iterable[SavingsGoal]] = None,
    ):
        self._transactions = tuple(transactions or ())
        self._wallets = tuple(wallets or ())
        self._categories = tuple(categories or ())
        self._budgets = tuple(budgets or ())
        self._goals = tuple(goals or ())

    def list_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def list_wallets(self) -> list[Wallet]:
        return list(self._wallets)

    def list_categories(self) -> list[Category]:
        return list(self._categories)

    def list_budgets(self) -> list[Budget]:
        return list(self._budgets)

    def list_goals(self) -> list[SavingsGoal]:
        return list(self._goals)
