"""Budget overrun detection and savings goal tracking."""

from typing import Iterable, Mapping, Optional

from finsight.domain.entities import Budget, BudgetAlert, GoalProgress, SavingsGoal, Transaction
from finsight.domain.policy import DEFAULT_GOAL_POLICY, GoalPolicy
from finsight.utils.date_parser import (
    DateLike,
    in_month,
    month_bounds,
    month_key,
    months_between,
    resolve_reference,
)

DEFAULT_CATEGORY_NAME = "Categoria"


def detect_budget_overruns(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    reference_date: Optional[DateLike] = None,
    category_names: Optional[Mapping[str, str]] = None,
) -> list[BudgetAlert]:
    """Report the categories whose spend passed their budget this month.

    Only budgets set for the reference month are checked; a budget is
    exceeded when the spend is strictly greater than its amount.

    Args:
        transactions: Transaction history
        budgets: Category budgets for any month
        reference_date: Month to check (defaults to now)
        category_names: Display names keyed by category ID

    Returns:
        One BudgetAlert per exceeded budget, in budget order
    """
    now = resolve_reference(reference_date)
    bounds = month_bounds(now)
    target_month = month_key(now)
    category_names = category_names or {}

    spent: dict[str, float] = {}
    for txn in transactions:
        if txn.is_expense and txn.category_id is not None and in_month(txn.date, bounds):
            spent[txn.category_id] = spent.get(txn.category_id, 0.0) + float(txn.amount)

    alerts = []
    for budget in budgets:
        if budget.month != target_month:
            continue
        amount = spent.get(budget.category_id, 0.0)
        limit = float(budget.amount)
        if amount > limit:
            alerts.append(
                BudgetAlert(
                    category_id=budget.category_id,
                    category_name=category_names.get(budget.category_id) or DEFAULT_CATEGORY_NAME,
                    spent=amount,
                    budget=limit,
                    exceeded_amount=amount - limit,
                )
            )
    return alerts


def goal_progress(
    goal: SavingsGoal,
    reference_date: Optional[DateLike] = None,
    policy: GoalPolicy = DEFAULT_GOAL_POLICY,
) -> GoalProgress:
    """Work out how far a savings goal is and what it takes to finish it.

    The remaining amount is split evenly over the whole months left until the
    deadline, never fewer than one; a goal without deadline is due within a
    month. The moderate and aggressive tracks scale that monthly deposit to
    finish ahead of time.

    Args:
        goal: Savings goal to evaluate
        reference_date: Instant the months are counted from (defaults to now)
        policy: Deposit track multipliers

    Returns:
        GoalProgress with percentage, remaining amount and deposit tracks
    """
    now = resolve_reference(reference_date)
    target = float(goal.target_amount)
    current = float(goal.current_amount)

    progress = current / target * 100 if target > 0 else 0.0
    remaining = max(0.0, target - current)

    months_left = 1
    if goal.deadline is not None:
        months_left = max(1, months_between(goal.deadline, now))

    base_monthly = remaining / months_left
    return GoalProgress(
        goal_id=goal.id,
        name=goal.name,
        progress=progress,
        remaining=remaining,
        months_left=months_left,
        base_monthly=base_monthly,
        moderate_monthly=base_monthly * policy.moderate_factor,
        aggressive_monthly=base_monthly * policy.aggressive_factor,
        is_finished=remaining == 0,
    )
