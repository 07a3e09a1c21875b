"""
Budget period calculator.

compute_window() answers "which cycle is the budget in at `now`":
  WEEKLY  - back up to the most recent week_start_day (today counts)
  MONTHLY - month_start_day of this month, or of the previous month when
            that day has not been reached yet
period_end is the last instant of the cycle's final day, and
days_until_reset counts from `now` to the end of the reset day, rounded up.

The budget helpers below resolve a Budget entity into a config (falling back
to the user-level cycle start), total its transactions for a window and
compute spent/remaining/alert figures for progress bars.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable

from finsched.config import Settings, get_settings
from finsched.domain.entities import Budget, Transaction, TransactionType
from finsched.domain.period import (
    BudgetPeriodConfig, PeriodType, PeriodWindow, validate_period_config,
)
from finsched.utils.dates import (
    ONE_DAY, add_months, ceil_days, end_of_day, start_of_day, sunday_weekday,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BudgetProgress:
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    over_by: Decimal
    spent_percent: float
    alert_pct: float

    @property
    def is_over(self) -> bool:
        return self.over_by > 0

    @property
    def should_alert(self) -> bool:
        return self.amount > 0 and self.spent_percent >= self.alert_pct


def compute_window(
    config: BudgetPeriodConfig,
    now: datetime,
    settings: Settings | None = None,
) -> PeriodWindow:
    """Current budget period containing `now`. Pure; `now` is never read from a clock."""
    settings = settings or get_settings()
    config = validate_period_config(config, strict=settings.STRICT_PRECONDITIONS)

    if config.period_type == PeriodType.WEEKLY:
        period_start, period_end = _weekly_bounds(config.week_start_day, now)
    else:
        period_start, period_end = _monthly_bounds(config.month_start_day, now)

    return PeriodWindow(
        period_type=PeriodType(config.period_type),
        period_start=period_start,
        period_end=period_end,
        days_until_reset=ceil_days(period_end + ONE_DAY - now),
    )


def _weekly_bounds(week_start_day: int, now: datetime) -> tuple[datetime, datetime]:
    days_since_start = (sunday_weekday(now) - week_start_day + 7) % 7
    period_start = start_of_day(now) - timedelta(days=days_since_start)
    period_end = end_of_day(period_start + timedelta(days=6))
    return period_start, period_end


def _monthly_bounds(month_start_day: int, now: datetime) -> tuple[datetime, datetime]:
    candidate = start_of_day(now).replace(day=month_start_day)
    if candidate > now:
        # configured day not reached yet: the cycle began last month
        logger.debug("month_start_day=%d after %s, rolling back a month", month_start_day, now)
        candidate = add_months(candidate, -1)
    period_end = end_of_day(add_months(candidate, 1) - ONE_DAY)
    return candidate, period_end


def previous_window(
    config: BudgetPeriodConfig,
    window: PeriodWindow,
    settings: Settings | None = None,
) -> PeriodWindow:
    """The cycle right before `window`, as seen from its own last instant."""
    prev_end = window.period_start - timedelta(microseconds=1)
    return compute_window(config, prev_end, settings)


# ---------------------------------------------------------------------------
# Budget entity helpers
# ---------------------------------------------------------------------------


def period_config_for_budget(budget: Budget, settings: Settings | None = None) -> BudgetPeriodConfig:
    """Budget's own cycle start, else the user-level default from settings."""
    settings = settings or get_settings()
    if budget.period == PeriodType.WEEKLY:
        start = budget.week_start_day
        if start is None:
            start = settings.DEFAULT_WEEK_START_DAY
        return BudgetPeriodConfig.weekly(start)

    start = budget.month_start_day
    if start is None:
        start = settings.DEFAULT_MONTH_START_DAY
    return BudgetPeriodConfig.monthly(start)


def compute_budget_window(
    budget: Budget,
    now: datetime,
    settings: Settings | None = None,
) -> PeriodWindow:
    settings = settings or get_settings()
    return compute_window(period_config_for_budget(budget, settings), now, settings)


def period_spent(
    transactions: Iterable[Transaction],
    window: PeriodWindow,
    categories: Iterable[str] | None = None,
) -> Decimal:
    """
    Total expense amount dated inside the window (bounds inclusive).

    Amounts are counted by magnitude so feeds that sign expenses negative
    give the same total. With `categories`, only matching transactions count.
    """
    wanted = set(categories) if categories else None
    first_day = window.period_start.date()
    last_day = window.period_end.date()

    total = Decimal("0")
    for tx in transactions:
        if tx.type != TransactionType.EXPENSE:
            continue
        if wanted is not None and tx.category not in wanted:
            continue
        if first_day <= tx.date <= last_day:
            total += abs(tx.amount)
    return total


def compute_budget_progress(
    budget: Budget,
    spent: Decimal | None = None,
    settings: Settings | None = None,
) -> BudgetProgress:
    """
    Spent / remaining figures for a budget's progress bar.

    Args:
        spent: period total; defaults to the budget's own `spent` field

    spent_percent is capped at 100 and is 0 for a zero allocation.
    """
    settings = settings or get_settings()
    amount = budget.amount
    spent = budget.spent if spent is None else Decimal(spent)

    if amount > 0:
        spent_percent = min(float(spent / amount) * 100, 100.0)
    else:
        spent_percent = 0.0

    alert_pct = budget.alert_pct if budget.alert_pct is not None else settings.BUDGET_ALERT_PCT

    return BudgetProgress(
        amount=amount,
        spent=spent,
        remaining=max(Decimal("0"), amount - spent),
        over_by=max(Decimal("0"), spent - amount),
        spent_percent=spent_percent,
        alert_pct=float(alert_pct),
    )
