"""
Recurring expense / bill tracker.

compute_status() derives everything a bill card shows from a frequency, the
next expected date and the amount: signed days until due, urgency tier,
progress through the billing period and annual/monthly/weekly/daily cost.
Pure: "now" is passed in by the caller.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable

from finsched.config import Settings, get_settings
from finsched.domain.entities import RecurringExpense
from finsched.domain.recurrence import (
    ADVANCE_MONTHS, COST_MULTIPLIER, COST_TIER_THRESHOLDS, PERIOD_DAYS,
    REFERENCE_ANNUAL_BUDGET, URGENCY_THRESHOLDS,
    CostProjection, CostTier, Frequency, RecurrenceConfig, RecurrenceStatus, UrgencyTier,
    validate_recurrence_config,
)
from finsched.utils.dates import add_months, at_midnight, ceil_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedExpense:
    expense: RecurringExpense
    status: RecurrenceStatus


@dataclass(frozen=True)
class RecurrenceSummary:
    items: list[TrackedExpense] = field(default_factory=list)  # soonest due first
    counts: dict[UrgencyTier, int] = field(default_factory=dict)
    totals: dict[UrgencyTier, Decimal] = field(default_factory=dict)
    total_amount: Decimal = Decimal("0")
    annual_cost: float = 0.0
    next_due_date: date | None = None

    @property
    def total_expenses(self) -> int:
        return len(self.items)

    def by_tier(self, tier: UrgencyTier) -> list[TrackedExpense]:
        return [i for i in self.items if i.status.urgency_tier is tier]


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def days_until_due(next_expected_date: date, now: datetime) -> int:
    """Signed whole days from `now` to the due date's midnight, rounded up.

    0 means due today, negative means overdue.
    """
    return ceil_days(at_midnight(next_expected_date, now) - now)


def classify_urgency(days: int) -> UrgencyTier:
    for tier, upper in URGENCY_THRESHOLDS:
        if days <= upper:
            return tier
    return UrgencyTier.UPCOMING


def period_progress_percent(days: int, frequency: Frequency) -> float:
    if days <= 0:
        return 100.0
    total = PERIOD_DAYS[Frequency(frequency)]
    progress = (total - days) / total * 100
    return max(0.0, min(100.0, progress))


def project_costs(amount, frequency: Frequency) -> CostProjection:
    annual = float(amount) * COST_MULTIPLIER[Frequency(frequency)]
    return CostProjection(
        annual_cost=annual,
        monthly_average=annual / 12,
        weekly_average=annual / 52,
        daily_average=annual / 365,
    )


def status_text(days: int) -> str:
    if days <= 0:
        return "Overdue"
    if days == 1:
        return "Due tomorrow"
    if days <= 3:
        return f"Due in {days} days"
    if days <= 7:
        return "Due this week"
    return f"Due in {days} days"


def cost_tier(annual_cost: float) -> CostTier:
    for tier, lower in COST_TIER_THRESHOLDS:
        if annual_cost > lower:
            return tier
    return CostTier.SMALL


def share_of_annual_budget(annual_cost: float, annual_budget: float = REFERENCE_ANNUAL_BUDGET) -> float:
    """Annual cost as a percent of a yearly budget (a $50k reference by default)."""
    if annual_budget <= 0:
        raise ValueError("annual_budget must be > 0")
    return annual_cost / annual_budget * 100


def advance_due_date(next_expected_date: date, frequency: Frequency) -> date:
    """Due date of the following payment, calendar-accurate.

    Month-based steps clip to the month's last day (Jan 31 -> Feb 28/29).
    """
    frequency = Frequency(frequency)
    if frequency is Frequency.WEEKLY:
        return next_expected_date + timedelta(days=7)
    return add_months(next_expected_date, ADVANCE_MONTHS[frequency])


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


def compute_status(
    config: RecurrenceConfig,
    now: datetime,
    settings: Settings | None = None,
) -> RecurrenceStatus:
    settings = settings or get_settings()
    config = validate_recurrence_config(config, strict=settings.STRICT_PRECONDITIONS)

    days = days_until_due(config.due_date, now)
    costs = project_costs(config.amount, config.frequency)

    return RecurrenceStatus(
        days_until_due=days,
        urgency_tier=classify_urgency(days),
        period_progress_percent=period_progress_percent(days, config.frequency),
        annual_cost=costs.annual_cost,
        monthly_average=costs.monthly_average,
        weekly_average=costs.weekly_average,
        daily_average=costs.daily_average,
        status_text=status_text(days),
    )


def config_for_expense(expense: RecurringExpense) -> RecurrenceConfig:
    return RecurrenceConfig(
        frequency=expense.frequency,
        next_expected_date=expense.next_expected_date,
        amount=expense.amount,
    )


def summarize(
    expenses: Iterable[RecurringExpense],
    now: datetime,
    settings: Settings | None = None,
) -> RecurrenceSummary:
    """
    Portfolio view for the recurring expenses list.

    Every tier is present in `counts` and `totals`, even when empty.
    """
    settings = settings or get_settings()
    items = [
        TrackedExpense(expense=e, status=compute_status(config_for_expense(e), now, settings))
        for e in expenses
    ]
    items.sort(key=lambda i: i.status.days_until_due)

    counts = {tier: 0 for tier in UrgencyTier}
    totals = {tier: Decimal("0") for tier in UrgencyTier}
    for item in items:
        counts[item.status.urgency_tier] += 1
        totals[item.status.urgency_tier] += item.expense.amount

    logger.debug("Summarized %d recurring expense(s)", len(items))

    return RecurrenceSummary(
        items=items,
        counts=counts,
        totals=totals,
        total_amount=sum((i.expense.amount for i in items), Decimal("0")),
        annual_cost=sum((i.status.annual_cost for i in items), 0.0),
        next_due_date=items[0].expense.next_expected_date if items else None,
    )
