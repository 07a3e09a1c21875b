"""
Recurring expense / bill domain values.

Frequencies: WEEKLY, MONTHLY, QUARTERLY, YEARLY.

Urgency tiers (first match wins):
  OVERDUE    days_until_due <= 0
  DUE_SOON   1..3
  THIS_WEEK  4..7
  UPCOMING   > 7

PERIOD_DAYS are fixed approximations for progress bars, not billing-accurate
lengths; COST_MULTIPLIER turns one payment into an annual cost.
"""
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

logger = logging.getLogger(__name__)


class Frequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class UrgencyTier(str, Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    THIS_WEEK = "this_week"
    UPCOMING = "upcoming"

    @property
    def label(self) -> str:
        return URGENCY_LABELS[self]


class CostTier(str, Enum):
    SIGNIFICANT = "significant"
    MODERATE = "moderate"
    SMALL = "small"


URGENCY_LABELS = {
    UrgencyTier.OVERDUE: "Overdue",
    UrgencyTier.DUE_SOON: "Due Soon",
    UrgencyTier.THIS_WEEK: "This Week",
    UrgencyTier.UPCOMING: "Upcoming",
}

# Upper bound (inclusive) of days_until_due for each tier, in priority order
URGENCY_THRESHOLDS = (
    (UrgencyTier.OVERDUE, 0),
    (UrgencyTier.DUE_SOON, 3),
    (UrgencyTier.THIS_WEEK, 7),
)

PERIOD_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.MONTHLY: 30,
    Frequency.QUARTERLY: 90,
    Frequency.YEARLY: 365,
}

COST_MULTIPLIER = {
    Frequency.WEEKLY: 52,
    Frequency.MONTHLY: 12,
    Frequency.QUARTERLY: 4,
    Frequency.YEARLY: 1,
}

# Calendar step used when a payment is made and the next one is scheduled
ADVANCE_MONTHS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}

# Annual-cost thresholds (exclusive lower bounds) for cost insight
COST_TIER_THRESHOLDS = (
    (CostTier.SIGNIFICANT, 1200),
    (CostTier.MODERATE, 600),
)

REFERENCE_ANNUAL_BUDGET = 50000


class RecurrenceConfigError(ValueError):
    pass


@dataclass(frozen=True)
class RecurrenceConfig:
    frequency: Frequency
    next_expected_date: date  # time-of-day ignored
    amount: Decimal = Decimal("0")

    @property
    def due_date(self) -> date:
        if isinstance(self.next_expected_date, datetime):
            return self.next_expected_date.date()
        return self.next_expected_date


@dataclass(frozen=True)
class CostProjection:
    annual_cost: float
    monthly_average: float
    weekly_average: float
    daily_average: float


@dataclass(frozen=True)
class RecurrenceStatus:
    days_until_due: int
    urgency_tier: UrgencyTier
    period_progress_percent: float
    annual_cost: float
    monthly_average: float
    weekly_average: float
    daily_average: float
    status_text: str

    @property
    def is_overdue(self) -> bool:
        return self.urgency_tier is UrgencyTier.OVERDUE

    @property
    def costs(self) -> CostProjection:
        return CostProjection(
            annual_cost=self.annual_cost,
            monthly_average=self.monthly_average,
            weekly_average=self.weekly_average,
            daily_average=self.daily_average,
        )


def validate_recurrence_config(config: RecurrenceConfig, strict: bool = True) -> RecurrenceConfig:
    """Check frequency and amount; return the config (amount clamped to 0 when lenient)."""
    frequency = Frequency(config.frequency)
    try:
        amount = Decimal(str(config.amount))
    except InvalidOperation as e:
        raise RecurrenceConfigError(f"amount is not a number: {config.amount!r}") from e
    if not amount.is_finite():
        raise RecurrenceConfigError(f"amount must be a finite number, got {config.amount!r}")
    if amount >= 0:
        return replace(config, frequency=frequency, amount=amount)
    if strict:
        raise RecurrenceConfigError(f"amount must be >= 0, got {config.amount}")
    logger.warning("Negative recurring amount %s clamped to 0", config.amount)
    return replace(config, frequency=frequency, amount=Decimal("0"))
