"""
Budget period domain values.

A budget runs in weekly or monthly cycles anchored on a user-configured
cycle-start day:
  WEEKLY  - week_start_day 0..6 (0 = Sunday)
  MONTHLY - month_start_day 1..28 (capped so every month has that day)

Precondition policy (shared with recurrence.py):
  strict=True  - out-of-range start day raises PeriodConfigError
  strict=False - value is clamped into range and a warning is logged
"""
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from finsched.utils.dates import ONE_DAY, start_of_day
from finsched.utils.validation import (
    WEEK_START_RANGE, MONTH_START_RANGE,
    validate_week_start_day, validate_month_start_day, clamp,
)

logger = logging.getLogger(__name__)


class PeriodType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class PeriodConfigError(ValueError):
    pass


@dataclass(frozen=True)
class BudgetPeriodConfig:
    period_type: PeriodType
    week_start_day: int = 0  # WEEKLY only
    month_start_day: int = 1  # MONTHLY only

    @classmethod
    def weekly(cls, week_start_day: int = 0) -> "BudgetPeriodConfig":
        return cls(PeriodType.WEEKLY, week_start_day=week_start_day)

    @classmethod
    def monthly(cls, month_start_day: int = 1) -> "BudgetPeriodConfig":
        return cls(PeriodType.MONTHLY, month_start_day=month_start_day)


@dataclass(frozen=True)
class PeriodWindow:
    period_type: PeriodType
    period_start: datetime
    period_end: datetime  # inclusive, last microsecond of the final day
    days_until_reset: int

    @property
    def reset_at(self) -> datetime:
        """Start of the first day of the next period."""
        return start_of_day(self.period_end) + ONE_DAY

    @property
    def total_days(self) -> int:
        return (self.reset_at - self.period_start).days

    def days_elapsed(self, now: datetime) -> int:
        """Whole days of the period already behind `now`, capped at total_days."""
        elapsed = (start_of_day(now) - self.period_start).days
        return max(0, min(self.total_days, elapsed))

    def contains(self, instant: datetime) -> bool:
        return self.period_start <= instant <= self.period_end


def validate_period_config(config: BudgetPeriodConfig, strict: bool = True) -> BudgetPeriodConfig:
    """Check the active start-day field; return the config (clamped when lenient)."""
    period_type = PeriodType(config.period_type)

    if period_type is PeriodType.WEEKLY:
        ok, error = validate_week_start_day(config.week_start_day)
        if ok:
            return config
        if strict:
            raise PeriodConfigError(error)
        fixed = clamp(int(config.week_start_day), WEEK_START_RANGE)
        logger.warning(
            "week_start_day=%r out of range, clamped to %d", config.week_start_day, fixed,
        )
        return replace(config, period_type=period_type, week_start_day=fixed)

    ok, error = validate_month_start_day(config.month_start_day)
    if ok:
        return config
    if strict:
        raise PeriodConfigError(error)
    fixed = clamp(int(config.month_start_day), MONTH_START_RANGE)
    logger.warning(
        "month_start_day=%r out of range, clamped to %d", config.month_start_day, fixed,
    )
    return replace(config, period_type=period_type, month_start_day=fixed)
