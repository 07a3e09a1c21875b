"""Tests for budget period config validation and PeriodWindow helpers"""
import pytest
from datetime import datetime

from finsched.domain.period import (
    BudgetPeriodConfig, PeriodConfigError, PeriodType, PeriodWindow, validate_period_config,
)
from finsched.domain.recurrence import (
    Frequency, RecurrenceConfig, RecurrenceConfigError, validate_recurrence_config,
)


def test_factories():
    assert BudgetPeriodConfig.weekly(2).period_type is PeriodType.WEEKLY
    assert BudgetPeriodConfig.monthly(12).month_start_day == 12


def test_valid_config_is_returned_unchanged():
    config = BudgetPeriodConfig.monthly(28)
    assert validate_period_config(config) is config


def test_inactive_field_is_not_checked():
    # month_start_day is ignored for weekly budgets
    config = BudgetPeriodConfig(PeriodType.WEEKLY, week_start_day=3, month_start_day=99)
    assert validate_period_config(config) is config


@pytest.mark.parametrize("config", [
    BudgetPeriodConfig.weekly(-1),
    BudgetPeriodConfig.weekly(7),
    BudgetPeriodConfig.monthly(0),
    BudgetPeriodConfig.monthly(29),
])
def test_strict_rejects(config):
    with pytest.raises(PeriodConfigError):
        validate_period_config(config, strict=True)


def test_lenient_clamps():
    assert validate_period_config(BudgetPeriodConfig.weekly(-4), strict=False).week_start_day == 0
    assert validate_period_config(BudgetPeriodConfig.monthly(31), strict=False).month_start_day == 28


def test_window_helpers():
    w = PeriodWindow(
        period_type=PeriodType.WEEKLY,
        period_start=datetime(2026, 3, 9),
        period_end=datetime(2026, 3, 15, 23, 59, 59, 999999),
        days_until_reset=6,
    )
    assert w.reset_at == datetime(2026, 3, 16)
    assert w.total_days == 7
    assert w.days_elapsed(datetime(2026, 3, 11, 12, 0)) == 2
    assert w.days_elapsed(datetime(2026, 4, 1)) == 7
    assert w.days_elapsed(datetime(2026, 3, 1)) == 0
    assert w.contains(datetime(2026, 3, 15, 23, 0))
    assert not w.contains(datetime(2026, 3, 16))


def test_recurrence_config_normalizes():
    config = validate_recurrence_config(
        RecurrenceConfig(frequency="yearly", next_expected_date=datetime(2026, 5, 1, 10, 0), amount=12.5)
    )
    assert config.frequency is Frequency.YEARLY
    assert str(config.amount) == "12.5"
    assert config.due_date.isoformat() == "2026-05-01"


def test_recurrence_config_rejects_nan():
    with pytest.raises(RecurrenceConfigError):
        validate_recurrence_config(
            RecurrenceConfig(frequency="weekly", next_expected_date=datetime(2026, 5, 1), amount="NaN"),
            strict=False,
        )
