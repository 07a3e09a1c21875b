"""
Entities supplied by the data layer (REST payloads).

These models are the deserializer boundary: an unknown frequency, an
unparsable date or an out-of-range cycle-start day fails here with a
pydantic ValidationError, before any calculator runs. Both the API's
camelCase keys and snake_case names are accepted.
"""
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from finsched.domain.period import PeriodType
from finsched.domain.recurrence import Frequency
from finsched.utils.validation import (
    normalize_decimal_input, validate_week_start_day, validate_month_start_day,
)


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


def _parse_date(v):
    """Accept date, datetime or an ISO string (time part ignored)."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str):
        return date_type.fromisoformat(v.strip()[:10])
    return v


def _parse_amount(v):
    if isinstance(v, str):
        return normalize_decimal_input(v)
    if isinstance(v, float):
        return str(v)
    return v


class _Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Budget(_Entity):
    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "category"))
    amount: Decimal = Field(default=Decimal("0"), ge=0, validation_alias=AliasChoices("amount", "allocated"))
    spent: Decimal = Field(default=Decimal("0"), ge=0)
    period: PeriodType = Field(
        default=PeriodType.MONTHLY, validation_alias=AliasChoices("period", "period_type", "periodType"),
    )
    week_start_day: int | None = Field(default=None, validation_alias=AliasChoices("week_start_day", "weekStartDay"))
    month_start_day: int | None = Field(default=None, validation_alias=AliasChoices("month_start_day", "monthStartDay"))
    alert_pct: float | None = Field(default=None, ge=0, le=100, validation_alias=AliasChoices("alert_pct", "alertPct"))
    rollover: bool = Field(default=False, validation_alias=AliasChoices("rollover", "carryOver"))
    categories: list[str] = Field(default_factory=list)

    @field_validator("amount", "spent", mode="before")
    @classmethod
    def normalize_amount(cls, v):
        return _parse_amount(v)

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("week_start_day")
    @classmethod
    def check_week_start_day(cls, v: int | None) -> int | None:
        if v is None:
            return v
        ok, error = validate_week_start_day(v)
        if not ok:
            raise ValueError(error)
        return v

    @field_validator("month_start_day")
    @classmethod
    def check_month_start_day(cls, v: int | None) -> int | None:
        if v is None:
            return v
        ok, error = validate_month_start_day(v)
        if not ok:
            raise ValueError(error)
        return v


class RecurringExpense(_Entity):
    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "pattern_id", "patternId"))
    vendor: str = ""
    amount: Decimal = Field(ge=0)
    frequency: Frequency
    next_expected_date: date_type = Field(validation_alias=AliasChoices("next_expected_date", "nextExpectedDate"))

    @field_validator("amount", mode="before")
    @classmethod
    def normalize_amount(cls, v):
        return _parse_amount(v)

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("next_expected_date", mode="before")
    @classmethod
    def parse_next_expected_date(cls, v):
        return _parse_date(v)


class Transaction(_Entity):
    id: str | None = None
    amount: Decimal
    date: date_type
    type: TransactionType = TransactionType.EXPENSE
    category: str | None = None
    merchant: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def normalize_amount(cls, v):
        return _parse_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return _parse_date(v)
