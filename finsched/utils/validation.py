"""
Data-entry validation for budget cycle and recurring expense forms.

Each check has a tuple-returning form for inline form errors and a raising
form for deserializers.
"""
import re
from decimal import Decimal, InvalidOperation

WEEK_START_RANGE = (0, 6)
MONTH_START_RANGE = (1, 28)


def normalize_decimal_input(value: str) -> str:
    """
    Normalize an amount typed by the user: comma decimal separator becomes a dot

    Example:
        >>> normalize_decimal_input("100,50")
        '100.50'
    """
    return value.strip().replace(",", ".")


def validate_amount(value: str, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Validate a non-negative money amount

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_amount("19.99")
        (True, None)
        >>> validate_amount("-5")
        (False, 'Amount cannot be negative')
    """
    normalized = normalize_decimal_input(value)

    try:
        amount = Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Invalid amount"

    if not amount.is_finite():
        return False, "Invalid amount"
    if amount < 0:
        return False, "Amount cannot be negative"

    pattern = rf"^\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"At most {max_decimal_places} decimal places"

    return True, None


def validate_and_normalize_amount(value: str, max_decimal_places: int = 2) -> str:
    """
    Validate and normalize an amount, raising ValueError on failure
    """
    is_valid, error = validate_amount(value, max_decimal_places)
    if not is_valid:
        raise ValueError(error)
    return normalize_decimal_input(value)


def validate_week_start_day(value: int) -> tuple[bool, str | None]:
    lo, hi = WEEK_START_RANGE
    if not isinstance(value, int) or isinstance(value, bool):
        return False, "Week start day must be a whole number"
    if not lo <= value <= hi:
        return False, f"Week start day must be between {lo} (Sunday) and {hi} (Saturday)"
    return True, None


def validate_month_start_day(value: int) -> tuple[bool, str | None]:
    lo, hi = MONTH_START_RANGE
    if not isinstance(value, int) or isinstance(value, bool):
        return False, "Month start day must be a whole number"
    if not lo <= value <= hi:
        return False, f"Month start day must be between {lo} and {hi}"
    return True, None


def clamp(value: int, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(hi, value))
