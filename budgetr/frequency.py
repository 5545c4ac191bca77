"""Conversion between the monthly base unit and display frequencies.

Every stored amount is monthly. A display frequency only ever scales a value
once, right before it is shown.
"""
from typing import Optional, Union

from budgetr.domain import Frequency

FrequencyLike = Union[Frequency, str, None]

MULTIPLIERS = {
    Frequency.MONTH: 1.0,
    Frequency.YEAR: 12.0,
    Frequency.BIWEEKLY: 12 / 26,  # 26 biweekly periods per year
    Frequency.WEEKLY: 12 / 52,    # 52 weeks per year
}

LABELS = {
    Frequency.MONTH: "per month",
    Frequency.YEAR: "per year",
    Frequency.BIWEEKLY: "every two weeks",
    Frequency.WEEKLY: "per week",
}


def parse_frequency(value: FrequencyLike) -> Optional[Frequency]:
    """Case-insensitive lookup; None for anything unrecognized."""
    if isinstance(value, Frequency):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Frequency(value.strip().lower())
    except ValueError:
        return None


def normalize_frequency(value: FrequencyLike) -> str:
    """Canonical lowercase value, "month" for anything unrecognized."""
    return (parse_frequency(value) or Frequency.MONTH).value


def multiplier_for(frequency: FrequencyLike) -> float:
    # Unknown values fall back to the monthly factor instead of raising.
    return MULTIPLIERS.get(parse_frequency(frequency), 1.0)


def convert_monthly_amount(amount: float, frequency: FrequencyLike) -> float:
    return amount * multiplier_for(frequency)


def frequency_label(frequency: FrequencyLike) -> str:
    return LABELS.get(parse_frequency(frequency), LABELS[Frequency.MONTH])


def format_money(amount: Optional[float], symbol: str = "$") -> str:
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
