from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

UNCATEGORIZED = "Uncategorized"
DEFAULT_PRIORITY = 99


class Frequency(str, Enum):
    MONTH = "month"
    YEAR = "year"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class ExpenditureRecord:
    amount: float                        # monthly base unit
    date: Optional[datetime] = None      # None -> "now" in calculations
    category: str = UNCATEGORIZED
    id: str = ""
    description: str = ""
    priority: int = DEFAULT_PRIORITY
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class GoalInput:
    target_amount: Optional[float]
    target_date: Union[date, datetime, str, None]
    current_savings: float = 0.0
    net_monthly_income: float = 0.0
    use_average_expenses: bool = False


@dataclass(frozen=True)
class GoalProjection:
    months_remaining: int
    amount_remaining: float
    required_monthly: float
    estimated_available_monthly: float
    on_track: bool
    shortfall: float
    average_monthly: float = 0.0


# Values as read from a SettingsStore, defaults applied
@dataclass(frozen=True)
class Settings:
    frequency: str = Frequency.MONTH.value
    net_monthly_income: float = 0.0
    current_savings: float = 0.0


@dataclass(frozen=True)
class DashboardSummary:
    frequency: str
    total_spent: float
    net_income: float
    average_monthly: float
    remaining: float


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: float
    percent: int
