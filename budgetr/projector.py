"""Budget projection: average monthly spend and savings goal feasibility.

All functions are pure. "now" is taken as a parameter (defaulting to the
current time) so results can be pinned in tests.
"""
import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, Optional

from budgetr.domain import DashboardSummary, ExpenditureRecord, GoalInput, GoalProjection, Settings
from budgetr.errors import InvalidInput
from budgetr.frequency import convert_monthly_amount
from budgetr.functional import parse_amount, parse_datetime, validate_goal
from budgetr.transforms import total_monthly

logger = logging.getLogger(__name__)


def month_key(d: datetime) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def month_diff(start: datetime, end: datetime) -> int:
    """Calendar month difference, ignoring the day of month.

    month_diff(Jan 15, Mar 2) == 2
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def monthly_totals(records: Iterable[ExpenditureRecord], now: Optional[datetime] = None) -> Dict[str, float]:
    """Sum record amounts per calendar year-month ("YYYY-MM"), oldest first.

    Records with a missing or unparseable date are attributed to the month
    of `now`; a missing amount counts as 0.
    """
    now = now or datetime.now()
    buckets: Dict[str, float] = defaultdict(float)
    for r in records:
        attributed = parse_datetime(r.date).get_or_else(now)
        buckets[month_key(attributed)] += parse_amount(r.amount).get_or_else(0.0)
    return {k: buckets[k] for k in sorted(buckets)}


def estimate_average_monthly(records: Iterable[ExpenditureRecord], now: Optional[datetime] = None) -> float:
    """Average spend over the months that actually contain records.

    Empty months between records are not counted: one record in January
    and one in March average over 2 months, not 3.
    """
    buckets = monthly_totals(records, now)
    if not buckets:
        return 0.0
    total = sum(buckets.values())
    return total / max(1, len(buckets))


def project_goal(
    goal: GoalInput,
    records: Iterable[ExpenditureRecord] = (),
    now: Optional[datetime] = None,
) -> GoalProjection:
    """Project whether a savings goal is reachable by its target date.

    Raises InvalidInput when the goal amount is not positive or the target
    date is missing/unparseable. Nothing is computed in that case.
    """
    checked = validate_goal(goal)
    if checked.is_left():
        raise InvalidInput(checked.get_error())
    goal = checked.get_or_else(goal)

    now = now or datetime.now()
    months_remaining = max(1, abs(month_diff(now, goal.target_date)))
    amount_remaining = max(0.0, goal.target_amount - goal.current_savings)
    required_monthly = amount_remaining / months_remaining

    average_monthly = estimate_average_monthly(records, now) if goal.use_average_expenses else 0.0
    available = max(0.0, goal.net_monthly_income - average_monthly)
    on_track = available >= required_monthly

    logger.debug(
        "goal %.2f by %s: %d months, %.2f/month required, %.2f/month available",
        goal.target_amount, goal.target_date.date(), months_remaining, required_monthly, available,
    )

    return GoalProjection(
        months_remaining=months_remaining,
        amount_remaining=amount_remaining,
        required_monthly=required_monthly,
        estimated_available_monthly=available,
        on_track=on_track,
        shortfall=0.0 if on_track else required_monthly - available,
        average_monthly=average_monthly,
    )


def dashboard_summary(
    records: Iterable[ExpenditureRecord],
    settings: Settings,
    now: Optional[datetime] = None,
) -> DashboardSummary:
    records = tuple(records)
    average_monthly = estimate_average_monthly(records, now)
    freq = settings.frequency

    return DashboardSummary(
        frequency=freq,
        total_spent=convert_monthly_amount(total_monthly(records), freq),
        net_income=convert_monthly_amount(settings.net_monthly_income, freq),
        average_monthly=average_monthly,
        remaining=max(0.0, convert_monthly_amount(settings.net_monthly_income - average_monthly, freq)),
    )
