from collections import defaultdict
from itertools import islice
from typing import Iterable, Iterator, List, Tuple

from budgetr.domain import UNCATEGORIZED, CategoryShare, ExpenditureRecord
from budgetr.frequency import FrequencyLike, convert_monthly_amount
from budgetr.functional import parse_amount


def category_totals(records: Iterable[ExpenditureRecord]) -> List[Tuple[str, float]]:
    """Monthly totals per category, largest first."""
    totals_by_category: dict[str, float] = defaultdict(float)
    for r in records:
        totals_by_category[r.category or UNCATEGORIZED] += parse_amount(r.amount).get_or_else(0.0)

    return sorted(totals_by_category.items(), key=lambda item: item[1], reverse=True)


def top_categories(records: Iterable[ExpenditureRecord], k: int) -> Iterator[Tuple[str, float]]:
    yield from islice(category_totals(records), max(0, k))


def category_breakdown(records: Iterable[ExpenditureRecord], frequency: FrequencyLike) -> List[CategoryShare]:
    """Category shares for display.

    Percentages come from the monthly totals; amounts are converted to the
    display frequency afterwards.
    """
    entries = category_totals(records)
    total = sum(amount for _, amount in entries) or 1

    return [
        CategoryShare(
            category=name,
            amount=convert_monthly_amount(amount, frequency),
            percent=round(amount / total * 100),
        )
        for name, amount in entries
    ]
