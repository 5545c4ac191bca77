import json
from datetime import datetime
from functools import reduce
from typing import Any, Dict, Iterable, Optional, Tuple
from uuid import uuid4

from budgetr.domain import DEFAULT_PRIORITY, UNCATEGORIZED, ExpenditureRecord, Settings
from budgetr.functional import parse_amount, parse_datetime


def parse_record(raw: Dict[str, Any], now: Optional[datetime] = None) -> ExpenditureRecord:
    """Build a record from loosely-typed data (seed files, form input, API rows).

    Missing or malformed fields fall back to defaults instead of failing:
    amount -> 0, category -> "Uncategorized", priority -> 99,
    date -> created_at, and created_at -> now.
    """
    created_at = parse_datetime(raw.get("created_at")).get_or_else(None) or now or datetime.now()
    attributed = parse_datetime(raw.get("date")).get_or_else(None) or created_at

    priority = parse_amount(raw.get("priority")).map(int).get_or_else(DEFAULT_PRIORITY)

    return ExpenditureRecord(
        id=str(raw.get("id") or uuid4()),
        description=str(raw.get("description") or "").strip(),
        amount=parse_amount(raw.get("amount")).get_or_else(0.0),
        category=str(raw.get("category") or "").strip() or UNCATEGORIZED,
        priority=priority,
        date=attributed,
        created_at=created_at,
    )


def record_to_dict(r: ExpenditureRecord) -> Dict[str, Any]:
    return {
        "id": r.id,
        "description": r.description,
        "amount": r.amount,
        "category": r.category,
        "priority": r.priority,
        "date": r.date.isoformat() if r.date else None,
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }


def parse_settings(raw: Dict[str, Any]) -> Settings:
    return Settings(
        frequency=str(raw.get("frequency") or Settings.frequency),
        net_monthly_income=parse_amount(raw.get("netMonthlyIncome")).get_or_else(0.0),
        current_savings=parse_amount(raw.get("currentSavings")).get_or_else(0.0),
    )


def load_seed(path: str) -> Tuple[Tuple[ExpenditureRecord, ...], Dict[str, Any]]:
    """Read demo data: {"expenditures": [...], "settings": {...}}."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = tuple(parse_record(r) for r in data.get("expenditures", []))
    settings = dict(data.get("settings", {}))

    return records, settings


def add_record(
    records: Tuple[ExpenditureRecord, ...], r: ExpenditureRecord
) -> Tuple[ExpenditureRecord, ...]:
    return records + (r,)


def delete_record(
    records: Tuple[ExpenditureRecord, ...], record_id: str
) -> Tuple[ExpenditureRecord, ...]:
    return tuple(r for r in records if r.id != record_id)


def sort_by_priority(records: Tuple[ExpenditureRecord, ...]) -> Tuple[ExpenditureRecord, ...]:
    return tuple(sorted(records, key=lambda r: r.priority))


def total_monthly(records: Iterable[ExpenditureRecord]) -> float:
    return reduce(lambda acc, r: acc + parse_amount(r.amount).get_or_else(0.0), records, 0.0)
