import json
from datetime import datetime
from pathlib import Path

from budgetr.domain import ExpenditureRecord
from budgetr.transforms import (
    add_record,
    delete_record,
    load_seed,
    parse_record,
    parse_settings,
    record_to_dict,
    sort_by_priority,
    total_monthly,
)

NOW = datetime(2025, 5, 1, 9, 0)
SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def test_parse_record_full():
    r = parse_record({
        "id": 7,
        "description": " Rent ",
        "amount": "1450",
        "category": "Housing",
        "priority": "1",
        "date": "2025-04-01",
        "created_at": "2025-04-02T08:00:00",
    })
    assert r.id == "7"
    assert r.description == "Rent"
    assert r.amount == 1450.0
    assert r.category == "Housing"
    assert r.priority == 1
    assert r.date == datetime(2025, 4, 1)
    assert r.created_at == datetime(2025, 4, 2, 8, 0)


def test_parse_record_defaults():
    r = parse_record({"amount": None, "category": "  "}, now=NOW)
    assert r.amount == 0
    assert r.category == "Uncategorized"
    assert r.priority == 99
    assert r.created_at == NOW
    assert r.date == NOW
    assert r.id


def test_parse_record_date_falls_back_to_created_at():
    r = parse_record({"amount": 5, "date": "garbage", "created_at": "2025-01-20"}, now=NOW)
    assert r.date == datetime(2025, 1, 20)


def test_record_to_dict_round_trips_through_parse():
    r = parse_record({"id": "a", "description": "Tea", "amount": 3, "date": "2025-02-01"}, now=NOW)
    assert parse_record(record_to_dict(r)) == r


def test_parse_settings_defaults():
    s = parse_settings({})
    assert s.frequency == "month"
    assert s.net_monthly_income == 0
    assert s.current_savings == 0

    s = parse_settings({"frequency": "weekly", "netMonthlyIncome": "3000", "currentSavings": "n/a"})
    assert s.frequency == "weekly"
    assert s.net_monthly_income == 3000
    assert s.current_savings == 0


def test_add_and_delete_do_not_mutate():
    r1 = ExpenditureRecord(amount=10, id="r1")
    r2 = ExpenditureRecord(amount=20, id="r2")
    records = (r1,)

    added = add_record(records, r2)
    assert added == (r1, r2)
    assert records == (r1,)

    removed = delete_record(added, "r1")
    assert removed == (r2,)
    assert len(added) == 2


def test_sort_by_priority_and_total():
    records = (
        ExpenditureRecord(amount=5, id="a", priority=5),
        ExpenditureRecord(amount=1.5, id="b", priority=1),
        ExpenditureRecord(amount=3, id="c", priority=99),
    )
    assert [r.id for r in sort_by_priority(records)] == ["b", "a", "c"]
    assert total_monthly(records) == 9.5
    assert total_monthly(()) == 0
    assert total_monthly((ExpenditureRecord(amount=None), ExpenditureRecord(amount=4))) == 4


def test_load_seed_from_repo():
    records, settings = load_seed(str(SEED))
    assert len(records) >= 5
    assert settings["frequency"] == "month"
    assert any(r.category == "Uncategorized" for r in records)


def test_load_seed_tmp(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({"expenditures": [{"id": "x", "description": "Coffee", "amount": 4}]}), encoding="utf-8")
    records, settings = load_seed(str(path))
    assert [r.id for r in records] == ["x"]
    assert settings == {}
