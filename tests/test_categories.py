from itertools import islice

import pytest

from budgetr.categories import category_breakdown, category_totals, top_categories
from budgetr.domain import ExpenditureRecord


def make_sample():
    return (
        ExpenditureRecord(amount=300, category="Food"),
        ExpenditureRecord(amount=200, category="Transport"),
        ExpenditureRecord(amount=700, category="Food"),
        ExpenditureRecord(amount=100, category=""),
    )


def test_category_totals_sum_and_order():
    assert category_totals(make_sample()) == [("Food", 1000), ("Transport", 200), ("Uncategorized", 100)]


def test_category_totals_empty():
    assert category_totals([]) == []


def test_top_categories_is_lazy_and_bounded():
    gen = top_categories(make_sample(), k=10)
    assert list(islice(gen, 1)) == [("Food", 1000)]
    assert len(list(top_categories(make_sample(), k=2))) == 2
    assert list(top_categories(make_sample(), k=0)) == []


def test_breakdown_percent_on_monthly_basis_and_converted_amounts():
    shares = category_breakdown(make_sample(), "year")
    food = shares[0]
    assert food.category == "Food"
    assert food.amount == 12000
    assert food.percent == round(1000 / 1300 * 100)
    assert [s.category for s in shares] == ["Food", "Transport", "Uncategorized"]


def test_breakdown_weekly_amounts():
    shares = category_breakdown([ExpenditureRecord(amount=52, category="Gym")], "weekly")
    assert shares[0].amount == pytest.approx(12)
    assert shares[0].percent == 100


def test_missing_amount_counts_as_zero():
    records = (
        ExpenditureRecord(amount=None, category="Food"),
        ExpenditureRecord(amount="25", category="Food"),
        ExpenditureRecord(amount=10, category="Transport"),
    )
    assert category_totals(records) == [("Food", 25), ("Transport", 10)]
    assert category_breakdown(records, "month")[0].percent == round(25 / 35 * 100)
