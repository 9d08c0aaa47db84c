"""Unit-тесты расчёта заработка, статуса выплат и фильтра дат."""
from datetime import date, datetime
from decimal import Decimal

import pytest

from tailorshop.earnings import (
    PAID, PARTIAL, UNPAID,
    Aggregate, aggregate, by_day, by_job, by_worker, daily_breakdown, filter_by_date,
    grand_total, growth_series, item_date, item_value, job_profit, payroll_status, revenue_summary,
)


def _item(worker, qty, price, bonus=0, day=None, job=1):
    return {
        "seamstress_id": worker, "job_id": job,
        "quantity": qty, "unit_price": price, "bonus_amount": bonus,
        "item_date": day,
    }


@pytest.fixture
def items():
    return [
        _item("A", 2, 1000, day=date(2024, 3, 1)),
        _item("A", 1, 500, 200, day=date(2024, 3, 2)),
        _item("A", 3, 300, day=date(2024, 3, 2)),
        _item("B", 10, 150, 50, day=date(2024, 3, 1), job=2),
        _item(None, 4, 250, day=date(2024, 3, 3), job=2),
    ]


class TestItemValue:
    def test_formula(self):
        assert item_value(_item("A", 3, Decimal("1500.50"), Decimal("100"))) == Decimal("4601.50")

    def test_zero_quantity_keeps_bonus(self):
        assert item_value(_item("A", 0, 1000, 250)) == Decimal("250")

    def test_missing_bonus_is_zero(self):
        assert item_value({"quantity": 2, "unit_price": 10}) == Decimal("20")

    def test_large_quantity(self):
        assert item_value(_item("A", 10**9, Decimal("99999.99"))) == Decimal("99999990000000.00")


class TestAggregate:
    def test_worker_example(self, items):
        rows = {a.key: a for a in aggregate(items, by_worker)}
        assert rows["A"].total == Decimal("3600")
        assert rows["A"].count == 3
        assert rows["A"].quantity == 6

    def test_conservation(self, items):
        assigned = [it for it in items if it["seamstress_id"] is not None]
        rows = aggregate(items, by_worker)
        assert sum((a.total for a in rows), Decimal("0")) == grand_total(assigned)

    def test_items_without_worker_excluded(self, items):
        assert None not in {a.key for a in aggregate(items, by_worker)}

    def test_descending_by_total(self, items):
        totals = [a.total for a in aggregate(items, by_worker)]
        assert totals == sorted(totals, reverse=True)

    def test_chronological_by_day(self, items):
        keys = [a.key for a in aggregate(items, by_day, chronological=True)]
        assert keys == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]

    def test_by_job(self, items):
        rows = {a.key: a.total for a in aggregate(items, by_job)}
        assert rows == {1: Decimal("3600"), 2: Decimal("2550")}

    def test_labels(self, items):
        rows = aggregate(items, by_worker, label=lambda it: f"Worker {it['seamstress_id']}")
        assert {a.label for a in rows} == {"Worker A", "Worker B"}

    def test_empty(self):
        assert aggregate([], by_worker) == []
        assert grand_total([]) == Decimal("0")

    def test_average(self, items):
        a = next(a for a in aggregate(items, by_worker) if a.key == "A")
        assert a.average == Decimal("1200")

    def test_average_without_items(self):
        assert Aggregate(key="A").average == Decimal("0")


class TestDaily:
    def test_breakdown_sorted_and_per_worker(self, items):
        daily = daily_breakdown(items)
        assert list(daily) == [date(2024, 3, 1), date(2024, 3, 2)]
        first = {a.key: a.total for a in daily[date(2024, 3, 1)]}
        assert first == {"A": Decimal("2000"), "B": Decimal("1550")}

    def test_growth_series(self, items):
        series = growth_series(daily_breakdown(items), "A")
        assert [g["daily"] for g in series] == [Decimal("2000"), Decimal("1600")]
        assert series[-1]["cumulative"] == Decimal("3600")

    def test_growth_skips_leading_empty_days(self):
        data = [_item("A", 1, 100, day=date(2024, 3, 1)), _item("B", 1, 100, day=date(2024, 3, 5))]
        series = growth_series(daily_breakdown(data), "B")
        assert [g["day"] for g in series] == [date(2024, 3, 5)]


class TestPayrollStatus:
    @pytest.mark.parametrize("total,paid,bonus,expected", [
        (100, 0, 0, UNPAID),
        (100, 50, 0, PARTIAL),
        (100, 0, 30, PARTIAL),
        (100, 100, 0, PAID),
        (100, 70, 30, PAID),
        (100, 150, 0, PAID),
        (Decimal("3600.00"), Decimal("3599.99"), 0, PARTIAL),
    ])
    def test_status(self, total, paid, bonus, expected):
        assert payroll_status(total, paid, bonus) == expected

    def test_none_values_treated_as_zero(self):
        assert payroll_status(100, None, None) == UNPAID


class TestDateFilter:
    def test_no_bounds_returns_all(self, items):
        assert filter_by_date(items) == items

    def test_start_only(self, items):
        out = filter_by_date(items, start=date(2024, 3, 2))
        assert all(it["item_date"] >= date(2024, 3, 2) for it in out)
        assert len(out) == 3

    def test_inclusive_bounds(self, items):
        out = filter_by_date(items, date(2024, 3, 1), date(2024, 3, 2))
        assert len(out) == 4

    def test_undated_items_dropped_when_bounded(self):
        assert filter_by_date([{"quantity": 1}], start=date(2024, 1, 1)) == []

    def test_custom_date_getter(self):
        rows = [{"d": date(2024, 1, 1)}, {"d": date(2024, 2, 1)}]
        assert filter_by_date(rows, end=date(2024, 1, 31), date_of=lambda r: r["d"]) == rows[:1]


class TestItemDate:
    def test_falls_back_to_created_at(self):
        assert item_date({"created_at": datetime(2024, 5, 6, 14, 30)}) == date(2024, 5, 6)

    def test_iso_string(self):
        assert item_date({"item_date": "2024-05-06T10:00:00"}) == date(2024, 5, 6)

    def test_garbage(self):
        assert item_date({"item_date": "soon"}) is None


class TestRevenue:
    def test_job_profit(self):
        assert job_profit(100, 5000, 3000) == Decimal("200000")

    def test_summary(self):
        jobs = [
            {"quantity": 100, "client_price_per_unit": 5000, "worker_cost_per_unit": 3000},
            {"quantity": 10, "client_price_per_unit": None, "worker_cost_per_unit": None},
        ]
        s = revenue_summary(jobs)
        assert s["quantity"] == Decimal("110")
        assert s["revenue"] == Decimal("500000")
        assert s["worker_cost"] == Decimal("300000")
        assert s["profit"] == Decimal("200000")
