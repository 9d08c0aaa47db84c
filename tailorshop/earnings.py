# -*- coding: utf-8 -*-
"""
Расчёт заработка по сдельным позициям.

Позиция (JobItem или dict с теми же полями) стоит
    quantity * unit_price + bonus_amount.
Здесь же группировка позиций (по швее, дню, заказу), статус выплаты
по зарплатной записи и фильтр по диапазону дат. Всё — чистые функции
без обращения к БД.
"""
from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any


D = lambda v: Decimal(str(v)) if v is not None else Decimal("0")

# статусы зарплатной записи
UNPAID = "unpaid"
PARTIAL = "partial"
PAID = "paid"
PAYROLL_STATUSES = (UNPAID, PARTIAL, PAID)


def _field(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def item_value(item: Any) -> Decimal:
    """Стоимость позиции: количество × цена + бонус."""
    qty = _field(item, "quantity") or 0
    return D(qty) * D(_field(item, "unit_price")) + D(_field(item, "bonus_amount"))


def item_date(item: Any) -> date | None:
    """Дата работы: явная item_date, иначе день created_at."""
    d = _field(item, "item_date") or _field(item, "created_at")
    if d is None:
        return None
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    s = str(d)
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


# — ключи группировки —
def by_worker(item: Any) -> Hashable | None:
    return _field(item, "seamstress_id")


def by_day(item: Any) -> Hashable | None:
    return item_date(item)


def by_job(item: Any) -> Hashable | None:
    return _field(item, "job_id")


@dataclass
class Aggregate:
    key: Hashable
    label: str = ""
    count: int = 0
    quantity: int = 0
    total: Decimal = field(default_factory=lambda: Decimal("0"))

    def add(self, item: Any) -> None:
        self.count += 1
        self.quantity += int(_field(item, "quantity") or 0)
        self.total += item_value(item)

    @property
    def average(self) -> Decimal:
        if not self.count:
            return Decimal("0")
        return self.total / self.count


def aggregate(
    items: Iterable[Any],
    key: Callable[[Any], Hashable | None] = by_worker,
    label: Callable[[Any], str] | None = None,
    chronological: bool = False,
) -> list[Aggregate]:
    """
    Свернуть позиции в группы {count, quantity, total}.

    Позиции без ключа (например, без назначенной швеи) пропускаются.
    Порядок — по убыванию суммы; при chronological=True — по возрастанию ключа
    (для дневных рядов).
    """
    groups: dict[Hashable, Aggregate] = {}
    for it in items:
        k = key(it)
        if k is None:
            continue
        agg = groups.get(k)
        if agg is None:
            agg = groups[k] = Aggregate(key=k, label=label(it) if label else "")
        agg.add(it)

    if chronological:
        return sorted(groups.values(), key=lambda a: a.key)
    # при равных суммах порядок по подписи
    return sorted(groups.values(), key=lambda a: (-a.total, a.label))


def grand_total(items: Iterable[Any]) -> Decimal:
    return sum((item_value(it) for it in items), Decimal("0"))


def daily_breakdown(
    items: Iterable[Any],
    label: Callable[[Any], str] | None = None,
) -> dict[date, list[Aggregate]]:
    """День -> агрегаты по швеям за этот день; дни по возрастанию."""
    per_day: dict[date, list[Any]] = {}
    for it in items:
        d = item_date(it)
        if d is None or by_worker(it) is None:
            continue
        per_day.setdefault(d, []).append(it)
    return {d: aggregate(per_day[d], by_worker, label) for d in sorted(per_day)}


def growth_series(
    daily: dict[date, list[Aggregate]],
    worker_id: Hashable,
) -> list[dict[str, Any]]:
    """
    Дневной и накопительный заработок швеи по дням из daily_breakdown.
    Ведущие пустые дни отбрасываются.
    """
    out: list[dict[str, Any]] = []
    cumulative = Decimal("0")
    for d, aggs in daily.items():
        amount = next((a.total for a in aggs if a.key == worker_id), Decimal("0"))
        cumulative += amount
        if amount > 0 or cumulative > 0:
            out.append({"day": d, "daily": amount, "cumulative": cumulative})
    return out


# — статус выплаты —
def payroll_status(total_amount: Any, paid_amount: Any, bonus_amount: Any = 0) -> str:
    """
    paid + bonus >= total  -> paid (граница включительно)
    paid + bonus > 0       -> partial
    иначе                  -> unpaid
    """
    received = D(paid_amount) + D(bonus_amount)
    if received >= D(total_amount):
        return PAID
    if received > 0:
        return PARTIAL
    return UNPAID


# — фильтр по датам —
def filter_by_date(
    items: Iterable[Any],
    start: date | None = None,
    end: date | None = None,
    date_of: Callable[[Any], date | None] = item_date,
) -> list[Any]:
    """Элементы с датой в [start, end]; пустая граница — без ограничения."""
    if start is None and end is None:
        return list(items)
    out = []
    for it in items:
        d = date_of(it)
        if d is None:
            continue
        if start is not None and d < start:
            continue
        if end is not None and d > end:
            continue
        out.append(it)
    return out


# — выручка по входящим заказам —
def job_profit(quantity: Any, client_price: Any, worker_price: Any) -> Decimal:
    """Прибыль мастерской: количество × (цена клиента − ставка швеи)."""
    return D(quantity or 0) * (D(client_price) - D(worker_price))


def revenue_summary(jobs: Iterable[Any]) -> dict[str, Decimal]:
    qty = Decimal("0")
    revenue = Decimal("0")
    cost = Decimal("0")
    for j in jobs:
        q = D(_field(j, "quantity") or 0)
        qty += q
        revenue += q * D(_field(j, "client_price_per_unit"))
        cost += q * D(_field(j, "worker_cost_per_unit"))
    return {
        "quantity": qty,
        "revenue": revenue,
        "worker_cost": cost,
        "profit": revenue - cost,
    }
