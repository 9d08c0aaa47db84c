# -*- coding: utf-8 -*-
from __future__ import annotations

from calendar import monthrange
from datetime import date
from decimal import Decimal, InvalidOperation


def to_int(v, default: int | None = 0) -> int | None:
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        return default


def to_money(v, default: Decimal | None = Decimal("0")) -> Decimal | None:
    """'12 500,50' -> Decimal('12500.50'); пусто/мусор -> default."""
    if v is None:
        return default
    s = str(v).strip().replace(" ", "").replace(",", ".")
    if not s:
        return default
    try:
        return Decimal(s)
    except InvalidOperation:
        return default


def to_date(v, default: date | None = None) -> date | None:
    if isinstance(v, date):
        return v
    s = (str(v) if v is not None else "").strip()
    if not s:
        return default
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return default


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Первый и последний день месяца."""
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def months_back(year: int, month: int, count: int) -> list[tuple[int, int]]:
    """count месяцев, заканчивая (year, month), по возрастанию."""
    out = []
    for i in range(count - 1, -1, -1):
        m = month - i
        y = year
        while m <= 0:
            m += 12
            y -= 1
        out.append((y, m))
    return out
