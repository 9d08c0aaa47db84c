# -*- coding: utf-8 -*-
from __future__ import annotations

import csv
import io
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from flask import Blueprint, Response, current_app, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required, current_user
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import joinedload

from ...extensions import db
from ...dbutil import commit_or_flash
from ...earnings import (
    D, PAID, PARTIAL, UNPAID,
    aggregate, by_worker, daily_breakdown, filter_by_date, grand_total, growth_series, payroll_status,
)
from ...formutil import month_bounds, months_back, to_date, to_int, to_money
from ...models import JobItem, PayrollRecord, User
from ...security import staff_required

bp = Blueprint("payroll", __name__, url_prefix="/payroll", template_folder="../../templates/payroll")

MONTHS_UZ = [
    "Yanvar", "Fevral", "Mart", "Aprel", "May", "Iyun",
    "Iyul", "Avgust", "Sentabr", "Oktabr", "Noyabr", "Dekabr",
]
MONTHS_UZ_SHORT = ["Yan", "Fev", "Mar", "Apr", "May", "Iyun", "Iyul", "Avg", "Sen", "Okt", "Noy", "Dek"]
STATUS_LABELS = {
    PAID: "To'langan",
    PARTIAL: "Qisman",
    UNPAID: "To'lanmagan",
}
TOP_EARNERS = 8


# ------------ helpers ---------------------------------------------------------
def _period(src) -> tuple[int, int]:
    today = date.today()
    month = to_int(src.get("month"), today.month) or today.month
    year = to_int(src.get("year"), today.year) or today.year
    if not 1 <= month <= 12:
        month = today.month
    # крайние годы не помещаются в date вместе с соседним месяцем
    if not 2 <= year <= 9998:
        year = today.year
    return year, month


def _name(item) -> str:
    return item.seamstress.display_name if item.seamstress else "Noma'lum"


def _month_items(year: int, month: int, worker_id: int | None = None) -> list[JobItem]:
    """
    Позиции с назначенной швеёй за месяц. Дата позиции — item_date,
    а если её нет — день создания.
    """
    first, last = month_bounds(year, month)
    start_ts = datetime.combine(first, time.min)
    end_ts = datetime.combine(last + timedelta(days=1), time.min)
    q = (
        JobItem.query.options(joinedload(JobItem.seamstress))
        .filter(JobItem.seamstress_id.isnot(None))
        .filter(
            or_(
                and_(JobItem.item_date >= first, JobItem.item_date <= last),
                and_(JobItem.item_date.is_(None), JobItem.created_at >= start_ts, JobItem.created_at < end_ts),
            )
        )
    )
    if worker_id is not None:
        q = q.filter(JobItem.seamstress_id == worker_id)
    return filter_by_date(q.all(), first, last)


def _records(year: int, month: int) -> dict[int, PayrollRecord]:
    rows = PayrollRecord.query.filter_by(year=year, month=month).all()
    return {r.seamstress_id: r for r in rows}


def _monthly_rows(items: list[JobItem], records: dict[int, PayrollRecord]) -> list[dict[str, Any]]:
    rows = []
    for agg in aggregate(items, by_worker, _name):
        rec = records.get(agg.key)
        paid = D(rec.paid_amount) if rec else Decimal("0")
        bonus = D(rec.bonus_amount) if rec else Decimal("0")
        rows.append({
            "seamstress_id": agg.key,
            "name": agg.label,
            "count": agg.count,
            "quantity": agg.quantity,
            "total": agg.total,
            "paid": paid,
            "bonus": bonus,
            "bonus_note": rec.bonus_note if rec else None,
            "notes": rec.notes if rec else None,
            "record_id": rec.id if rec else None,
            # статус считается от текущей суммы месяца
            "status": payroll_status(agg.total, paid, bonus),
        })
    return rows


def _trend(year: int, month: int) -> list[dict[str, Any]]:
    out = []
    for y, m in months_back(year, month, current_app.config["PAYROLL_TREND_MONTHS"]):
        paid = (
            db.session.query(func.coalesce(func.sum(PayrollRecord.paid_amount), 0))
            .filter(PayrollRecord.year == y, PayrollRecord.month == m)
            .scalar()
        )
        out.append({
            "label": f"{MONTHS_UZ_SHORT[m - 1]} {y}",
            "total": grand_total(_month_items(y, m)),
            "paid": D(paid),
        })
    return out


# ------------ monthly page ----------------------------------------------------
@bp.route("/")
@login_required
@staff_required
def index():
    year, month = _period(request.args)
    items = _month_items(year, month)
    rows = _monthly_rows(items, _records(year, month))

    daily = daily_breakdown(items, _name)
    days = list(daily)
    sel_day = to_date(request.args.get("day"))
    if sel_day not in daily:
        sel_day = days[-1] if days else None

    worker_ids = [r["seamstress_id"] for r in rows]
    sel_worker = to_int(request.args.get("worker"), None)
    if sel_worker not in worker_ids:
        sel_worker = worker_ids[0] if worker_ids else None

    month_total = sum((r["total"] for r in rows), Decimal("0"))
    summary = {
        "total": month_total,
        "paid_with_bonus": sum((r["paid"] + r["bonus"] for r in rows), Decimal("0")),
        "debt": sum((r["total"] - r["paid"] - r["bonus"] for r in rows), Decimal("0")),
        "items": sum(r["quantity"] for r in rows),
        "workers": len(rows),
        "average": month_total / len(rows) if rows else Decimal("0"),
        "status_counts": {s: sum(1 for r in rows if r["status"] == s) for s in STATUS_LABELS},
    }

    return render_template(
        "payroll/index.html",
        year=year,
        month=month,
        months=MONTHS_UZ,
        years=range(date.today().year - 2, date.today().year + 3),
        rows=rows,
        summary=summary,
        top=rows[:TOP_EARNERS],
        trend=_trend(year, month),
        days=days,
        sel_day=sel_day,
        day_rows=daily.get(sel_day, []) if sel_day else [],
        sel_worker=sel_worker,
        growth=growth_series(daily, sel_worker) if sel_worker is not None else [],
        status_labels=STATUS_LABELS,
        page_title="Oylik maosh hisoboti",
    )


# ------------ payment ---------------------------------------------------------
@bp.post("/pay")
@login_required
@staff_required
def pay():
    f = request.form
    year, month = _period(f)
    worker_id = to_int(f.get("seamstress_id"), 0) or 0
    back = url_for("payroll.index", year=year, month=month)

    worker = db.session.get(User, worker_id)
    if not worker or worker.role != "seamstress":
        flash("Tikuvchi topilmadi", "warning")
        return redirect(back)
    paid = to_money(f.get("paid_amount"), None)
    bonus = to_money(f.get("bonus_amount"))
    if paid is None or paid < 0 or bonus is None or bonus < 0:
        flash("To'lov summasini to'g'ri kiriting", "warning")
        return redirect(back)

    # сумма к выплате считается на сервере по позициям месяца
    total = grand_total(_month_items(year, month, worker.id))
    rec = PayrollRecord.query.filter_by(seamstress_id=worker.id, year=year, month=month).first()
    if rec is None:
        rec = PayrollRecord(seamstress_id=worker.id, year=year, month=month, created_by=current_user.id)
        db.session.add(rec)
    rec.total_amount = total
    rec.paid_amount = paid
    rec.bonus_amount = bonus
    rec.bonus_note = (f.get("bonus_note") or "").strip() or None
    rec.notes = (f.get("notes") or "").strip() or None
    rec.payment_date = datetime.now()
    rec.refresh_status()
    if commit_or_flash("To'lov holati yangilandi", "To'lov holatini yangilashda xatolik"):
        current_app.logger.info(
            "Выплата: швея=%s %02d.%s оплачено=%s бонус=%s статус=%s",
            worker.id, month, year, paid, bonus, rec.status,
        )
    return redirect(back)


# ------------ details ---------------------------------------------------------
@bp.route("/details/<int:worker_id>")
@login_required
@staff_required
def details(worker_id: int):
    worker = db.session.get(User, worker_id)
    if not worker:
        abort(404)
    year, month = _period(request.args)
    items = sorted(
        _month_items(year, month, worker.id),
        key=lambda it: (it.created_at or datetime.min, it.id),
        reverse=True,
    )
    return render_template(
        "payroll/details.html",
        worker=worker,
        items=items,
        total=grand_total(items),
        year=year,
        month=month,
        month_label=f"{MONTHS_UZ[month - 1]} {year}",
        page_title=worker.display_name,
    )


# ------------ export ----------------------------------------------------------
_EXPORT_HEADER = ["Tikuvchi", "Ishlar soni", "Jami summa", "To'lov holati", "To'langan summa"]


def _export_rows(year: int, month: int) -> list[list[Any]]:
    rows = _monthly_rows(_month_items(year, month), _records(year, month))
    return [
        [r["name"], r["quantity"], r["total"], STATUS_LABELS[r["status"]], r["paid"]]
        for r in rows
    ]


@bp.route("/export.csv")
@login_required
@staff_required
def export_csv():
    year, month = _period(request.args)
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(_EXPORT_HEADER)
    w.writerows(_export_rows(year, month))
    # utf-8 с BOM для Excel
    data = buf.getvalue().encode("utf-8-sig")
    return Response(
        data,
        mimetype="text/csv",
        headers={
            "Content-Type": "text/csv; charset=utf-8",
            "Content-Disposition": f"attachment; filename=maosh_hisoboti_{year}_{month}.csv",
        },
    )


@bp.route("/export.xlsx")
@login_required
@staff_required
def export_xlsx():
    import openpyxl

    year, month = _period(request.args)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = f"{year}-{month:02d}"
    ws.append(_EXPORT_HEADER)
    for row in _export_rows(year, month):
        ws.append([float(v) if isinstance(v, Decimal) else v for v in row])
    out = io.BytesIO()
    wb.save(out)
    return Response(
        out.getvalue(),
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=maosh_hisoboti_{year}_{month}.xlsx"},
    )
