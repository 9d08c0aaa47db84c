# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime

from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user

from ...extensions import db
from ...acl import active_seamstresses, is_staff, scope_to_user
from ...dbutil import commit_or_flash
from ...earnings import filter_by_date
from ...formutil import to_date, to_int
from ...models import Attendance

bp = Blueprint("attendance", __name__, url_prefix="/attendance", template_folder="../../templates/attendance")


def _today_record(user_id: int) -> Attendance | None:
    return Attendance.query.filter(Attendance.user_id == user_id, Attendance.date == date.today()).first()


@bp.route("/", methods=["GET"])
@login_required
def index():
    staff = is_staff(current_user)
    worker_id = to_int(request.args.get("worker"), None) if staff else None
    start = to_date(request.args.get("start"))
    end = to_date(request.args.get("end"))

    q = scope_to_user(Attendance.query, Attendance.user_id, current_user)
    if worker_id:
        q = q.filter(Attendance.user_id == worker_id)
    q = q.order_by(Attendance.date.desc(), Attendance.time_in.desc())
    # без диапазона показываем только последние записи
    if start is None and end is None:
        q = q.limit(current_app.config["ATTENDANCE_LIMIT"])
    rows = filter_by_date(q.all(), start, end, date_of=lambda r: r.date)

    return render_template(
        "attendance/index.html",
        rows=rows,
        today_record=None if staff else _today_record(current_user.id),
        seamstresses=active_seamstresses() if staff else [],
        filters={
            "worker": worker_id or "",
            "start": start.isoformat() if start else "",
            "end": end.isoformat() if end else "",
        },
        page_title="Davomat",
    )


@bp.post("/check-in")
@login_required
def check_in():
    if _today_record(current_user.id):
        flash("Bugun kelganingiz allaqachon belgilangan", "info")
        return redirect(url_for("attendance.index"))
    now = datetime.now()
    db.session.add(Attendance(user_id=current_user.id, date=now.date(), time_in=now))
    commit_or_flash("Kelganingiz belgilandi", "Belgilashda xatolik")
    return redirect(url_for("attendance.index"))


@bp.post("/check-out")
@login_required
def check_out():
    rec = _today_record(current_user.id)
    if not rec:
        flash("Avval kelganingizni belgilang", "warning")
    elif rec.time_out:
        flash("Ketganingiz allaqachon belgilangan", "info")
    else:
        rec.time_out = datetime.now()
        commit_or_flash("Ketganingiz belgilandi", "Belgilashda xatolik")
    return redirect(url_for("attendance.index"))
