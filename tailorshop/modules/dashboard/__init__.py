# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime, timedelta

from flask import Blueprint, render_template
from flask_login import login_required, current_user

from ...acl import is_staff
from ...earnings import grand_total
from ...models import Attendance, Job, JobItem

bp = Blueprint("dashboard", __name__, template_folder="../../templates/dashboard")


def _items_between(start: datetime, end: datetime) -> int:
    return JobItem.query.filter(JobItem.created_at >= start, JobItem.created_at < end).count()


def _staff_stats() -> dict:
    total_jobs = Job.query.count()
    open_jobs = Job.query.filter(Job.status == "open").count()

    # сравнение «сегодня / вчера» по числу добавленных позиций
    start_today = datetime.combine(date.today(), datetime.min.time())
    start_tomorrow = start_today + timedelta(days=1)
    start_yesterday = start_today - timedelta(days=1)
    today = _items_between(start_today, start_tomorrow)
    yesterday = _items_between(start_yesterday, start_today)
    return {
        "total_jobs": total_jobs,
        "open_jobs": open_jobs,
        "today": today,
        "yesterday": yesterday,
        "diff": today - yesterday,
    }


def _seamstress_stats(user_id: int) -> dict:
    items = JobItem.query.filter(JobItem.seamstress_id == user_id).all()
    checked_in = (
        Attendance.query.filter(Attendance.user_id == user_id, Attendance.date == date.today()).first()
        is not None
    )
    return {
        "total_jobs": len(items),
        "total_earnings": grand_total(items),
        "today_attendance": checked_in,
    }


@bp.route("/")
@login_required
def index():
    if is_staff(current_user):
        stats = _staff_stats()
    else:
        stats = _seamstress_stats(current_user.id)
    return render_template("dashboard/index.html", stats=stats, page_title="Bosh sahifa")
