# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required, current_user

from ...extensions import db
from ...acl import active_seamstresses, can_update_task, is_staff, seamstress_ids
from ...dbutil import commit_or_flash, optional_rows
from ...formutil import to_date, to_int
from ...models import DailyTask
from ...security import seamstress_required, staff_required

bp = Blueprint("tasks", __name__, template_folder="../../templates/tasks")

TASK_STATUSES = ("pending", "partial", "done")
STATUS_LABELS = {
    "done": "Bajarilgan",
    "partial": "Qisman",
    "pending": "Bajarilmagan",
}


def _ordered(q):
    return q.order_by(DailyTask.task_date.desc(), DailyTask.created_at.desc(), DailyTask.id.desc())


# ------------ staff -----------------------------------------------------------
@bp.route("/tasks", methods=["GET", "POST"])
@login_required
@staff_required
def index():
    if request.method == "POST":
        return _save_task(request.form)

    f_worker = to_int(request.args.get("worker"), None)
    f_date = to_date(request.args.get("date"))
    f_status = request.args.get("status") or ""

    def fetch():
        q = DailyTask.query
        if f_worker:
            q = q.filter(DailyTask.seamstress_id == f_worker)
        if f_date:
            q = q.filter(DailyTask.task_date == f_date)
        if f_status in TASK_STATUSES:
            q = q.filter(DailyTask.status == f_status)
        return _ordered(q).all()

    edit_id = request.args.get("edit", type=int)
    return render_template(
        "tasks/index.html",
        tasks=optional_rows(fetch, "daily_tasks"),
        seamstresses=active_seamstresses(),
        editing=db.session.get(DailyTask, edit_id) if edit_id else None,
        statuses=TASK_STATUSES,
        status_labels=STATUS_LABELS,
        filters={
            "worker": f_worker or "",
            "date": f_date.isoformat() if f_date else "",
            "status": f_status,
        },
        today=date.today().isoformat(),
        page_title="Kunlik vazifalar",
    )


def _save_task(form):
    worker_id = to_int(form.get("seamstress_id"), None)
    description = (form.get("task_description") or "").strip()
    if not worker_id or not description:
        flash("Tikuvchi va vazifa tavsifini kiriting", "warning")
        return redirect(url_for("tasks.index"))
    if worker_id not in seamstress_ids():
        flash("Tikuvchi topilmadi", "warning")
        return redirect(url_for("tasks.index"))

    task_id = to_int(form.get("id"), 0)
    if task_id:
        task = db.session.get(DailyTask, task_id)
        if not task:
            abort(404)
    else:
        task = DailyTask(created_by=current_user.id, status="pending")
        db.session.add(task)
    task.seamstress_id = worker_id
    task.task_description = description
    task.task_date = to_date(form.get("task_date"), date.today())
    task.notes = (form.get("notes") or "").strip() or None
    commit_or_flash(
        "Vazifa yangilandi" if task_id else "Vazifa muvaffaqiyatli qo'shildi",
        "Vazifani saqlashda xatolik",
    )
    return redirect(url_for("tasks.index"))


@bp.post("/tasks/<int:task_id>/delete")
@login_required
@staff_required
def delete(task_id: int):
    task = db.session.get(DailyTask, task_id)
    if not task:
        abort(404)
    db.session.delete(task)
    commit_or_flash("Vazifa o'chirildi", "Vazifani o'chirishda xatolik")
    return redirect(url_for("tasks.index"))


# ------------ status (staff + своя задача) ------------------------------------
@bp.post("/tasks/<int:task_id>/status")
@login_required
def update_status(task_id: int):
    task = db.session.get(DailyTask, task_id)
    if not task:
        abort(404)
    if not can_update_task(current_user, task):
        abort(403)
    status = request.form.get("status") or ""
    if status not in TASK_STATUSES:
        flash("Noto'g'ri status", "warning")
    else:
        task.status = status
        commit_or_flash("Status yangilandi", "Statusni yangilashda xatolik")
    if is_staff(current_user):
        return redirect(url_for("tasks.index"))
    return redirect(url_for("tasks.my_tasks"))


# ------------ seamstress ------------------------------------------------------
@bp.route("/my-tasks")
@login_required
@seamstress_required
def my_tasks():
    tasks = optional_rows(
        lambda: _ordered(DailyTask.query.filter(DailyTask.seamstress_id == current_user.id)).all(),
        "daily_tasks",
    )
    counts = {s: sum(1 for t in tasks if t.status == s) for s in TASK_STATUSES}
    counts["total"] = len(tasks)
    return render_template(
        "tasks/my_tasks.html",
        tasks=tasks,
        counts=counts,
        statuses=TASK_STATUSES,
        status_labels=STATUS_LABELS,
        page_title="Mening vazifalarim",
    )
