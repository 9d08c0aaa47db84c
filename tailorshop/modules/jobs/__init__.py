# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required, current_user
from sqlalchemy.orm import joinedload

from ...extensions import db
from ...acl import active_seamstresses, is_staff, seamstress_ids
from ...dbutil import commit_or_flash
from ...earnings import aggregate, by_job, grand_total
from ...formutil import to_int, to_money, to_date
from ...models import Color, Job, JobItem, Operation, Size
from ...security import staff_required

bp = Blueprint("jobs", __name__, url_prefix="/jobs", template_folder="../../templates/jobs")


def _job_or_404(job_id: int) -> Job:
    job = db.session.get(Job, job_id)
    if not job:
        abort(404)
    return job


def _item_or_404(job: Job, item_id: int) -> JobItem:
    item = db.session.get(JobItem, item_id)
    if not item or item.job_id != job.id:
        abort(404)
    return item


def _item_amounts(form) -> tuple[int | None, object, object]:
    """(quantity, unit_price, bonus) из формы; None вместо некорректных значений."""
    qty = to_int(form.get("quantity"), None)
    price = to_money(form.get("unit_price"), None)
    bonus = to_money(form.get("bonus_amount"))
    if qty is None or qty < 0:
        qty = None
    if price is not None and price < 0:
        price = None
    if bonus is None or bonus < 0:
        bonus = None
    return qty, price, bonus


# ------------ list ------------------------------------------------------------
@bp.route("/", methods=["GET"])
@login_required
@staff_required
def index():
    jobs = Job.query.order_by(Job.created_at.desc(), Job.id.desc()).all()
    # суммы по заказам одним проходом по позициям
    totals = {a.key: a.total for a in aggregate(JobItem.query.all(), by_job)}
    return render_template("jobs/index.html", jobs=jobs, totals=totals, page_title="Ishlar")


@bp.post("/new")
@login_required
@staff_required
def create():
    name = (request.form.get("job_name") or "").strip()
    if not name:
        flash("Ish nomini kiriting", "warning")
        return redirect(url_for("jobs.index"))
    job = Job(
        job_name=name,
        notes=(request.form.get("notes") or "").strip() or None,
        created_by=current_user.id,
        status="open",
    )
    db.session.add(job)
    commit_or_flash("Ish muvaffaqiyatli yaratildi", "Ish yaratishda xatolik")
    return redirect(url_for("jobs.index"))


@bp.post("/<int:job_id>/delete")
@login_required
@staff_required
def delete(job_id: int):
    job = _job_or_404(job_id)
    db.session.delete(job)
    commit_or_flash("Ish o'chirildi", "Ishni o'chirishda xatolik")
    return redirect(url_for("jobs.index"))


@bp.post("/<int:job_id>/status")
@login_required
@staff_required
def toggle_status(job_id: int):
    """Закрыть / переоткрыть заказ."""
    job = _job_or_404(job_id)
    if job.is_open:
        job.status = "closed"
        job.completed_at = datetime.now()
        msg = "Ish yopildi"
    else:
        job.status = "open"
        job.completed_at = None
        msg = "Ish qayta ochildi"
    commit_or_flash(msg, "Holatni o'zgartirishda xatolik")
    return redirect(url_for("jobs.view", job_id=job.id))


# ------------ details ---------------------------------------------------------
@bp.route("/<int:job_id>", methods=["GET"])
@login_required
def view(job_id: int):
    job = _job_or_404(job_id)
    items = (
        JobItem.query.options(joinedload(JobItem.operation), joinedload(JobItem.seamstress))
        .filter(JobItem.job_id == job.id)
        .order_by(JobItem.created_at.asc(), JobItem.id.asc())
        .all()
    )
    staff = is_staff(current_user)
    ctx = {}
    if staff:
        ctx = {
            "operations": Operation.query.order_by(Operation.name).all(),
            "seamstresses": active_seamstresses(),
            "colors": Color.query.order_by(Color.name).all(),
            "sizes": Size.query.order_by(Size.name).all(),
        }
    return render_template(
        "jobs/view.html",
        job=job,
        items=items,
        total=grand_total(items),
        can_edit=staff,
        today=date.today().isoformat(),
        page_title=job.job_name,
        **ctx,
    )


# ------------ items -----------------------------------------------------------
@bp.post("/<int:job_id>/items")
@login_required
@staff_required
def add_item(job_id: int):
    job = _job_or_404(job_id)
    f = request.form

    op = db.session.get(Operation, to_int(f.get("operation_id"), 0) or 0)
    if not op:
        flash("Operatsiya va narxni kiriting", "warning")
        return redirect(url_for("jobs.view", job_id=job.id))

    # пустая цена -> цена операции по умолчанию
    if not (f.get("unit_price") or "").strip():
        f = f.copy()
        f["unit_price"] = str(op.default_price or "")
    qty, price, bonus = _item_amounts(f)
    if qty is None or price is None or bonus is None:
        flash("Miqdor, narx va bonus manfiy bo'lmasligi kerak", "warning")
        return redirect(url_for("jobs.view", job_id=job.id))

    worker_id = to_int(f.get("seamstress_id"), None)
    if worker_id is not None and worker_id not in seamstress_ids():
        flash("Tikuvchi topilmadi", "warning")
        return redirect(url_for("jobs.view", job_id=job.id))

    item = JobItem(
        job_id=job.id,
        operation_id=op.id,
        seamstress_id=worker_id,
        color=(f.get("color") or "").strip() or None,
        size=(f.get("size") or "").strip() or None,
        quantity=qty,
        unit_price=price,
        bonus_amount=bonus,
        bonus_note=(f.get("bonus_note") or "").strip() or None,
        item_date=to_date(f.get("item_date"), date.today()),
    )
    db.session.add(item)
    commit_or_flash("Qo'shildi", "Element qo'shishda xatolik")
    return redirect(url_for("jobs.view", job_id=job.id))


@bp.route("/<int:job_id>/items/<int:item_id>/edit", methods=["GET", "POST"])
@login_required
@staff_required
def edit_item(job_id: int, item_id: int):
    job = _job_or_404(job_id)
    item = _item_or_404(job, item_id)

    if request.method == "GET":
        return render_template("jobs/item_form.html", job=job, item=item, page_title=job.job_name)

    qty, price, bonus = _item_amounts(request.form)
    if qty is None or price is None or bonus is None:
        flash("Miqdor, narx va bonus manfiy bo'lmasligi kerak", "warning")
        return redirect(url_for("jobs.edit_item", job_id=job.id, item_id=item.id))

    item.quantity = qty
    item.unit_price = price
    item.bonus_amount = bonus
    item.bonus_note = (request.form.get("bonus_note") or "").strip() or None
    item.item_date = to_date(request.form.get("item_date"), item.item_date)
    commit_or_flash("Yangilandi", "Elementni yangilashda xatolik")
    return redirect(url_for("jobs.view", job_id=job.id))


@bp.post("/<int:job_id>/items/<int:item_id>/delete")
@login_required
@staff_required
def delete_item(job_id: int, item_id: int):
    job = _job_or_404(job_id)
    item = _item_or_404(job, item_id)
    db.session.delete(item)
    commit_or_flash("O'chirildi", "Elementni o'chirishda xatolik")
    return redirect(url_for("jobs.view", job_id=job.id))
