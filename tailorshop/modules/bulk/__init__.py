# -*- coding: utf-8 -*-
"""Входящие партии от заказчиков и их частичная отгрузка."""
from __future__ import annotations

from datetime import date

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required, current_user
from sqlalchemy.orm import selectinload

from ...extensions import db
from ...dbutil import commit_or_flash
from ...formutil import to_date, to_int
from ...models import IncomingJob, OutgoingJob
from ...security import staff_required

bp = Blueprint("bulk", __name__, template_folder="../../templates/bulk")

DELIVERY_LABELS = {
    "sent": "Ketgan",
    "partial": "Qisman ketgan",
    "pending": "Kutilmoqda",
}


def _incoming_or_404(job_id: int) -> IncomingJob:
    job = db.session.get(IncomingJob, job_id)
    if not job:
        abort(404)
    return job


def _all_incoming() -> list[IncomingJob]:
    return (
        IncomingJob.query.options(selectinload(IncomingJob.shipments))
        .order_by(IncomingJob.date.desc(), IncomingJob.created_at.desc(), IncomingJob.id.desc())
        .all()
    )


# ------------ incoming --------------------------------------------------------
@bp.route("/incoming", methods=["GET", "POST"])
@login_required
@staff_required
def incoming():
    if request.method == "POST":
        f = request.form
        name = (f.get("job_name") or "").strip()
        qty = to_int(f.get("quantity"), None)
        if not name or qty is None or qty < 0:
            flash("Ish nomi va miqdorni to'g'ri kiriting", "warning")
            return redirect(url_for("bulk.incoming"))

        job_id = to_int(f.get("id"), 0)
        if job_id:
            job = _incoming_or_404(job_id)
        else:
            job = IncomingJob(created_by=current_user.id)
            db.session.add(job)
        job.job_name = name
        job.quantity = qty
        job.defective_items = max(to_int(f.get("defective_items"), 0) or 0, 0)
        job.extra_work = max(to_int(f.get("extra_work"), 0) or 0, 0)
        job.notes = (f.get("notes") or "").strip() or None
        job.date = to_date(f.get("date"), date.today())
        commit_or_flash("Yangilandi" if job_id else "Qo'shildi", "Xatolik yuz berdi")
        return redirect(url_for("bulk.incoming"))

    edit_id = request.args.get("edit", type=int)
    return render_template(
        "bulk/incoming.html",
        jobs=_all_incoming(),
        editing=db.session.get(IncomingJob, edit_id) if edit_id else None,
        labels=DELIVERY_LABELS,
        today=date.today().isoformat(),
        page_title="Kelgan ish",
    )


@bp.post("/incoming/<int:job_id>/delete")
@login_required
@staff_required
def delete_incoming(job_id: int):
    db.session.delete(_incoming_or_404(job_id))
    commit_or_flash("O'chirildi", "Xatolik")
    return redirect(url_for("bulk.incoming"))


# ------------ outgoing --------------------------------------------------------
@bp.route("/outgoing")
@login_required
@staff_required
def outgoing_list():
    return render_template(
        "bulk/outgoing_list.html",
        jobs=_all_incoming(),
        labels=DELIVERY_LABELS,
        page_title="Ketgan ish",
    )


@bp.route("/outgoing/<int:job_id>", methods=["GET", "POST"])
@login_required
@staff_required
def outgoing(job_id: int):
    job = _incoming_or_404(job_id)

    if request.method == "POST":
        f = request.form
        ship_id = to_int(f.get("id"), 0)
        ship = None
        if ship_id:
            ship = db.session.get(OutgoingJob, ship_id)
            if not ship or ship.incoming_job_id != job.id:
                abort(404)

        qty = to_int(f.get("quantity_sent"), None)
        # при редактировании текущая отгрузка возвращается в остаток
        limit = job.remaining + (int(ship.quantity_sent or 0) if ship else 0)
        if qty is None or qty <= 0:
            flash("Miqdorni to'g'ri kiriting", "warning")
        elif qty > limit:
            flash(f"Maksimal: {limit}", "warning")
        else:
            if ship is None:
                ship = OutgoingJob(incoming_job_id=job.id, created_by=current_user.id)
                db.session.add(ship)
            ship.quantity_sent = qty
            ship.notes = (f.get("notes") or "").strip() or None
            ship.date = to_date(f.get("date"), date.today())
            commit_or_flash("Yangilandi" if ship_id else "Qo'shildi", "Xatolik yuz berdi")
        return redirect(url_for("bulk.outgoing", job_id=job.id))

    edit_id = request.args.get("edit", type=int)
    editing = db.session.get(OutgoingJob, edit_id) if edit_id else None
    if editing is not None and editing.incoming_job_id != job.id:
        editing = None
    return render_template(
        "bulk/outgoing.html",
        job=job,
        shipments=job.shipments,
        editing=editing,
        labels=DELIVERY_LABELS,
        today=date.today().isoformat(),
        page_title=job.job_name,
    )


@bp.post("/outgoing/<int:job_id>/<int:ship_id>/delete")
@login_required
@staff_required
def delete_outgoing(job_id: int, ship_id: int):
    job = _incoming_or_404(job_id)
    ship = db.session.get(OutgoingJob, ship_id)
    if not ship or ship.incoming_job_id != job.id:
        abort(404)
    db.session.delete(ship)
    commit_or_flash("O'chirildi", "Xatolik")
    return redirect(url_for("bulk.outgoing", job_id=job.id))
