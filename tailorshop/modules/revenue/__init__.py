# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required

from ...extensions import db
from ...dbutil import commit_or_flash, optional_rows
from ...earnings import revenue_summary
from ...formutil import to_money
from ...models import IncomingJob
from ...security import staff_required

bp = Blueprint("revenue", __name__, url_prefix="/revenue", template_folder="../../templates/revenue")


@bp.route("/")
@login_required
@staff_required
def index():
    jobs = optional_rows(
        lambda: IncomingJob.query.order_by(IncomingJob.date.desc(), IncomingJob.created_at.desc()).all(),
        "incoming_jobs",
    )
    edit_id = request.args.get("edit", type=int)
    return render_template(
        "revenue/index.html",
        jobs=jobs,
        summary=revenue_summary(jobs),
        editing=db.session.get(IncomingJob, edit_id) if edit_id and jobs else None,
        page_title="Daromad",
    )


@bp.post("/<int:job_id>/rates")
@login_required
@staff_required
def save_rates(job_id: int):
    job = db.session.get(IncomingJob, job_id)
    if not job:
        abort(404)
    # пустое поле -> 0
    client = to_money(request.form.get("client_price_per_unit"))
    worker = to_money(request.form.get("worker_cost_per_unit"))
    if client is None or worker is None or client < 0 or worker < 0:
        flash("Narxlar manfiy bo'lmasligi kerak", "warning")
        return redirect(url_for("revenue.index", edit=job.id))
    job.client_price_per_unit = client
    job.worker_cost_per_unit = worker
    commit_or_flash("Narxlar saqlandi", "Narxlarni saqlashda xatolik")
    return redirect(url_for("revenue.index"))
