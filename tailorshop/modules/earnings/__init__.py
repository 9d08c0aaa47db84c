# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, render_template
from flask_login import login_required, current_user
from sqlalchemy.orm import joinedload

from ...earnings import grand_total
from ...models import JobItem
from ...security import seamstress_required

bp = Blueprint("earnings", __name__, template_folder="../../templates/earnings")


@bp.route("/my-earnings")
@login_required
@seamstress_required
def index():
    items = (
        JobItem.query.options(joinedload(JobItem.job), joinedload(JobItem.operation))
        .filter(JobItem.seamstress_id == current_user.id)
        .order_by(JobItem.created_at.desc(), JobItem.id.desc())
        .all()
    )
    return render_template(
        "earnings/index.html",
        items=items,
        total=grand_total(items),
        open_count=sum(1 for it in items if it.job is not None and it.job.is_open),
        page_title="Daromadlarim",
    )
