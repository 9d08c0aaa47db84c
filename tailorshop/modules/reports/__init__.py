# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, render_template
from flask_login import login_required
from sqlalchemy.orm import joinedload

from ...earnings import aggregate, by_worker, grand_total
from ...models import Job, JobItem, User
from ...security import staff_required

bp = Blueprint("reports", __name__, url_prefix="/reports", template_folder="../../templates/reports")


def _name(item) -> str:
    return item.seamstress.display_name if item.seamstress else "Noma'lum"


@bp.route("/")
@login_required
@staff_required
def index():
    items = (
        JobItem.query.options(joinedload(JobItem.seamstress))
        .filter(JobItem.seamstress_id.isnot(None))
        .all()
    )
    totals = {
        "jobs": Job.query.count(),
        "seamstresses": User.query.filter(User.role == "seamstress", User.is_active.is_(True)).count(),
        "earnings": grand_total(items),
    }
    return render_template(
        "reports/index.html",
        totals=totals,
        rows=aggregate(items, by_worker, _name),
        page_title="Hisobotlar",
    )
