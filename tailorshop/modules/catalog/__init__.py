# -*- coding: utf-8 -*-
"""Справочники: операции, цвета, размеры."""
from __future__ import annotations

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required

from ...extensions import db
from ...dbutil import commit_or_flash
from ...formutil import to_int, to_money
from ...models import Color, JobItem, Operation, Size
from ...security import staff_required

bp = Blueprint("catalog", __name__, template_folder="../../templates/catalog")


# ------------ operations ------------------------------------------------------
@bp.route("/operations", methods=["GET", "POST"])
@login_required
@staff_required
def operations():
    if request.method == "POST":
        f = request.form
        name = (f.get("name") or "").strip()
        price = to_money(f.get("default_price"), None)
        if not name:
            flash("Operatsiya nomini kiriting", "warning")
        elif price is None or price < 0:
            flash("Narx noto'g'ri", "warning")
        else:
            op_id = to_int(f.get("id"), 0)
            op = db.session.get(Operation, op_id) if op_id else Operation()
            if op is None:
                abort(404)
            op.name = name
            op.code = (f.get("code") or "").strip() or None
            op.default_price = price
            op.unit = (f.get("unit") or "").strip() or "dona"
            if not op_id:
                db.session.add(op)
            commit_or_flash(
                "Operatsiya yangilandi" if op_id else "Operatsiya muvaffaqiyatli yaratildi",
                "Operatsiyani saqlashda xatolik",
            )
        return redirect(url_for("catalog.operations"))

    edit_id = request.args.get("edit", type=int)
    return render_template(
        "catalog/operations.html",
        operations=Operation.query.order_by(Operation.name).all(),
        editing=db.session.get(Operation, edit_id) if edit_id else None,
        page_title="Operatsiyalar",
    )


@bp.post("/operations/<int:op_id>/delete")
@login_required
@staff_required
def delete_operation(op_id: int):
    op = db.session.get(Operation, op_id)
    if not op:
        abort(404)
    # операция, на которую ссылаются позиции, не удаляется
    if JobItem.query.filter_by(operation_id=op.id).first():
        flash("Operatsiya ishlatilmoqda, o'chirib bo'lmaydi", "warning")
        return redirect(url_for("catalog.operations"))
    db.session.delete(op)
    commit_or_flash("Operatsiya o'chirildi", "Operatsiyani o'chirishda xatolik")
    return redirect(url_for("catalog.operations"))


# ------------ colors / sizes --------------------------------------------------
_SIMPLE = {
    "colors": (Color, "Ranglar", "Rang"),
    "sizes": (Size, "O'lchamlar", "O'lcham"),
}


def _simple_list(kind: str):
    model, title, noun = _SIMPLE[kind]
    if request.method == "POST":
        name = (request.form.get("name") or "").strip()
        if not name:
            flash(f"{noun} nomini kiriting", "warning")
        elif model.query.filter_by(name=name).first():
            flash(f"{noun} allaqachon mavjud", "warning")
        else:
            db.session.add(model(name=name))
            commit_or_flash(f"{noun} qo'shildi", f"{noun} qo'shishda xatolik")
        return redirect(url_for(f"catalog.{kind}"))
    return render_template(
        "catalog/simple.html",
        rows=model.query.order_by(model.name).all(),
        kind=kind,
        noun=noun,
        page_title=title,
    )


def _simple_delete(kind: str, row_id: int):
    model, _, noun = _SIMPLE[kind]
    row = db.session.get(model, row_id)
    if not row:
        abort(404)
    db.session.delete(row)
    commit_or_flash(f"{noun} o'chirildi", f"{noun} o'chirishda xatolik")
    return redirect(url_for(f"catalog.{kind}"))


@bp.route("/colors", methods=["GET", "POST"])
@login_required
@staff_required
def colors():
    return _simple_list("colors")


@bp.post("/colors/<int:row_id>/delete")
@login_required
@staff_required
def delete_color(row_id: int):
    return _simple_delete("colors", row_id)


@bp.route("/sizes", methods=["GET", "POST"])
@login_required
@staff_required
def sizes():
    return _simple_list("sizes")


@bp.post("/sizes/<int:row_id>/delete")
@login_required
@staff_required
def delete_size(row_id: int):
    return _simple_delete("sizes", row_id)
