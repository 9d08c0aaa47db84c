# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date
from decimal import Decimal

from flask import Blueprint, render_template, request, redirect, url_for, abort, flash
from flask_login import login_required, current_user

from ...extensions import db
from ...dbutil import commit_or_flash, optional_rows
from ...earnings import revenue_summary
from ...formutil import to_date, to_int, to_money
from ...models import Expense, IncomingJob
from ...security import staff_required

bp = Blueprint("expenses", __name__, url_prefix="/expenses", template_folder="../../templates/expenses")


@bp.route("/", methods=["GET", "POST"])
@login_required
@staff_required
def index():
    if request.method == "POST":
        f = request.form
        name = (f.get("expense_name") or "").strip()
        amount = to_money(f.get("amount"), None)
        if not name or amount is None or amount < 0:
            flash("Xarajat nomi va narxni kiriting", "warning")
            return redirect(url_for("expenses.index"))

        exp_id = to_int(f.get("id"), 0)
        if exp_id:
            exp = db.session.get(Expense, exp_id)
            if not exp:
                abort(404)
        else:
            exp = Expense(created_by=current_user.id)
            db.session.add(exp)
        exp.expense_name = name
        exp.description = (f.get("description") or "").strip() or None
        exp.amount = amount
        exp.expense_date = to_date(f.get("expense_date"), date.today())
        commit_or_flash(
            "Xarajat yangilandi" if exp_id else "Xarajat qo'shildi",
            "Xarajatni saqlashda xatolik",
        )
        return redirect(url_for("expenses.index"))

    expenses = optional_rows(
        lambda: Expense.query.order_by(Expense.expense_date.desc(), Expense.created_at.desc()).all(),
        "expenses",
    )
    # прибыль мастерской по входящим партиям минус расходы
    admin_profit = revenue_summary(optional_rows(IncomingJob.query.all, "incoming_jobs"))["profit"]
    total_expenses = sum((Decimal(str(e.amount or 0)) for e in expenses), Decimal("0"))

    edit_id = request.args.get("edit", type=int)
    return render_template(
        "expenses/index.html",
        expenses=expenses,
        editing=db.session.get(Expense, edit_id) if edit_id and expenses else None,
        admin_profit=admin_profit,
        total_expenses=total_expenses,
        net_profit=admin_profit - total_expenses,
        today=date.today().isoformat(),
        page_title="Xarajatlar",
    )


@bp.post("/<int:exp_id>/delete")
@login_required
@staff_required
def delete(exp_id: int):
    exp = db.session.get(Expense, exp_id)
    if not exp:
        abort(404)
    db.session.delete(exp)
    commit_or_flash("Xarajat o'chirildi", "Xarajatni o'chirishda xatolik")
    return redirect(url_for("expenses.index"))
