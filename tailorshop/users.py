# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user

from .extensions import db
from .dbutil import commit_or_flash
from .models.user import User, ROLES
from .security import admin_required
from .formutil import to_int

bp = Blueprint("users", __name__)

ROLE_LABELS = {
    "admin": "Administrator",
    "manager": "Menejer",
    "seamstress": "Tikuvchi",
}

# ---------- helpers ----------
def _create(form) -> None:
    email = (form.get("email") or "").strip().lower()
    password = (form.get("password") or "").strip()
    full_name = (form.get("full_name") or "").strip()
    role = (form.get("role") or "seamstress").strip()
    if not email or not password or not full_name:
        flash("Email, parol va F.I.O. majburiy", "warning")
        return
    if role not in ROLES:
        flash("Noto'g'ri rol", "warning")
        return
    if User.query.filter_by(email=email).first():
        flash("Bu email allaqachon mavjud", "warning")
        return
    u = User(email=email, full_name=full_name, role=role, is_active=True)
    u.set_password(password)
    db.session.add(u)
    commit_or_flash("Foydalanuvchi muvaffaqiyatli yaratildi", "Foydalanuvchi yaratishda xatolik")

def _target(form) -> User | None:
    uid = to_int(form.get("id"), 0)
    u = db.session.get(User, uid) if uid else None
    if not u:
        flash("Foydalanuvchi topilmadi", "warning")
        return None
    if u.id == current_user.id:
        flash("O'z hisobingizni o'zgartira olmaysiz", "warning")
        return None
    return u

# ---------- users ----------
@bp.route("/users", methods=["GET", "POST"])
@login_required
@admin_required
def index():
    if request.method == "POST":
        op = request.form.get("op")
        if op == "create":
            _create(request.form)
        elif op == "toggle":
            u = _target(request.form)
            if u:
                u.is_active = not u.is_active
                commit_or_flash("Holat yangilandi", "Holatni yangilashda xatolik")
        elif op == "role":
            u = _target(request.form)
            role = (request.form.get("role") or "").strip()
            if u and role in ROLES:
                u.role = role
                commit_or_flash("Rol yangilandi", "Rolni yangilashda xatolik")
            elif u:
                flash("Noto'g'ri rol", "warning")
        return redirect(url_for("users.index"))

    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return render_template(
        "users/index.html",
        users=users,
        roles=ROLES,
        role_labels=ROLE_LABELS,
        page_title="Foydalanuvchilar",
    )
