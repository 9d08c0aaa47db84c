# -*- coding: utf-8 -*-
from datetime import datetime

from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from ..extensions import db
from ..dbutil import commit_or_flash
from ..models.user import User

auth_bp = Blueprint("auth", __name__, template_folder="../templates/auth")

@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "").strip()
        u = User.query.filter_by(email=email).first()
        if not u or not u.check_password(password):
            flash("Email yoki parol noto'g'ri", "danger")
        elif not u.is_active:
            flash("Hisob faol emas. Administratorga murojaat qiling.", "warning")
        else:
            login_user(u, remember=True)
            u.last_login = datetime.now()
            commit_or_flash("Tizimga muvaffaqiyatli kirdingiz", "Kirishda xatolik")
            current_app.logger.info("Вход: %s (%s)", u.email, u.role)
            return redirect(url_for("dashboard.index"))
    return render_template("auth/login.html")

@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    """Самостоятельная регистрация — только роль швеи."""
    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "").strip()
        full_name = request.form.get("full_name", "").strip()
        if not email or not password or not full_name:
            flash("Barcha maydonlarni to'ldiring", "warning")
            return render_template("auth/register.html"), 400
        if User.query.filter_by(email=email).first():
            flash("Bu email allaqachon ro'yxatdan o'tgan", "warning")
            return render_template("auth/register.html"), 400
        u = User(email=email, full_name=full_name, role="seamstress", is_active=True)
        u.set_password(password)
        db.session.add(u)
        if commit_or_flash("Ro'yxatdan o'tdingiz! Endi tizimga kiring.", "Ro'yxatdan o'tishda xatolik"):
            return redirect(url_for("auth.login"))
    return render_template("auth/register.html")

@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    flash("Tizimdan chiqdingiz", "info")
    return redirect(url_for("auth.login"))
