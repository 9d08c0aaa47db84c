# -*- coding: utf-8 -*-
from datetime import datetime, date
from decimal import Decimal
from flask import Flask

from .config import Config, ensure_instance
from .extensions import db, migrate, login_manager

# блюпринты
from .auth import auth_bp
from .users import bp as users_bp
from .modules.dashboard import bp as dashboard_bp
from .modules.jobs import bp as jobs_bp
from .modules.catalog import bp as catalog_bp
from .modules.attendance import bp as attendance_bp
from .modules.tasks import bp as tasks_bp
from .modules.bulk import bp as bulk_bp
from .modules.expenses import bp as expenses_bp
from .modules.revenue import bp as revenue_bp
from .modules.payroll import bp as payroll_bp
from .modules.earnings import bp as earnings_bp
from .modules.reports import bp as reports_bp

from .acl import is_staff, is_admin


def create_app(config=None):
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="templates",
        static_folder="static",
    )
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)
    ensure_instance(app)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # --- jinja-фильтры ---
    @app.template_filter("fmt_date")
    def fmt_date(value, fmt="%d.%m.%Y"):
        if value in (None, ""):
            return ""
        try:
            if isinstance(value, (datetime, date)):
                return value.strftime(fmt)
            s = str(value)
            try:
                return datetime.fromisoformat(s).strftime(fmt)
            except ValueError:
                return date.fromisoformat(s[:10]).strftime(fmt)
        except ValueError:
            return str(value)

    @app.template_filter("fmt_time")
    def fmt_time(value):
        if not value:
            return "—"
        return value.strftime("%H:%M")

    @app.template_filter("fmt_duration")
    def fmt_duration(pair):
        time_in, time_out = pair
        if not time_in or not time_out:
            return "—"
        minutes = int((time_out - time_in).total_seconds() // 60)
        return f"{minutes // 60}s {minutes % 60}d"

    @app.template_filter("fmt_num")
    def fmt_num(v):
        try:
            x = Decimal(str(v if v is not None else 0))
        except ArithmeticError:
            return str(v)
        # пробелы как разделители тысяч, без копеек для целых сумм
        if x == x.to_integral_value():
            return f"{int(x):,}".replace(",", " ")
        return f"{x:,.2f}".replace(",", " ")

    @app.template_filter("fmt_money")
    def fmt_money(v):
        return f"{fmt_num(v)} {app.config['CURRENCY_LABEL']}"

    # --- глобальный контекст: права для меню ---
    @app.context_processor
    def inject_roles():
        from flask_login import current_user
        if not current_user.is_authenticated:
            return {"is_staff": False, "is_admin": False}
        return {"is_staff": is_staff(current_user), "is_admin": is_admin(current_user)}

    # --- блюпринты ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(bulk_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(revenue_bp)
    app.register_blueprint(payroll_bp)
    app.register_blueprint(earnings_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(users_bp, url_prefix="/admin")

    return app
