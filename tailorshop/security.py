# -*- coding: utf-8 -*-
from functools import wraps
from flask import current_app, redirect, url_for, flash
from flask_login import current_user
from werkzeug.routing import BuildError

def _safe(endpoint: str, default: str = "/") -> str:
    try:
        return url_for(endpoint)
    except BuildError:
        return default

def roles_required(*roles):
    """
    Доступ только для перечисленных ролей.
    Гость -> на вход; чужая роль -> на главную с флэшем.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return redirect(_safe("auth.login", "/login"))
            if current_user.role not in roles:
                current_app.logger.info(
                    "Отказ в доступе: %s (%s) -> %s", current_user.email, current_user.role, f.__name__
                )
                flash("Bu bo'limga kirish huquqingiz yo'q.", "warning")
                return redirect(_safe("dashboard.index", "/"))
            return f(*args, **kwargs)
        return wrapper
    return decorator

# менеджер и админ ведут учёт; швея видит только своё
staff_required = roles_required("admin", "manager")
admin_required = roles_required("admin")
seamstress_required = roles_required("seamstress")
