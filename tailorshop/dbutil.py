# -*- coding: utf-8 -*-
"""Сохранение с флэш-уведомлением и мягкая деградация при отсутствии таблиц."""
from __future__ import annotations

from typing import Any, Callable

from flask import current_app, flash
from sqlalchemy.exc import OperationalError, ProgrammingError, SQLAlchemyError

from .extensions import db

# sqlite: "no such table", postgres: relation "x" does not exist
_MISSING_TABLE_MARKERS = ("no such table", "does not exist", "undefinedtable")


def is_missing_table(exc: BaseException) -> bool:
    if not isinstance(exc, (OperationalError, ProgrammingError)):
        return False
    msg = str(getattr(exc, "orig", exc)).lower()
    return any(m in msg for m in _MISSING_TABLE_MARKERS)


def optional_rows(fetch: Callable[[], list[Any]], what: str = "") -> list[Any]:
    """
    Выполнить выборку; если таблицы ещё нет, вернуть пустой список.
    Прочие ошибки БД пробрасываются.
    """
    try:
        return list(fetch())
    except (OperationalError, ProgrammingError) as e:
        if not is_missing_table(e):
            raise
        db.session.rollback()
        current_app.logger.warning("Таблица %s ещё не создана: %s", what or "?", e.orig)
        return []


def commit_or_flash(ok_msg: str | None, err_msg: str) -> bool:
    """Commit; при ошибке rollback, лог и флэш. Возвращает успех."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        if is_missing_table(e):
            current_app.logger.warning("Таблица ещё не создана: %s", e)
            flash("Jadval hali yaratilmagan. Iltimos, sxemani yangilang.", "danger")
        else:
            current_app.logger.exception("Ошибка сохранения")
            flash(err_msg, "danger")
        return False
    if ok_msg:
        flash(ok_msg, "success")
    return True
