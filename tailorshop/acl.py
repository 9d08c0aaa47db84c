# -*- coding: utf-8 -*-
"""Построчные права: что видит и меняет пользователь в зависимости от роли."""
from __future__ import annotations
from typing import List

from .models.user import User, STAFF_ROLES

# — роли —
def is_staff(user) -> bool:
    return getattr(user, "role", "") in STAFF_ROLES

def is_admin(user) -> bool:
    return getattr(user, "role", "") == "admin"

# — выборки сотрудников —
def active_seamstresses() -> List[User]:
    return (
        User.query.filter(User.role == "seamstress", User.is_active.is_(True))
        .order_by(User.full_name)
        .all()
    )

def seamstress_ids() -> set[int]:
    return {u.id for u in active_seamstresses()}

# — ограничение выборок —
def scope_to_user(query, column, user):
    """Швея видит только свои строки; менеджер и админ — все."""
    if is_staff(user):
        return query
    return query.filter(column == getattr(user, "id", 0))

# — право менять статус задачи —
def can_update_task(user, task) -> bool:
    if is_staff(user):
        return True
    return int(task.seamstress_id) == int(getattr(user, "id", 0))
