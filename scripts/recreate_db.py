# -*- coding: utf-8 -*-
"""
Полный ресет SQLite-БД и базовое наполнение с подробными логами.

Запуск из корня проекта:
  python scripts/recreate_db.py

Учётка администратора берётся из ADMIN_EMAIL / ADMIN_PASSWORD (.env),
иначе admin@tailorshop.local / admin.
"""

from __future__ import annotations
import os, sys, traceback
from decimal import Decimal
from pathlib import Path
from typing import Optional
from sqlalchemy import text

# --- путь к проекту ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

print(f"[recreate] ROOT={ROOT}")
if not (ROOT / "tailorshop" / "__init__.py").exists():
    raise SystemExit("[recreate] ошибка: пакет tailorshop не найден рядом со scripts/")

print("[recreate] импорт приложения…")
from tailorshop import create_app  # noqa: E402
from tailorshop.extensions import db  # noqa: E402

print("[recreate] импорт моделей…")
from tailorshop.models import Color, Operation, Size, User  # noqa: E402

OPERATIONS = [
    ("Yoqa tikish", "YQ", Decimal("1500")),
    ("Yeng tikish", "YN", Decimal("1200")),
    ("Tugma qadash", "TG", Decimal("300")),
    ("Dazmollash", "DZ", Decimal("500")),
]
COLORS = ["Oq", "Qora", "Ko'k", "Qizil"]
SIZES = ["S", "M", "L", "XL"]


def _db_path_from_uri(uri: str) -> Optional[Path]:
    if uri.startswith("sqlite:///"):
        return Path(uri.replace("sqlite:///", "")).resolve()
    return None


def _cnt(table: str) -> int:
    return int(db.session.execute(text(f'SELECT COUNT(*) FROM "{table}"')).scalar() or 0)


def main() -> int:
    print("[recreate] create_app()…")
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[recreate] SQLALCHEMY_DATABASE_URI = {uri}")

        db_path = _db_path_from_uri(uri)
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            if db_path.exists():
                print(f"[recreate] удаляю файл БД: {db_path}")
                db.engine.dispose()
                db_path.unlink()
            else:
                print(f"[recreate] файл БД ещё не существует: {db_path}")
        else:
            print("[recreate] БД не sqlite, удаляю таблицы через drop_all()")
            db.drop_all()

        print("[recreate] создаю таблицы по моделям…")
        db.create_all()
        print("[recreate] готово")

        # --- администратор ---
        email = (os.getenv("ADMIN_EMAIL") or "admin@tailorshop.local").lower()
        password = os.getenv("ADMIN_PASSWORD") or "admin"
        print("[recreate] создаю администратора…")
        admin = User(email=email, full_name="Administrator", role="admin", is_active=True)
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        print(f"[recreate] user rows={_cnt('user')}  -> admin id={admin.id}")

        # --- справочники ---
        print("[recreate] заполняю справочники…")
        db.session.add_all(
            [Operation(name=n, code=c, default_price=p, unit="dona") for n, c, p in OPERATIONS]
        )
        db.session.add_all([Color(name=n) for n in COLORS])
        db.session.add_all([Size(name=n) for n in SIZES])
        db.session.commit()
        print(
            f"[recreate] operation={_cnt('operation')} color={_cnt('color')} size={_cnt('size')}"
        )

        print("\n[recreate] Готово.")
        print(f"Логин: {email} / {password}")
        if db_path:
            print(f"\nФайл БД: {db_path}")
        return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        print("\n[recreate] ОШИБКА:")
        traceback.print_exc()
        sys.exit(1)
