"""
Актуализация схемы БД (без удаления данных).

Создаёт недостающие таблицы, объявленные в моделях, не трогая существующие
данные. Нужно, когда к старой базе instance/tailorshop.db добавились новые
разделы (задачи, расходы, зарплата).

Запуск:
  python scripts/ensure_schema.py
"""

from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import inspect

# Гарантируем, что корень проекта есть в sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

print("[ensure] Загружаю приложение...")
from tailorshop import create_app  # noqa: E402
from tailorshop.extensions import db  # noqa: E402


def _tables() -> set[str]:
    return set(inspect(db.engine).get_table_names())


def main() -> int:
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[ensure] SQLALCHEMY_DATABASE_URI = {uri}")

        before = _tables()
        print(f"[ensure] Таблиц до: {len(before)}")

        # модели регистрируются в метаданных при импорте пакета
        print("[ensure] Импорт моделей...")
        from tailorshop import models  # noqa: F401

        print("[ensure] Создание недостающих таблиц (если есть)...")
        db.create_all()

        after = _tables()
        created = sorted(after - before)
        if created:
            print(f"[ensure] Созданы таблицы: {', '.join(created)}")
        else:
            print("[ensure] Новых таблиц не потребовалось.")

        optional = ["daily_tasks", "expenses", "payroll_records", "incoming_jobs", "outgoing_jobs"]
        missing = [t for t in optional if t not in after]
        if missing:
            print(f"[ensure] ВНИМАНИЕ: всё ещё нет таблиц: {', '.join(missing)}")
        print("[ensure] Готово.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
