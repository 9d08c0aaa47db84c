"""
Общие фикстуры: приложение на in-memory SQLite, пользователи по ролям
и залогиненные клиенты.
"""
from datetime import date
from decimal import Decimal

import pytest

from tailorshop import create_app
from tailorshop.extensions import db
from tailorshop.models import Job, JobItem, Operation, User

PASSWORD = "secret"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "SECRET_KEY": "test",
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


def _make_user(email, role, full_name, active=True):
    u = User(email=email, full_name=full_name, role=role, is_active=active)
    u.set_password(PASSWORD)
    db.session.add(u)
    return u


@pytest.fixture
def users(app):
    """id пользователей по ролям."""
    with app.app_context():
        created = {
            "admin": _make_user("admin@example.com", "admin", "Admin"),
            "manager": _make_user("manager@example.com", "manager", "Manager"),
            "seamstress": _make_user("gulnora@example.com", "seamstress", "Gulnora"),
            "seamstress2": _make_user("dilnoza@example.com", "seamstress", "Dilnoza"),
            "blocked": _make_user("blocked@example.com", "seamstress", "Blocked", active=False),
        }
        db.session.commit()
        return {k: u.id for k, u in created.items()}


def login(client, email, password=PASSWORD):
    return client.post("/login", data={"email": email, "password": password})


@pytest.fixture
def admin_client(app, users):
    c = app.test_client()
    login(c, "admin@example.com")
    return c


@pytest.fixture
def manager_client(app, users):
    c = app.test_client()
    login(c, "manager@example.com")
    return c


@pytest.fixture
def seamstress_client(app, users):
    c = app.test_client()
    login(c, "gulnora@example.com")
    return c


@pytest.fixture
def seamstress2_client(app, users):
    c = app.test_client()
    login(c, "dilnoza@example.com")
    return c


@pytest.fixture
def work(app, users):
    """
    Заказ с тремя позициями Гульноры за 10.03.2024 (итого 3600)
    и одной позицией без швеи.
    """
    with app.app_context():
        op = Operation(name="Yoqa tikish", default_price=Decimal("1000"))
        job = Job(job_name="Ko'ylak", created_by=users["manager"], status="open")
        db.session.add_all([op, job])
        db.session.flush()
        day = date(2024, 3, 10)
        for qty, price, bonus in ((2, "1000", "0"), (1, "500", "200"), (3, "300", "0")):
            db.session.add(JobItem(
                job_id=job.id, operation_id=op.id, seamstress_id=users["seamstress"],
                quantity=qty, unit_price=Decimal(price), bonus_amount=Decimal(bonus), item_date=day,
            ))
        db.session.add(JobItem(
            job_id=job.id, operation_id=op.id, seamstress_id=None,
            quantity=5, unit_price=Decimal("100"), bonus_amount=Decimal("0"), item_date=day,
        ))
        db.session.commit()
        return {"job": job.id, "operation": op.id}
