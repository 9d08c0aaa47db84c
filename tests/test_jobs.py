"""Заказы и их позиции."""
from decimal import Decimal

from tailorshop.extensions import db
from tailorshop.models import Color, Job, JobItem, Operation


def test_create_and_list(app, manager_client, users):
    manager_client.post("/jobs/new", data={"job_name": "Shim", "notes": "tez"})
    with app.app_context():
        job = Job.query.filter_by(job_name="Shim").one()
        assert job.status == "open"
        assert job.created_by == users["manager"]
    assert "Shim" in manager_client.get("/jobs/").get_data(as_text=True)


def test_create_requires_name(app, manager_client):
    manager_client.post("/jobs/new", data={"job_name": "  "})
    with app.app_context():
        assert Job.query.count() == 0


def test_list_shows_job_total(manager_client, work):
    # 3600 + позиция без швеи 500
    assert "4 100" in manager_client.get("/jobs/").get_data(as_text=True)


def test_add_item_uses_operation_default_price(app, manager_client, users, work):
    resp = manager_client.post(f"/jobs/{work['job']}/items", data={
        "operation_id": work["operation"], "seamstress_id": users["seamstress2"],
        "quantity": "4", "unit_price": "", "item_date": "2024-03-11",
    })
    assert resp.status_code == 302
    with app.app_context():
        item = JobItem.query.filter_by(seamstress_id=users["seamstress2"]).one()
        assert item.unit_price == Decimal("1000")
        assert item.value == Decimal("4000")


def test_add_item_rejects_negative_values(app, manager_client, work):
    manager_client.post(f"/jobs/{work['job']}/items", data={
        "operation_id": work["operation"], "quantity": "-1", "unit_price": "100",
    })
    manager_client.post(f"/jobs/{work['job']}/items", data={
        "operation_id": work["operation"], "quantity": "1", "unit_price": "100", "bonus_amount": "-5",
    })
    with app.app_context():
        assert JobItem.query.count() == 4


def test_add_item_rejects_inactive_worker(app, manager_client, users, work):
    manager_client.post(f"/jobs/{work['job']}/items", data={
        "operation_id": work["operation"], "seamstress_id": users["blocked"], "quantity": "1", "unit_price": "1",
    })
    with app.app_context():
        assert JobItem.query.filter_by(seamstress_id=users["blocked"]).count() == 0


def test_edit_item(app, manager_client, work):
    with app.app_context():
        item_id = JobItem.query.filter_by(quantity=3).one().id
    assert manager_client.get(f"/jobs/{work['job']}/items/{item_id}/edit").status_code == 200
    manager_client.post(f"/jobs/{work['job']}/items/{item_id}/edit", data={
        "quantity": "5", "unit_price": "300", "bonus_amount": "100", "bonus_note": "sifat",
    })
    with app.app_context():
        item = db.session.get(JobItem, item_id)
        assert item.value == Decimal("1600")
        assert item.bonus_note == "sifat"


def test_toggle_status(app, manager_client, work):
    manager_client.post(f"/jobs/{work['job']}/status")
    with app.app_context():
        job = db.session.get(Job, work["job"])
        assert job.status == "closed"
        assert job.completed_at is not None
    manager_client.post(f"/jobs/{work['job']}/status")
    with app.app_context():
        assert db.session.get(Job, work["job"]).completed_at is None


def test_delete_job_removes_items(app, manager_client, work):
    manager_client.post(f"/jobs/{work['job']}/delete")
    with app.app_context():
        assert Job.query.count() == 0
        assert JobItem.query.count() == 0


def test_seamstress_views_but_cannot_edit(app, seamstress_client, work):
    page = seamstress_client.get(f"/jobs/{work['job']}")
    assert page.status_code == 200
    assert "4 100" in page.get_data(as_text=True)
    seamstress_client.post(f"/jobs/{work['job']}/items", data={
        "operation_id": work["operation"], "quantity": "1", "unit_price": "1",
    })
    with app.app_context():
        assert JobItem.query.count() == 4


def test_operation_in_use_not_deleted(app, manager_client, work):
    manager_client.post(f"/operations/{work['operation']}/delete")
    with app.app_context():
        assert db.session.get(Operation, work["operation"]) is not None


def test_operation_crud(app, manager_client):
    manager_client.post("/operations", data={"name": "Dazmol", "default_price": "1 200,5"})
    with app.app_context():
        op = Operation.query.filter_by(name="Dazmol").one()
        assert op.default_price == Decimal("1200.50")
        assert op.unit == "dona"
        op_id = op.id
    manager_client.post("/operations", data={"id": op_id, "name": "Dazmollash", "default_price": "900"})
    manager_client.post(f"/operations/{op_id}/delete")
    with app.app_context():
        assert Operation.query.count() == 0


def test_colors_unique(app, manager_client):
    manager_client.post("/colors", data={"name": "Oq"})
    manager_client.post("/colors", data={"name": "Oq"})
    with app.app_context():
        assert Color.query.count() == 1
