"""Davomat и ежедневные задачи."""
from datetime import date, datetime, timedelta

from tailorshop.extensions import db
from tailorshop.models import Attendance, DailyTask


def test_check_in_once_per_day(app, seamstress_client, users):
    seamstress_client.post("/attendance/check-in")
    seamstress_client.post("/attendance/check-in")
    with app.app_context():
        assert Attendance.query.filter_by(user_id=users["seamstress"]).count() == 1


def test_check_out_requires_check_in(app, seamstress_client, users):
    seamstress_client.post("/attendance/check-out")
    with app.app_context():
        assert Attendance.query.count() == 0


def test_check_out_sets_time(app, seamstress_client, users):
    seamstress_client.post("/attendance/check-in")
    seamstress_client.post("/attendance/check-out")
    with app.app_context():
        rec = Attendance.query.one()
        assert rec.time_out is not None
        assert rec.time_out >= rec.time_in


def _attendance(app, user_id, day, hours=8):
    with app.app_context():
        start = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
        db.session.add(Attendance(user_id=user_id, date=day, time_in=start, time_out=start + timedelta(hours=hours)))
        db.session.commit()


def test_seamstress_sees_only_own_rows(app, seamstress_client, users):
    _attendance(app, users["seamstress"], date(2024, 3, 1))
    _attendance(app, users["seamstress2"], date(2024, 3, 2))
    body = seamstress_client.get("/attendance/").get_data(as_text=True)
    assert "01.03.2024" in body
    assert "02.03.2024" not in body
    assert "8s 0d" in body


def test_staff_filters(app, manager_client, users):
    _attendance(app, users["seamstress"], date(2024, 3, 1))
    _attendance(app, users["seamstress2"], date(2024, 3, 2))
    _attendance(app, users["seamstress2"], date(2024, 3, 5))
    body = manager_client.get("/attendance/").get_data(as_text=True)
    assert "01.03.2024" in body and "05.03.2024" in body
    body = manager_client.get(
        "/attendance/", query_string={"worker": users["seamstress2"], "start": "2024-03-02", "end": "2024-03-04"}
    ).get_data(as_text=True)
    assert "02.03.2024" in body
    assert "01.03.2024" not in body
    assert "05.03.2024" not in body


def _task(app, users, worker="seamstress"):
    with app.app_context():
        t = DailyTask(
            seamstress_id=users[worker], created_by=users["manager"],
            task_description="100 ta yoqa", task_date=date.today(), status="pending",
        )
        db.session.add(t)
        db.session.commit()
        return t.id


def test_manager_creates_task(app, manager_client, users):
    manager_client.post("/tasks", data={"seamstress_id": users["seamstress"], "task_description": "Yeng tikish"})
    with app.app_context():
        t = DailyTask.query.one()
        assert t.status == "pending"
        assert t.task_date == date.today()


def test_task_for_inactive_worker_rejected(app, manager_client, users):
    manager_client.post("/tasks", data={"seamstress_id": users["blocked"], "task_description": "x"})
    with app.app_context():
        assert DailyTask.query.count() == 0


def test_seamstress_updates_own_task(app, seamstress_client, users):
    task_id = _task(app, users)
    resp = seamstress_client.post(f"/tasks/{task_id}/status", data={"status": "done"})
    assert resp.headers["Location"].endswith("/my-tasks")
    with app.app_context():
        assert db.session.get(DailyTask, task_id).status == "done"


def test_foreign_task_forbidden(app, seamstress2_client, users):
    task_id = _task(app, users)
    assert seamstress2_client.post(f"/tasks/{task_id}/status", data={"status": "done"}).status_code == 403


def test_invalid_status_ignored(app, manager_client, users):
    task_id = _task(app, users)
    manager_client.post(f"/tasks/{task_id}/status", data={"status": "finished"})
    with app.app_context():
        assert db.session.get(DailyTask, task_id).status == "pending"


def test_my_tasks_counts(app, seamstress_client, users):
    _task(app, users)
    _task(app, users, "seamstress2")
    body = seamstress_client.get("/my-tasks").get_data(as_text=True)
    assert "Jami: <strong>1</strong>" in body


def test_task_filters(app, manager_client, users):
    _task(app, users)
    other = _task(app, users, "seamstress2")
    manager_client.post(f"/tasks/{other}/status", data={"status": "done"})
    body = manager_client.get("/tasks", query_string={"status": "done"}).get_data(as_text=True)
    assert "Dilnoza" in body
    assert body.count("100 ta yoqa") == 1


def test_tasks_table_missing(app, manager_client, seamstress_client, users):
    with app.app_context():
        DailyTask.__table__.drop(db.engine)
    assert manager_client.get("/tasks").status_code == 200
    assert seamstress_client.get("/my-tasks").status_code == 200
