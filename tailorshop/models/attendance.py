from datetime import date, datetime
from ..extensions import db


class Attendance(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    job_id = db.Column(db.Integer, db.ForeignKey("job.id"), nullable=True)
    date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    time_in = db.Column(db.DateTime, nullable=True)
    time_out = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now)

    user = db.relationship("User", lazy="joined")
    __table_args__ = (db.UniqueConstraint("user_id", "date", name="uq_attendance_day"),)


class DailyTask(db.Model):
    __tablename__ = "daily_tasks"

    id = db.Column(db.Integer, primary_key=True)
    seamstress_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    task_description = db.Column(db.Text, nullable=False)
    task_date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    status = db.Column(db.String(16), default="pending")  # pending|partial|done
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    seamstress = db.relationship("User", lazy="joined", foreign_keys=[seamstress_id])
