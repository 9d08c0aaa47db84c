# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from ..extensions import db
from ..earnings import item_value, item_date


class Job(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    job_name = db.Column(db.String(180), nullable=False)
    status = db.Column(db.String(16), default="open", index=True)  # open|closed
    notes = db.Column(db.Text)
    total_estimated_amount = db.Column(db.Numeric(12, 2), nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)
    completed_at = db.Column(db.DateTime, nullable=True)

    items = db.relationship(
        "JobItem", backref="job", lazy="select",
        cascade="all, delete-orphan", order_by="JobItem.id",
    )

    @property
    def is_open(self) -> bool:
        return self.status == "open"


class JobItem(db.Model):
    __tablename__ = "job_items"

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("job.id"), nullable=False, index=True)
    operation_id = db.Column(db.Integer, db.ForeignKey("operation.id"), nullable=False)
    seamstress_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True, index=True)

    color = db.Column(db.String(64))
    size = db.Column(db.String(32))
    quantity = db.Column(db.Integer, nullable=False, default=1)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    bonus_amount = db.Column(db.Numeric(12, 2), default=0)
    bonus_note = db.Column(db.String(255))
    order_number = db.Column(db.Integer, nullable=True)

    item_date = db.Column(db.Date, nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    operation = db.relationship("Operation", lazy="joined")
    seamstress = db.relationship("User", lazy="joined", foreign_keys=[seamstress_id])

    @property
    def value(self) -> Decimal:
        return item_value(self)

    @property
    def work_date(self) -> date | None:
        return item_date(self)
