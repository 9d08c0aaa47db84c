# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from ..extensions import db
from ..earnings import job_profit


class IncomingJob(db.Model):
    __tablename__ = "incoming_jobs"

    id = db.Column(db.Integer, primary_key=True)
    job_name = db.Column(db.String(180), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    defective_items = db.Column(db.Integer, default=0)
    extra_work = db.Column(db.Integer, default=0)
    notes = db.Column(db.Text)

    # ставки для раздела «Выручка»
    client_price_per_unit = db.Column(db.Numeric(12, 2), nullable=True)
    worker_cost_per_unit = db.Column(db.Numeric(12, 2), nullable=True)

    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now)

    shipments = db.relationship(
        "OutgoingJob", backref="incoming_job", lazy="select",
        cascade="all, delete-orphan",
        order_by=lambda: [OutgoingJob.date.desc(), OutgoingJob.created_at.desc()],
    )

    @property
    def total_sent(self) -> int:
        return sum(int(s.quantity_sent or 0) for s in self.shipments)

    @property
    def remaining(self) -> int:
        return int(self.quantity or 0) - self.total_sent

    @property
    def delivery_status(self) -> str:
        """pending | partial | sent"""
        sent = self.total_sent
        if sent >= int(self.quantity or 0):
            return "sent"
        if sent > 0:
            return "partial"
        return "pending"

    @property
    def revenue(self) -> Decimal:
        return Decimal(str(self.quantity or 0)) * Decimal(str(self.client_price_per_unit or 0))

    @property
    def worker_cost(self) -> Decimal:
        return Decimal(str(self.quantity or 0)) * Decimal(str(self.worker_cost_per_unit or 0))

    @property
    def profit(self) -> Decimal:
        return job_profit(self.quantity, self.client_price_per_unit, self.worker_cost_per_unit)


class OutgoingJob(db.Model):
    __tablename__ = "outgoing_jobs"

    id = db.Column(db.Integer, primary_key=True)
    incoming_job_id = db.Column(
        db.Integer, db.ForeignKey("incoming_jobs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quantity_sent = db.Column(db.Integer, nullable=False, default=0)
    date = db.Column(db.Date, nullable=False, default=date.today)
    notes = db.Column(db.Text)
    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now)
