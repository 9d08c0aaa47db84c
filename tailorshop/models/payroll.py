from datetime import datetime
from ..extensions import db
from ..earnings import payroll_status


class PayrollRecord(db.Model):
    __tablename__ = "payroll_records"

    id = db.Column(db.Integer, primary_key=True)
    seamstress_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    month = db.Column(db.Integer, nullable=False)  # 1..12
    year = db.Column(db.Integer, nullable=False)
    total_amount = db.Column(db.Numeric(12, 2), default=0)
    paid_amount = db.Column(db.Numeric(12, 2), default=0)
    bonus_amount = db.Column(db.Numeric(12, 2), default=0)
    bonus_note = db.Column(db.String(255))
    notes = db.Column(db.Text)
    status = db.Column(db.String(16), default="unpaid")  # unpaid|partial|paid
    payment_date = db.Column(db.DateTime, nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (db.UniqueConstraint("seamstress_id", "month", "year", name="uq_payroll_month"),)

    def refresh_status(self) -> str:
        self.status = payroll_status(self.total_amount, self.paid_amount, self.bonus_amount)
        return self.status
