from datetime import datetime
from ..extensions import db

class Operation(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(180), nullable=False, index=True)
    code = db.Column(db.String(32), nullable=True)
    default_price = db.Column(db.Numeric(12, 2), default=0)
    unit = db.Column(db.String(16), default="dona")
    created_at = db.Column(db.DateTime, default=datetime.now)

class Color(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

class Size(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.now)
