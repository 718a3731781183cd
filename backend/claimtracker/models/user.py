from sqlalchemy import func
from ..extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    claims = db.relationship("Claim", back_populates="creator", lazy=True)
    validation_reports = db.relationship("ValidationReport", back_populates="validator", lazy=True)
    rti_requests = db.relationship("RTIRequest", back_populates="validator", lazy=True)
