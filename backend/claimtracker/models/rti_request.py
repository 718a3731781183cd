from sqlalchemy import func, Index
from ..extensions import db


class RTIRequest(db.Model):
    __tablename__ = "rti_requests"

    id = db.Column(db.Integer, primary_key=True)
    claim_id = db.Column(db.Integer, db.ForeignKey("claims.id", ondelete="CASCADE"), nullable=False)
    validator_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    status = db.Column(db.String(64), nullable=False)
    notes = db.Column(db.Text)
    ai_generated_rti_request = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    claim = db.relationship("Claim", back_populates="rti_requests")
    validator = db.relationship("User", back_populates="rti_requests", lazy="joined")

    __table_args__ = (
        Index("idx_rti_requests_claim", "claim_id"),
    )
