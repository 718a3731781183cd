from sqlalchemy import func, Index
from ..extensions import db
from .enums import claim_status_enum, ClaimStatus


class Claim(db.Model):
    __tablename__ = "claims"

    id = db.Column(db.Integer, primary_key=True)
    # Human-readable number PREFIX-NNNNN, unique across all prefixes
    claim_nb_tx = db.Column(db.String(32), unique=True, nullable=False)
    claim_title = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text)
    published_url = db.Column(db.String(2048))
    category = db.Column(db.String(120))
    status = db.Column(claim_status_enum, nullable=False, default=ClaimStatus.OPENED.value, server_default=ClaimStatus.OPENED.value)
    comments = db.Column(db.Text)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True))
    date_published = db.Column(db.Date)

    # Relationships
    creator = db.relationship("User", back_populates="claims", lazy="joined")
    validation_reports = db.relationship(
        "ValidationReport",
        back_populates="claim",
        cascade="all, delete-orphan",
        lazy=True,
    )
    rti_requests = db.relationship(
        "RTIRequest",
        back_populates="claim",
        cascade="all, delete-orphan",
        lazy=True,
    )

    __table_args__ = (
        Index("idx_claims_status", "status"),
        Index("idx_claims_category", "category"),
        Index("idx_claims_created_at", "created_at"),
    )
