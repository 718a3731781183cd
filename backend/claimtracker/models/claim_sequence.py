from ..extensions import db


class ClaimSequence(db.Model):
    """Highest sequence ever issued per claim-number prefix.

    Survives deletes, so a freed number is never handed out again.
    """

    __tablename__ = "claim_sequences"

    prefix = db.Column(db.String(3), primary_key=True)
    last_value = db.Column(db.Integer, nullable=False, default=0)
