import enum

from ..extensions import db


class ClaimStatus(str, enum.Enum):
    """Closed vocabulary for Claim.status. Any value may follow any other."""

    OPENED = "Opened"
    VALIDATION_REPORT_CREATED = "Validation Report Created"
    VALIDATED = "Claim Successfully Validated"
    RTI_REQUEST_CREATED = "RTI Request Created"
    RTI_INFORMATION_RECEIVED = "RTI Information Received"
    VALIDATION_FAILED = "Claim Validation Failed"
    CLOSED = "Closed"


CLAIM_STATUSES = [s.value for s in ClaimStatus]

# Stored as the label string; the CHECK constraint keeps the column inside the vocabulary.
claim_status_enum = db.Enum(
    *CLAIM_STATUSES,
    name="claim_status_enum",
    native_enum=False,
    create_constraint=True,
    length=64,
)

# Status tags written on generated records
VALIDATION_REPORT_GENERATED = "REPORT_GENERATED"
RTI_REQUEST_GENERATED = "GENERATED"
