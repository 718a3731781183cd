from .user import User
from .claim import Claim
from .validation_report import ValidationReport
from .rti_request import RTIRequest
from .claim_sequence import ClaimSequence

__all__ = [
    "User",
    "Claim",
    "ValidationReport",
    "RTIRequest",
    "ClaimSequence",
]
