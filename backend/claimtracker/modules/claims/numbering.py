"""Sequential, human-readable claim numbers.

A claim number is ``PREFIX-NNNNN``: the first three letters of the claim's
category, uppercased, and a zero-padded sequence scoped to that prefix.
Numbers only ever grow; deleting a claim never frees its number.
"""
from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import InternalError
from ...extensions import db
from ...models.claim import Claim
from ...models.claim_sequence import ClaimSequence

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "GEN"
SEQUENCE_WIDTH = 5
MAX_ASSIGN_ATTEMPTS = 3


def claim_prefix(category: str | None) -> str:
    letters = "".join(ch for ch in (category or "") if ch.isascii() and ch.isalpha())
    if not letters:
        return DEFAULT_PREFIX
    return letters[:3].upper().ljust(3, "X")


def parse_claim_number(number: str) -> tuple[str, int]:
    prefix, _, suffix = number.partition("-")
    try:
        return prefix, int(suffix)
    except ValueError:
        return prefix, 0


def format_claim_number(prefix: str, sequence: int) -> str:
    return f"{prefix}-{sequence:0{SEQUENCE_WIDTH}d}"


def _highest_existing(session: Session, prefix: str) -> int:
    # Longer suffixes sort first so the maximum stays numeric past five digits
    last = (
        session.query(Claim.claim_nb_tx)
        .filter(Claim.claim_nb_tx.like(f"{prefix}-%"))
        .order_by(func.length(Claim.claim_nb_tx).desc(), Claim.claim_nb_tx.desc())
        .limit(1)
        .scalar()
    )
    return parse_claim_number(last)[1] if last else 0


def next_claim_number(category: str | None, session: Session | None = None) -> str:
    """Return the number the next claim in ``category`` would receive.

    Read-only: calling it again without an insert in between gives the same
    answer. The result is one past the larger of the highest stored number
    and the highest number ever issued for the prefix.
    """
    session = session or db.session
    prefix = claim_prefix(category)
    issued = session.query(ClaimSequence.last_value).filter(ClaimSequence.prefix == prefix).scalar() or 0
    return format_claim_number(prefix, max(_highest_existing(session, prefix), issued) + 1)


def _record_issued(session: Session, number: str) -> None:
    prefix, sequence = parse_claim_number(number)
    seq = session.get(ClaimSequence, prefix)
    if seq is None:
        seq = ClaimSequence(prefix=prefix, last_value=0)
        session.add(seq)
    seq.last_value = max(seq.last_value or 0, sequence)


def insert_with_claim_number(claim: Claim, session: Session | None = None) -> Claim:
    """Number ``claim`` and commit it.

    Two concurrent creations can read the same maximum; the unique
    constraint on ``claim_nb_tx`` rejects the loser, which recomputes its
    number and tries again.
    """
    session = session or db.session
    for attempt in range(1, MAX_ASSIGN_ATTEMPTS + 1):
        try:
            claim.claim_nb_tx = next_claim_number(claim.category, session)
            _record_issued(session, claim.claim_nb_tx)
            session.add(claim)
            session.commit()
            return claim
        except IntegrityError:
            session.rollback()
            logger.warning("Claim number %s already taken (attempt %d)", claim.claim_nb_tx, attempt)
    raise InternalError("Could not assign a claim number")
