import logging
from datetime import date, datetime, timezone

from flask import Blueprint, jsonify, request, g
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from ...errors import NotFound, InternalError
from ...extensions import db
from ...models.claim import Claim
from ...models.enums import ClaimStatus
from ...models.validation_report import ValidationReport
from ...schemas.claim import ClaimCreateSchema, ClaimUpdateSchema, ClaimFilterSchema
from .numbering import insert_with_claim_number

logger = logging.getLogger(__name__)

bp = Blueprint("claims", __name__, url_prefix="/claims")


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def claim_to_dict(c: Claim) -> dict:
    creator = c.creator
    return {
        "id": c.id,
        "claim_nb_tx": c.claim_nb_tx,
        "claim_title": c.claim_title,
        "description": c.description,
        "published_url": c.published_url,
        "category": c.category,
        "status": c.status,
        "comments": c.comments,
        "created_by": c.created_by,
        "created_by_username": getattr(creator, "username", None),
        "created_at": _iso(c.created_at),
        "updated_at": _iso(c.updated_at),
        "date_published": _iso(c.date_published),
    }


def validation_to_dict(v: ValidationReport) -> dict:
    return {
        "id": v.id,
        "claim_id": v.claim_id,
        "validator_id": v.validator_id,
        "validator_username": getattr(v.validator, "username", None),
        "status": v.status,
        "notes": v.notes,
        "ai_generated_full_report": v.ai_generated_full_report,
        "ai_generated_conclusion": v.ai_generated_conclusion,
        "created_at": _iso(v.created_at),
    }


def get_claim_or_404(claim_id: int) -> Claim:
    claim = db.session.get(Claim, claim_id)
    if not claim:
        raise NotFound("Claim not found")
    return claim


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to %s", action)
        raise InternalError(f"Failed to {action}") from e


@bp.get("/stats")
def claim_stats():
    total = db.session.query(func.count(Claim.id)).scalar() or 0
    completed = (
        db.session.query(func.count(Claim.id))
        .filter(Claim.status == ClaimStatus.CLOSED.value)
        .scalar()
        or 0
    )
    return jsonify({"total": int(total), "active": int(total) - int(completed), "completed": int(completed)})


@bp.get("")
def list_claims():
    """List claims, newest first.

    Query params:
      - search: case-insensitive substring of claim number or title
      - category: exact category
      - status: exact status label
      - dateFrom / dateTo: inclusive bounds on date_published (YYYY-MM-DD)
    """
    filters = ClaimFilterSchema().load_args(request.args)

    q = Claim.query
    if filters["search"]:
        # % and _ in the search text match literally
        term = filters["search"].strip()
        q = q.filter(
            or_(
                Claim.claim_nb_tx.icontains(term, autoescape=True),
                Claim.claim_title.icontains(term, autoescape=True),
            )
        )
    if filters["category"]:
        q = q.filter(Claim.category == filters["category"])
    if filters["status"]:
        q = q.filter(Claim.status == filters["status"])
    if filters["date_from"]:
        q = q.filter(Claim.date_published >= filters["date_from"])
    if filters["date_to"]:
        q = q.filter(Claim.date_published <= filters["date_to"])

    claims = q.order_by(Claim.created_at.desc(), Claim.id.desc()).all()
    return jsonify([claim_to_dict(c) for c in claims])


@bp.get("/<int:claim_id>")
def get_claim(claim_id: int):
    return jsonify(claim_to_dict(get_claim_or_404(claim_id)))


@bp.post("")
def create_claim():
    data = ClaimCreateSchema().load(request.get_json(silent=True) or {})

    claim = Claim(
        claim_title=data["claim_title"],
        description=data["description"],
        published_url=data["published_url"],
        category=data["category"] or "",
        status=data["status"] or ClaimStatus.OPENED.value,
        created_by=g.current_user_id,
        date_published=data["date_published"] or date.today(),
    )
    try:
        insert_with_claim_number(claim)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to create claim")
        raise InternalError("Failed to create claim") from e

    logger.info("Created claim %s (id=%s) by user %s", claim.claim_nb_tx, claim.id, g.current_username)
    return jsonify(claim_to_dict(claim)), 201


@bp.put("/<int:claim_id>")
def update_claim(claim_id: int):
    """Update description, comments and/or status.

    Fields that are absent or null keep their stored value. Any status in the
    vocabulary may be set regardless of the current one.
    """
    claim = get_claim_or_404(claim_id)
    data = ClaimUpdateSchema().load(request.get_json(silent=True) or {})

    for field in ("description", "comments", "status"):
        value = data.get(field)
        if value is not None:
            setattr(claim, field, value)
    claim.updated_at = datetime.now(timezone.utc)
    _commit("update claim")

    logger.info("Updated claim %s (status=%s)", claim.claim_nb_tx, claim.status)
    return jsonify(claim_to_dict(claim))


@bp.delete("/<int:claim_id>")
def delete_claim(claim_id: int):
    claim = get_claim_or_404(claim_id)
    number = claim.claim_nb_tx
    # Validation reports and RTI requests go with it (relationship cascade)
    db.session.delete(claim)
    _commit("delete claim")

    logger.info("Deleted claim %s (id=%s)", number, claim_id)
    return jsonify({"message": "Claim deleted successfully"})


@bp.get("/<int:claim_id>/validations")
def list_validations(claim_id: int):
    reports = (
        ValidationReport.query
        .filter(ValidationReport.claim_id == claim_id)
        .order_by(ValidationReport.created_at.desc(), ValidationReport.id.desc())
        .all()
    )
    return jsonify([validation_to_dict(v) for v in reports])


def _get_validation_or_404(claim_id: int, report_id: int) -> ValidationReport:
    report = ValidationReport.query.filter_by(claim_id=claim_id, id=report_id).first()
    if not report:
        raise NotFound("Validation report not found")
    return report


@bp.get("/<int:claim_id>/validations/<int:report_id>")
def get_validation(claim_id: int, report_id: int):
    return jsonify(validation_to_dict(_get_validation_or_404(claim_id, report_id)))


@bp.delete("/<int:claim_id>/validations/<int:report_id>")
def delete_validation(claim_id: int, report_id: int):
    report = _get_validation_or_404(claim_id, report_id)
    db.session.delete(report)
    _commit("delete validation report")
    return jsonify({"message": "Validation report deleted successfully"})


@bp.get("/<int:claim_id>/rti-requests")
def list_claim_rti_requests(claim_id: int):
    from ..rti.routes import list_rti_requests_for_claim  # local import to avoid circulars

    return jsonify(list_rti_requests_for_claim(claim_id))
