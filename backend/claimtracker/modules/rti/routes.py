import logging

from flask import Blueprint, current_app, jsonify, request, g

from ...errors import BadRequest, NotFound
from ...models.enums import ClaimStatus, RTI_REQUEST_GENERATED
from ...models.rti_request import RTIRequest
from ...models.validation_report import ValidationReport
from ...schemas.workflow import ClaimFieldsSchema, RTIStartSchema, ChatSchema, GenerateSchema
from ..claims.routes import get_claim_or_404
from ..workflow.conversation import ask, chat_messages, file_generated, system, user
from ..workflow.prompts import RTIPrompts

logger = logging.getLogger(__name__)

bp = Blueprint("rti", __name__, url_prefix="/rti")


def rti_to_dict(r: RTIRequest) -> dict:
    return {
        "id": r.id,
        "claim_id": r.claim_id,
        "validator_id": r.validator_id,
        "validator_username": getattr(r.validator, "username", None),
        "status": r.status,
        "notes": r.notes,
        "ai_generated_rti_request": r.ai_generated_rti_request,
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }


def _latest_validation(claim_id: int) -> ValidationReport | None:
    return (
        ValidationReport.query
        .filter(ValidationReport.claim_id == claim_id)
        .order_by(ValidationReport.created_at.desc(), ValidationReport.id.desc())
        .first()
    )


def _claim_id_arg() -> int:
    raw = (request.args.get("claimId") or "").strip()
    if not raw:
        raise BadRequest("Claim ID is required")
    try:
        return int(raw)
    except ValueError:
        raise BadRequest("Invalid claimId")


def list_rti_requests_for_claim(claim_id: int) -> list[dict]:
    rows = (
        RTIRequest.query
        .filter(RTIRequest.claim_id == claim_id)
        .order_by(RTIRequest.created_at.desc(), RTIRequest.id.desc())
        .all()
    )
    return [rti_to_dict(r) for r in rows]


@bp.post("/start")
def start_rti():
    fields = RTIStartSchema().load(request.get_json(silent=True) or {})
    latest = _latest_validation(fields["claim_id"]) if fields["claim_id"] else None
    conclusion = latest.ai_generated_conclusion if latest else None
    # The whole briefing goes out as the only message
    response = ask([system(RTIPrompts.start(fields, conclusion))])
    return jsonify({"response": response})


@bp.post("/chat")
def rti_chat():
    data = ChatSchema().load(request.get_json(silent=True) or {})
    claim = get_claim_or_404(data["claim_id"])
    response = ask(chat_messages(RTIPrompts.chat_system(claim), data["messages"], data["message"]))
    return jsonify({"response": response})


@bp.post("/generate")
def draft_rti():
    """Draft an RTI letter from posted claim fields without saving it."""
    fields = ClaimFieldsSchema().load(request.get_json(silent=True) or {})
    draft = ask([system(RTIPrompts.draft(fields))])
    return jsonify({"rtiRequest": draft})


@bp.post("/generate-request")
def generate_request():
    data = GenerateSchema().load(request.get_json(silent=True) or {})
    claim = get_claim_or_404(data["claim_id"])
    latest = _latest_validation(claim.id)

    logger.info("Generating RTI request for claim %s", claim.claim_nb_tx)
    text = ask(
        [
            system(RTIPrompts.REQUEST_PERSONA),
            user(RTIPrompts.request(claim, data["messages"], latest.ai_generated_full_report if latest else None)),
        ],
        max_tokens=current_app.config["LLM_REPORT_MAX_TOKENS"],
    )

    record = RTIRequest(
        claim_id=claim.id,
        validator_id=g.current_user_id,
        status=RTI_REQUEST_GENERATED,
        notes="",
        ai_generated_rti_request=text,
    )
    file_generated(record, claim, ClaimStatus.RTI_REQUEST_CREATED)
    logger.info("Saved RTI request %s for claim %s", record.id, claim.claim_nb_tx)

    return jsonify(rti_to_dict(record))


@bp.get("")
def list_rti_requests():
    return jsonify(list_rti_requests_for_claim(_claim_id_arg()))


@bp.get("/<int:request_id>")
def get_rti_request(request_id: int):
    claim_id = _claim_id_arg()
    record = RTIRequest.query.filter_by(claim_id=claim_id, id=request_id).first()
    if not record:
        raise NotFound("RTI request not found")
    return jsonify(rti_to_dict(record))
