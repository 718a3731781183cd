import logging

from flask import Blueprint, current_app, jsonify, request, g

from ...models.enums import ClaimStatus, VALIDATION_REPORT_GENERATED
from ...models.validation_report import ValidationReport
from ...schemas.workflow import ClaimFieldsSchema, ChatSchema, GenerateSchema
from ..claims.routes import get_claim_or_404, validation_to_dict
from ..workflow.conversation import ask, chat_messages, file_generated, system, user
from ..workflow.prompts import ValidationPrompts

logger = logging.getLogger(__name__)

bp = Blueprint("validate", __name__, url_prefix="/validate")


@bp.post("/start")
def start_validation():
    fields = ClaimFieldsSchema().load(request.get_json(silent=True) or {})
    response = ask([
        system(ValidationPrompts.START_PERSONA),
        user(ValidationPrompts.start(fields)),
    ])
    return jsonify({"response": response})


@bp.post("/chat")
def validation_chat():
    data = ChatSchema().load(request.get_json(silent=True) or {})
    claim = get_claim_or_404(data["claim_id"])
    response = ask(chat_messages(ValidationPrompts.chat_system(claim), data["messages"], data["message"]))
    return jsonify({"response": response})


@bp.post("/generate-report")
def generate_report():
    """Write the full validation report, then a one-paragraph conclusion.

    Both model calls must succeed before anything is saved; the report row
    and the claim's new status are committed together.
    """
    data = GenerateSchema().load(request.get_json(silent=True) or {})
    claim = get_claim_or_404(data["claim_id"])

    previous = [
        validation_to_dict(v)
        for v in ValidationReport.query
        .filter(ValidationReport.claim_id == claim.id)
        .order_by(ValidationReport.created_at.desc(), ValidationReport.id.desc())
        .all()
    ]

    logger.info("Generating validation report for claim %s", claim.claim_nb_tx)
    report = ask(
        [system(ValidationPrompts.REPORT_PERSONA), user(ValidationPrompts.report(claim, data["messages"], previous))],
        max_tokens=current_app.config["LLM_REPORT_MAX_TOKENS"],
    )
    conclusion = ask(
        [system(ValidationPrompts.CONCLUSION_PERSONA), user(ValidationPrompts.conclusion(report))],
        max_tokens=current_app.config["LLM_CONCLUSION_MAX_TOKENS"],
    )

    record = ValidationReport(
        claim_id=claim.id,
        validator_id=g.current_user_id,
        status=VALIDATION_REPORT_GENERATED,
        notes="",
        ai_generated_full_report=report,
        ai_generated_conclusion=conclusion,
    )
    file_generated(record, claim, ClaimStatus.VALIDATION_REPORT_CREATED)
    logger.info("Saved validation report %s for claim %s", record.id, claim.claim_nb_tx)

    return jsonify({"report": report, "conclusion": conclusion, "validation": validation_to_dict(record)})
