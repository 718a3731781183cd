"""Stateless conversation plumbing shared by the validation and RTI flows.

The client resends the whole history on every turn; nothing about a
conversation is kept on the server.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from ...errors import InternalError
from ...extensions import db
from ...integrations.llm.client import get_llm
from ...models.claim import Claim
from ...models.enums import ClaimStatus

logger = logging.getLogger(__name__)


def system(content: str) -> dict:
    return {"role": "system", "content": content}


def user(content: str) -> dict:
    return {"role": "user", "content": content}


def chat_messages(system_prompt: str, history: Iterable[Mapping[str, str]], message: str) -> list[dict]:
    return [system(system_prompt), *({"role": m["role"], "content": m["content"]} for m in history), user(message)]


def ask(messages: list[dict], *, max_tokens: int | None = None) -> str:
    for m in messages:
        logger.debug("Prompt [%s]:\n%s", m["role"], m["content"])
    return get_llm().complete(messages, max_tokens=max_tokens)


def file_generated(record: db.Model, claim: Claim, status: ClaimStatus) -> None:
    """Persist a generated record and move its claim to ``status`` atomically."""
    claim.status = status.value
    claim.updated_at = datetime.now(timezone.utc)
    db.session.add(record)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to save %s for claim %s", record.__class__.__name__, claim.claim_nb_tx)
        raise InternalError("Failed to save generated document") from e
