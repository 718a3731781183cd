from __future__ import annotations

import logging
from typing import Iterable, Mapping

import openai
from flask import Flask, current_app

from ...errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper over the OpenAI chat-completions API.

    Requests are an ordered list of role-tagged messages and the response is
    the text of the first choice. Errors from the SDK surface as
    ``UpstreamError``; there is no retry.
    """

    def __init__(self, client: openai.OpenAI | None = None, model: str = "gpt-4", temperature: float = 0.7):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: Mapping) -> "LLMClient":
        api_key = config.get("OPENAI_API_KEY")
        client = None
        if api_key:
            client = openai.OpenAI(
                api_key=api_key,
                base_url=config.get("OPENAI_BASE_URL") or None,
                timeout=float(config.get("LLM_TIMEOUT") or 120.0),
            )
        else:
            logger.warning("OPENAI_API_KEY is not set; language model calls will fail")
        return cls(
            client=client,
            model=config.get("LLM_MODEL") or "gpt-4",
            temperature=float(config.get("LLM_TEMPERATURE", 0.7)),
        )

    def complete(
        self,
        messages: Iterable[Mapping[str, str]],
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        if self.client is None:
            raise UpstreamError("Language model is not configured")
        payload = [{"role": m["role"], "content": m["content"]} for m in messages]
        kwargs = {
            "model": self.model,
            "messages": payload,
            "temperature": self.temperature if temperature is None else temperature,
        }
        if max_tokens:
            kwargs["max_tokens"] = int(max_tokens)
        try:
            completion = self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.exception("Language model request failed")
            raise UpstreamError(f"Language model request failed: {e.__class__.__name__}") from e
        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise UpstreamError("Language model returned an empty response")
        return content


def get_llm() -> LLMClient:
    """Return the client installed on the current app (tests swap in a fake)."""
    return current_app.extensions["llm"]


class LLM:
    """Flask extension: each app gets its own ``LLMClient`` in ``app.extensions["llm"]``."""

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.extensions["llm"] = LLMClient.from_config(app.config)
