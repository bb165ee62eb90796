# scribe/generator.py
from __future__ import annotations

import logging
from typing import Dict, List

from .config import MAX_OUTPUT_TOKENS, TEMPERATURE, get_model_name, get_openai_client

logger = logging.getLogger(__name__)

Message = Dict[str, str]


class OpenAIGenerator:
    """
    Text generator backed by the OpenAI Responses API.

    Called with the whole message list, returns the reply text. Provider
    errors come back as text so a turn never crashes on them.
    """

    def __init__(self, model: str | None = None) -> None:
        self.model = model or get_model_name()

    def __call__(self, messages: List[Message]) -> str:
        client = get_openai_client()
        if client is None:
            last = messages[-1]["content"] if messages else ""
            return (
                f"You asked: {last!r}. I can't call OpenAI because "
                "OPENAI_API_KEY is not configured."
            )

        try:
            resp = client.responses.create(
                model=self.model,
                input=[{"role": m["role"], "content": m["content"]} for m in messages],
                max_output_tokens=MAX_OUTPUT_TOKENS,
                temperature=TEMPERATURE,
            )
            return (resp.output_text or "").strip() or "I couldn't generate an answer."
        except Exception as e:  # noqa: BLE001
            logger.error("OpenAI request failed: %r", e)
            return f"I tried to answer but hit an OpenAI error: {e!r}"
