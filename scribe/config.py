# scribe/config.py
from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from openai import OpenAI

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_openai_client() -> Optional[OpenAI]:
    """
    Return a cached OpenAI client configured with the API key from the environment.

    If OPENAI_API_KEY is missing, return None.
    Callers must handle the None-case (the generator falls back to stub replies).

    Returns:
        OpenAI | None
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


def get_model_name(default: str = "gpt-4.1-mini") -> str:
    """
    Resolve the generator model name from the environment.

    Env:
        SCRIBE_MODEL - override model name
    """
    return os.getenv("SCRIBE_MODEL", default)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
    return value if value > 0 else default


def get_turn_timeout(default: float = 60.0) -> float:
    """
    Seconds allowed for one whole "generate + run tool calls" turn.

    Env:
        SCRIBE_TURN_TIMEOUT
    """
    return _float_env("SCRIBE_TURN_TIMEOUT", default)


def get_history_limit(default: int = 20) -> int:
    """
    Number of messages kept when the session history is compacted.

    Env:
        SCRIBE_HISTORY_LIMIT
    """
    return int(_float_env("SCRIBE_HISTORY_LIMIT", default))


def get_plugin_dir() -> Optional[Path]:
    """
    Directory scanned for JSON tool descriptors.

    Env:
        TOOLS_PLUGIN_DIR - explicit directory; defaults to ./tools when present.
    """
    raw = os.getenv("TOOLS_PLUGIN_DIR")
    if raw:
        return Path(raw)
    default = Path.cwd() / "tools"
    return default if default.is_dir() else None


# ---------------------------------------------------------------------------
# Generation parameters
# ---------------------------------------------------------------------------

MAX_OUTPUT_TOKENS: int = 4096
"""
Upper bound on tokens generated per response.
"""

TEMPERATURE: float = 0.7
"""
Sampling temperature passed to the model.
"""
