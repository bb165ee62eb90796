from __future__ import annotations

import shlex
from typing import Any


def truncate(text: str, limit: int, suffix: str = "\n... (truncated)") -> str:
    """
    Cut `text` to at most `limit` characters, marking the cut.

    Args:
        text: Text to shorten.
        limit: Maximum number of characters kept from `text`.
        suffix: Appended only when something was removed.

    Returns:
        The original text, or its prefix followed by `suffix`.
    """
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def one_line(text: Any) -> str:
    """Collapse all whitespace runs (including newlines) into single spaces."""
    return " ".join(str(text or "").strip().split())


def shell_quote(value: Any) -> str:
    """
    Quote a decoded JSON value for substitution into a shell command.

    Lists are quoted element by element and joined with spaces; booleans
    become `true`/`false` like their JSON spelling.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return " ".join(shell_quote(v) for v in value)
    if value is None:
        return "''"
    return shlex.quote(str(value))
