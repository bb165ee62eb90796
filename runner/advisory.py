# runner/advisory.py
from __future__ import annotations

"""
Heuristic for "the model described an action but never emitted a directive".

Purely diagnostic: matches produce an advisory note, never an error.
"""

import re
from typing import List, Tuple

MISSED_TOOL_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("create a file", re.compile(r"\b(create|write|make)\b.{0,40}\bfiles?\b", re.I | re.S)),
    ("list a directory", re.compile(r"\b(list|show)\b.{0,40}\b(director(y|ies)|folders?|files)\b", re.I | re.S)),
    ("read a file", re.compile(r"\b(read|open)\b.{0,40}\bfiles?\b", re.I | re.S)),
    ("search files or code", re.compile(r"\b(search|find)\b.{0,40}\b(files?|code)\b", re.I | re.S)),
    ("run a command", re.compile(r"\b(run|execute)\b.{0,40}\bcommands?\b", re.I | re.S)),
)


def detect_missed_tool_use(text: str) -> List[str]:
    """Return the labels of every intent pattern found in `text`."""
    if not text:
        return []
    return [label for label, pattern in MISSED_TOOL_PATTERNS if pattern.search(text)]


def advisory_note(labels: List[str]) -> str:
    return (
        "Note: the response mentions intent to "
        + ", ".join(labels)
        + " but contains no tool directive, so nothing was executed."
    )
