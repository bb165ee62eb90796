# runner/parser.py
from __future__ import annotations

"""
Find tool-call directives inside free-form generated text.

Two header spellings are accepted for the opening fence:

    ```tool:createFile        (colon form)
    ```tool createFile        (space form)

followed by a newline, a JSON object body and a closing ``` fence at the start
of a line, so backticks inside JSON strings do not end the block. The body is
returned as raw text; decoding happens in the orchestrator.
"""

import re
from typing import List, Tuple

from .types import InvocationDirective

FENCE = "```"

HEADER_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("colon", re.compile(r"```tool:(\w+)[ \t]*\r?\n(.*?)^[ \t]*```", re.DOTALL | re.MULTILINE)),
    ("space", re.compile(r"```tool[ \t]+(\w+)[ \t]*\r?\n(.*?)^[ \t]*```", re.DOTALL | re.MULTILINE)),
)


def parse_directives(text: str) -> List[InvocationDirective]:
    """
    Return every directive in `text`, ordered by where its opening fence starts.

    Each header form is scanned independently so a response may mix them.
    """
    found: List[InvocationDirective] = []
    if not text or FENCE not in text:
        return found

    for syntax, pattern in HEADER_PATTERNS:
        for match in pattern.finditer(text):
            found.append(
                InvocationDirective(
                    tool=match.group(1),
                    payload=match.group(2).strip(),
                    position=match.start(),
                    syntax=syntax,
                )
            )

    found.sort(key=lambda d: d.position)
    return found
