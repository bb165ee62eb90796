# runner/orchestrator.py
from __future__ import annotations

"""
Run the tool directives found in one generated response.

Flow per directive, strictly in source order:
    parse -> JSON decode -> registry validate/execute -> render

A directive that fails at any step yields exactly one failed result and the
remaining directives still run.
"""

import json
import logging
from typing import Any, List, Optional

from .advisory import advisory_note, detect_missed_tool_use
from .errors import ArgumentDecodeError
from .parser import parse_directives
from .registry import Registry
from .renderer import render_result
from .types import DirectiveOutcome, ExecutionResult, InvocationDirective

logger = logging.getLogger(__name__)


def decode_payload(directive: InvocationDirective) -> Any:
    """
    Decode the raw payload of a directive into a dict.

    Raises:
        ArgumentDecodeError if the payload is not a JSON object.
    """
    raw = directive.payload or "{}"
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ArgumentDecodeError(
            f"Invalid JSON arguments for {directive.tool!r}: {e}"
        ) from None
    if not isinstance(decoded, dict):
        raise ArgumentDecodeError(
            f"Arguments for {directive.tool!r} must be a JSON object"
        )
    return decoded


def run_directive(directive: InvocationDirective, registry: Registry) -> ExecutionResult:
    try:
        args = decode_payload(directive)
    except ArgumentDecodeError as e:
        return ExecutionResult.fail(str(e), e.kind)
    return registry.execute(directive.tool, args)


def execute_directives(
    text: str,
    registry: Registry,
    session: Optional[Any] = None,
) -> List[DirectiveOutcome]:
    """
    Execute every directive in `text` one after the other.

    Args:
        text: Raw generated response.
        registry: Registry to validate against and dispatch through.
        session: Optional session state; its tool counters are updated.

    Returns:
        One DirectiveOutcome per directive, in source order.
    """
    outcomes: List[DirectiveOutcome] = []

    for directive in parse_directives(text):
        logger.info("Tool call %s (%s form)", directive.tool, directive.syntax)
        result = run_directive(directive, registry)

        if result.success:
            logger.info("Tool %s succeeded", directive.tool)
        else:
            logger.warning(
                "Tool %s failed [%s]: %s", directive.tool, result.error_kind, result.error
            )

        if session is not None:
            session.record_tool_call(directive.tool, result.success)

        outcomes.append(
            DirectiveOutcome(
                directive=directive,
                result=result,
                rendered=render_result(directive.tool, result),
            )
        )

    return outcomes


def augment_text(text: str, outcomes: List[DirectiveOutcome]) -> str:
    """Append rendered outcomes to `text`, or an advisory when nothing ran."""
    if outcomes:
        rendered = "\n\n".join(o.rendered for o in outcomes)
        return f"{text.rstrip()}\n\n{rendered}"

    labels = detect_missed_tool_use(text)
    if not labels:
        return text

    note = advisory_note(labels)
    logger.warning("Possible missed tool usage: %s", ", ".join(labels))
    return f"{text.rstrip()}\n\n{note}"


def process_tool_calls(
    text: str,
    registry: Registry,
    session: Optional[Any] = None,
) -> str:
    """Execute the directives in `text` and return the augmented transcript text."""
    return augment_text(text, execute_directives(text, registry, session))
