# scribe/turn.py
from __future__ import annotations

"""
One conversation turn: user text -> generator -> tool calls -> reply.

The whole "generate + execute tool calls" step is raced against a turn
timeout. When the timeout fires the turn is abandoned and reported as
failed; shell subprocesses it already started are bounded by their own
timeout, not by this layer.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from runner.orchestrator import augment_text, execute_directives
from runner.registry import Registry
from runner.types import DirectiveOutcome

from .config import get_history_limit, get_turn_timeout
from .session import Session

logger = logging.getLogger(__name__)

Generate = Callable[[List[Dict[str, str]]], str]


@dataclass
class TurnResult:
    status: str  # "ok" | "timeout" | "error"
    reply: str
    outcomes: List[DirectiveOutcome] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "reply": self.reply,
            "error": self.error,
            "results": [o.to_dict() for o in self.outcomes],
        }


def _generate_and_execute(
    messages: List[Dict[str, str]],
    registry: Registry,
    generate: Generate,
) -> Tuple[str, List[DirectiveOutcome]]:
    text = generate(messages)
    outcomes = execute_directives(text, registry)
    return augment_text(text, outcomes), outcomes


def run_turn(
    user_text: str,
    *,
    session: Session,
    registry: Registry,
    generate: Generate,
    timeout: Optional[float] = None,
) -> TurnResult:
    """
    Run one turn and record it in `session`.

    Args:
        user_text: What the user typed.
        session: Explicit session state (history + tool counters).
        registry: Tools available to this turn.
        generate: Callable turning the message list into reply text.
        timeout: Seconds for the whole turn (default: SCRIBE_TURN_TIMEOUT).

    Returns:
        TurnResult; never raises for generator or tool failures.
    """
    limit = timeout if timeout is not None else get_turn_timeout()
    session.add_user_message(user_text)
    messages = list(session.messages)

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="turn")
    future = executor.submit(_generate_and_execute, messages, registry, generate)
    try:
        reply, outcomes = future.result(timeout=limit)
    except FuturesTimeout:
        logger.error("Turn timed out after %ss", limit)
        return TurnResult(
            status="timeout",
            reply="",
            error=f"Turn timed out after {limit} seconds",
        )
    except Exception as e:  # noqa: BLE001
        logger.exception("Turn failed")
        return TurnResult(status="error", reply="", error=f"{type(e).__name__}: {e}")
    finally:
        # do not wait on an abandoned worker
        executor.shutdown(wait=False)

    for outcome in outcomes:
        session.record_tool_call(outcome.directive.tool, outcome.result.success)
    session.add_assistant_message(reply)
    session.compact_history(get_history_limit())

    return TurnResult(status="ok", reply=reply, outcomes=outcomes)
