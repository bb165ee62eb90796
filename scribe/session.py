# scribe/session.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """
    Conversation state for one user, passed explicitly to every turn.

    messages[0] is always the system prompt.
    """

    system_prompt: str
    session_id: str = field(default_factory=lambda: f"session_{uuid.uuid4().hex[:12]}")
    started_at: datetime = field(default_factory=_now)
    messages: List[Dict[str, str]] = field(default_factory=list)
    tool_calls: int = 0
    tool_failures: int = 0
    tool_usage: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.messages:
            self.messages.append({"role": "system", "content": self.system_prompt})

    def add_user_message(self, content: str) -> None:
        self.messages.append({"role": "user", "content": content})

    def add_assistant_message(self, content: str) -> None:
        self.messages.append({"role": "assistant", "content": content})

    def record_tool_call(self, name: str, success: bool) -> None:
        self.tool_calls += 1
        if not success:
            self.tool_failures += 1
        self.tool_usage[name] = self.tool_usage.get(name, 0) + 1

    def compact_history(self, max_messages: int = 10) -> None:
        """Keep the system prompt plus the most recent `max_messages - 1` messages."""
        if len(self.messages) <= max_messages:
            return
        keep = max(max_messages - 1, 0)
        recent = self.messages[-keep:] if keep else []
        self.messages = [self.messages[0], *recent]

    def summary(self) -> Dict[str, object]:
        roles = [m["role"] for m in self.messages]
        return {
            "session_id": self.session_id,
            "started_at": self.started_at.isoformat(),
            "duration_minutes": int((_now() - self.started_at).total_seconds() // 60),
            "user_messages": roles.count("user"),
            "assistant_messages": roles.count("assistant"),
            "total_messages": len(self.messages),
            "tool_calls": self.tool_calls,
            "tool_failures": self.tool_failures,
            "tool_usage": dict(self.tool_usage),
        }
