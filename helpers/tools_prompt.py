from __future__ import annotations

"""
helpers/tools_prompt.py

Turn a Registry's catalogue into the tool block of the system prompt.
"""

from runner.registry import Registry

from .prompts import get_prompt
from .text import one_line


def describe_tools_for_prompt(registry: Registry) -> str:
    """
    Build the human-readable tool list, one `- name(params): description`
    line per registered tool, in registration order.
    """
    return "\n".join(f"- {one_line(line)}" for line in registry.catalogue())


def build_system_prompt(registry: Registry) -> str:
    """System prompt with the current tool catalogue filled in."""
    return get_prompt("scribe_system", TOOLS_BLOCK=describe_tools_for_prompt(registry))
