from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

# Repository root (where app.py lives)
APP_ROOT = Path(__file__).resolve().parent.parent
PROMPTS_ROOT = APP_ROOT / "prompts"

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@lru_cache(maxsize=None)
def _load_raw_prompt(name: str) -> str:
    """
    Load a prompt file from prompts/ by simple name, e.g.:

        "scribe_system" -> prompts/scribe_system.md
    """
    path = PROMPTS_ROOT / f"{name}.md"
    if not path.is_file():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8")


def fill_placeholders(template: str, **vars: object) -> str:
    """
    Replace {{VAR}} / {{ VAR }} placeholders.

    Raises:
        KeyError naming the first placeholder with no value.
    """
    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in vars:
            raise KeyError(f"No value for prompt placeholder {key!r}")
        return str(vars[key])

    return _PLACEHOLDER.sub(_sub, template)


def get_prompt(name: str, **vars: object) -> str:
    """Load prompts/<name>.md and fill its placeholders."""
    return fill_placeholders(_load_raw_prompt(name), **vars)
