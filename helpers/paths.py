from __future__ import annotations

import os
from pathlib import Path

from runner.errors import SecurityError

JAIL_ROOT_ENV = "TOOLS_JAIL_ROOT"


def get_jail_root() -> Path | None:
    """
    Optional jail for tool paths.

    Env:
        TOOLS_JAIL_ROOT - when set, every tool path must resolve inside it.
    """
    raw = os.getenv(JAIL_ROOT_ENV)
    if not raw:
        return None
    return Path(raw).resolve()


def resolve_tool_path(raw_path: str, base: Path | None = None) -> Path:
    """
    Resolve a path given by the model.

    Relative paths resolve against `base` (default: the process working
    directory). When a jail root is configured, a path that escapes it is
    rejected.

    Raises:
        SecurityError if the resolved path is outside the jail.
    """
    if not raw_path:
        raw_path = "."

    root = base if base is not None else Path.cwd()
    target = (root / raw_path).resolve()

    jail = get_jail_root()
    if jail is not None:
        try:
            target.relative_to(jail)
        except ValueError:
            raise SecurityError(
                f"Path {raw_path!r} resolves outside the tool jail {str(jail)!r}"
            ) from None

    return target
