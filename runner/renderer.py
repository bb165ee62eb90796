# runner/renderer.py
from __future__ import annotations

"""
Turn ExecutionResults into short human-readable blocks for the transcript.

Renderers are looked up by tool name. Names without a renderer fall back to a
generic success line, so new tools show up without touching this module.
"""

from typing import Any, Callable, Dict, List

from helpers.text import truncate
from .types import ExecutionResult

SUCCESS_GLYPH = "✅"
FAILURE_GLYPH = "❌"

# Fixed preview sizes for transcript output
READ_PREVIEW_CHARS: int = 500
SHELL_PREVIEW_CHARS: int = 1000
LIST_PREVIEW_ITEMS: int = 20
SEARCH_PREVIEW_ITEMS: int = 10

Renderer = Callable[[Dict[str, Any]], List[str]]

_RENDERERS: Dict[str, Renderer] = {}


def register_renderer(name: str, fn: Renderer) -> None:
    """Register detail lines for a tool name (replaces any previous renderer)."""
    _RENDERERS[name] = fn


def render_result(name: str, result: ExecutionResult) -> str:
    if not result.success:
        kind = result.error_kind or "ExecutionError"
        return f"{FAILURE_GLYPH} {name}: {kind}: {result.error}"

    fn = _RENDERERS.get(name)
    if fn is None:
        return f"{SUCCESS_GLYPH} {name}: completed"

    lines = [f"{SUCCESS_GLYPH} {name}"]
    lines.extend(f"   {line}" for line in fn(result.data or {}))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Per-tool detail lines
# ---------------------------------------------------------------------------

def _render_create(data: Dict[str, Any]) -> List[str]:
    return [f"Created {data.get('path')} ({data.get('size', 0)} bytes written)"]


def _render_read(data: Dict[str, Any]) -> List[str]:
    content = str(data.get("content") or "")
    return [
        f"Read {data.get('size', 0)} bytes from {data.get('path')}",
        "Content:",
        truncate(content, READ_PREVIEW_CHARS),
    ]


def _render_edit(data: Dict[str, Any]) -> List[str]:
    lines = [f"Wrote {data.get('size', 0)} bytes to {data.get('path')}"]
    if data.get("backup_path"):
        lines.append(f"Backup: {data['backup_path']}")
    return lines


def _render_delete(data: Dict[str, Any]) -> List[str]:
    return [f"Deleted {data.get('path')}"]


def _render_list(data: Dict[str, Any]) -> List[str]:
    items = data.get("items") or []
    lines = [f"{len(items)} items in {data.get('path')}"]
    for item in items[:LIST_PREVIEW_ITEMS]:
        if item.get("type") == "directory":
            lines.append(f"- {item.get('name')}/  [dir]")
        else:
            lines.append(f"- {item.get('name')}  [file]  {item.get('size')} bytes")
    if len(items) > LIST_PREVIEW_ITEMS:
        lines.append(f"... and {len(items) - LIST_PREVIEW_ITEMS} more")
    return lines


def _render_file_search(data: Dict[str, Any]) -> List[str]:
    results = data.get("results") or []
    lines = [f"{len(results)} of {data.get('total', len(results))} matches for {data.get('query')!r}"]
    for r in results[:SEARCH_PREVIEW_ITEMS]:
        lines.append(f"- {r.get('path')}  (score {r.get('relevance')})")
    return lines


def _render_grep(data: Dict[str, Any]) -> List[str]:
    results = data.get("results") or []
    lines = [f"{len(results)} matches for /{data.get('pattern')}/"]
    for r in results[:SEARCH_PREVIEW_ITEMS]:
        lines.append(f"- {r.get('file')}:{r.get('line')}: {r.get('content')}")
    if len(results) > SEARCH_PREVIEW_ITEMS:
        lines.append(f"... and {len(results) - SEARCH_PREVIEW_ITEMS} more")
    return lines


def _render_bash(data: Dict[str, Any]) -> List[str]:
    lines = [f"$ {data.get('command')}"]
    stdout = str(data.get("stdout") or "")
    stderr = str(data.get("stderr") or "")
    if stdout:
        lines.append(truncate(stdout, SHELL_PREVIEW_CHARS))
    if stderr:
        lines.append(f"stderr: {truncate(stderr, SHELL_PREVIEW_CHARS)}")
    return lines


register_renderer("createFile", _render_create)
register_renderer("readFile", _render_read)
register_renderer("editFile", _render_edit)
register_renderer("deleteFile", _render_delete)
register_renderer("listDir", _render_list)
register_renderer("fileSearch", _render_file_search)
register_renderer("grepSearch", _render_grep)
register_renderer("bash", _render_bash)
