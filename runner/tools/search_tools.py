# runner/tools/search_tools.py
from __future__ import annotations

"""
File-name and file-content search.

Both tools walk the directory tree in sorted order so results (and ties) are
the same on every run, and both skip dependency/build directories.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from helpers.paths import resolve_tool_path
from runner.errors import ExecutionError
from runner.types import ParameterSpec, ToolDescriptor

IGNORED_DIRS = frozenset({"node_modules", ".git", "dist", "build", "__pycache__", ".venv"})

# Relevance tiers for fileSearch
SCORE_EXACT = 100
SCORE_PREFIX = 80
SCORE_SUBSTRING = 60
SCORE_PER_CHAR = 10
SCORE_OVERLAP_CAP = 40


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every file under `root`, depth-first in sorted name order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _resolve_search_root(directory: str) -> Path:
    root = resolve_tool_path(directory)
    if not root.exists():
        raise ExecutionError(f"Directory does not exist: {root}")
    if not root.is_dir():
        raise ExecutionError(f"Path is not a directory: {root}")
    return root


def calculate_relevance(filename: str, query: str) -> int:
    """
    Score a basename against a query (case-insensitive).

    exact name or stem > prefix > substring > character overlap, where the
    overlap tier scores 10 per query character found in the name, capped at 40.
    """
    name = filename.lower()
    q = query.lower()
    if not q:
        return 0

    if name == q or os.path.splitext(name)[0] == q:
        return SCORE_EXACT
    if name.startswith(q):
        return SCORE_PREFIX
    if q in name:
        return SCORE_SUBSTRING

    score = sum(SCORE_PER_CHAR for ch in q if ch in name)
    return min(score, SCORE_OVERLAP_CAP)


# ---------------------------------------------------------------------------
# fileSearch
# ---------------------------------------------------------------------------

@dataclass
class FileSearchArgs:
    query: str
    directory: str = "."
    max_results: int = 10


def file_search(args: FileSearchArgs) -> Dict[str, Any]:
    root = _resolve_search_root(args.directory)

    scored: List[Dict[str, Any]] = []
    for path in iter_files(root):
        relevance = calculate_relevance(path.name, args.query)
        if relevance > 0:
            scored.append({"path": str(path), "name": path.name, "relevance": relevance})

    # sorted() is stable: equal scores keep discovery order
    ranked = sorted(scored, key=lambda r: r["relevance"], reverse=True)

    return {
        "query": args.query,
        "directory": str(root),
        "results": ranked[: max(int(args.max_results), 0)],
        "total": len(scored),
    }


# ---------------------------------------------------------------------------
# grepSearch
# ---------------------------------------------------------------------------

@dataclass
class GrepSearchArgs:
    pattern: str
    directory: str = "."
    file_types: Optional[List[Any]] = None
    case_sensitive: bool = False
    max_results: int = 50


def _normalise_extensions(file_types: Optional[List[Any]]) -> tuple[str, ...]:
    exts = []
    for ext in file_types or []:
        ext = str(ext).strip()
        if not ext:
            continue
        exts.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(exts)


def grep_search(args: GrepSearchArgs) -> Dict[str, Any]:
    root = _resolve_search_root(args.directory)

    flags = 0 if args.case_sensitive else re.IGNORECASE
    try:
        regex = re.compile(args.pattern, flags)
    except re.error as e:
        raise ExecutionError(f"Invalid regular expression {args.pattern!r}: {e}") from None

    extensions = _normalise_extensions(args.file_types)
    limit = max(int(args.max_results), 0)
    results: List[Dict[str, Any]] = []

    for path in iter_files(root):
        if len(results) >= limit:
            break
        if extensions and not path.name.endswith(extensions):
            continue
        try:
            with path.open("r", encoding="utf-8") as f:
                for lineno, line in enumerate(f, start=1):
                    match = regex.search(line)
                    if match is None:
                        continue
                    results.append(
                        {
                            "file": str(path),
                            "line": lineno,
                            "content": line.strip(),
                            "match": match.group(0),
                        }
                    )
                    if len(results) >= limit:
                        break
        except (OSError, UnicodeDecodeError):
            # unreadable or binary file
            continue

    return {
        "pattern": args.pattern,
        "directory": str(root),
        "results": results,
        "total": len(results),
    }


SEARCH_TOOLS = (
    ToolDescriptor(
        name="fileSearch",
        description="Search for files by name using fuzzy matching",
        parameters=(
            ParameterSpec("query", "string", "File name or pattern to search for", required=True),
            ParameterSpec("directory", "string", "Directory to search in (default: current directory)", default="."),
            ParameterSpec("maxResults", "number", "Maximum number of results to return", default=10),
        ),
        handler=file_search,
        args_type=FileSearchArgs,
    ),
    ToolDescriptor(
        name="grepSearch",
        description="Search for text patterns in files using regex with file type filtering",
        parameters=(
            ParameterSpec("pattern", "string", "Regex pattern to search for", required=True),
            ParameterSpec("directory", "string", "Directory to search in (default: current directory)", default="."),
            ParameterSpec("fileTypes", "array", 'File extensions to include (e.g., [".py", ".md"])'),
            ParameterSpec("caseSensitive", "boolean", "Case sensitive search", default=False),
            ParameterSpec("maxResults", "number", "Maximum number of results to return", default=50),
        ),
        handler=grep_search,
        args_type=GrepSearchArgs,
    ),
)
