# runner/tools/file_tools.py
from __future__ import annotations

import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from helpers.paths import resolve_tool_path
from runner.errors import ExecutionError
from runner.types import ParameterSpec, ToolDescriptor


def _modified(path: Path) -> str:
    return datetime.fromtimestamp(path.stat().st_mtime).isoformat()


def _ensure_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except FileExistsError:
        raise ExecutionError(
            f"Cannot create parent directory for {path}: a file is in the way"
        ) from None


# ---------------------------------------------------------------------------
# createFile
# ---------------------------------------------------------------------------

@dataclass
class CreateFileArgs:
    path: str
    content: str = ""


def create_file(args: CreateFileArgs) -> Dict[str, Any]:
    """Create a new file. Never overwrites: an existing target is an error."""
    target = resolve_tool_path(args.path)
    if target.exists():
        raise ExecutionError(f"File already exists: {target}")

    _ensure_parent(target)
    data = args.content.encode("utf-8")
    with target.open("xb") as f:
        f.write(data)

    return {
        "path": str(target),
        "size": len(data),
        "created": datetime.now().isoformat(),
    }


# ---------------------------------------------------------------------------
# readFile
# ---------------------------------------------------------------------------

@dataclass
class ReadFileArgs:
    path: str
    encoding: str = "utf-8"


def read_file(args: ReadFileArgs) -> Dict[str, Any]:
    target = resolve_tool_path(args.path)
    if not target.exists():
        raise ExecutionError(f"File does not exist: {target}")
    if not target.is_file():
        raise ExecutionError(f"Path is not a file: {target}")

    try:
        content = target.read_text(encoding=args.encoding)
    except LookupError:
        raise ExecutionError(f"Unknown encoding: {args.encoding!r}") from None
    except UnicodeDecodeError:
        raise ExecutionError(
            f"File {target} is not valid {args.encoding} text"
        ) from None

    return {
        "path": str(target),
        "content": content,
        "size": target.stat().st_size,
        "modified": _modified(target),
    }


# ---------------------------------------------------------------------------
# editFile
# ---------------------------------------------------------------------------

@dataclass
class EditFileArgs:
    path: str
    content: str
    backup: bool = True


def edit_file(args: EditFileArgs) -> Dict[str, Any]:
    """
    Overwrite (or create) a file with new content.

    When the file already exists and `backup` is set, the old content is
    copied to `<path>.backup.<epoch-ms>` first.
    """
    target = resolve_tool_path(args.path)
    if target.is_dir():
        raise ExecutionError(f"Path is a directory, not a file: {target}")

    backup_path = None
    if target.exists() and args.backup:
        backup_path = target.with_name(f"{target.name}.backup.{int(time.time() * 1000)}")
        shutil.copy2(target, backup_path)

    _ensure_parent(target)
    data = args.content.encode("utf-8")
    target.write_bytes(data)

    return {
        "path": str(target),
        "size": len(data),
        "backup_path": str(backup_path) if backup_path else None,
        "modified": _modified(target),
    }


# ---------------------------------------------------------------------------
# deleteFile
# ---------------------------------------------------------------------------

@dataclass
class DeleteFileArgs:
    path: str


def delete_file(args: DeleteFileArgs) -> Dict[str, Any]:
    target = resolve_tool_path(args.path)
    if not target.exists():
        raise ExecutionError(f"File does not exist: {target}")
    if not target.is_file():
        raise ExecutionError(f"Path is not a file: {target}")

    target.unlink()
    return {"path": str(target), "deleted": True}


# ---------------------------------------------------------------------------
# listDir
# ---------------------------------------------------------------------------

@dataclass
class ListDirArgs:
    path: str


def list_dir(args: ListDirArgs) -> Dict[str, Any]:
    target = resolve_tool_path(args.path)
    if not target.exists():
        raise ExecutionError(f"Directory does not exist: {target}")
    if not target.is_dir():
        raise ExecutionError(f"Path is not a directory: {target}")

    items: List[Dict[str, Any]] = []
    for entry in sorted(target.iterdir(), key=lambda p: p.name):
        try:
            is_dir = entry.is_dir()
            size = None if is_dir else entry.stat().st_size
            modified = _modified(entry)
        except OSError:
            # broken symlink or entry removed mid-listing
            is_dir, size, modified = False, None, None
        items.append(
            {
                "name": entry.name,
                "type": "directory" if is_dir else "file",
                "size": size,
                "modified": modified,
            }
        )

    return {"path": str(target), "items": items}


FILE_TOOLS = (
    ToolDescriptor(
        name="createFile",
        description="Create a new file with optional content (won't overwrite existing)",
        parameters=(
            ParameterSpec("path", "string", "File path to create", required=True),
            ParameterSpec("content", "string", "File content", default=""),
        ),
        handler=create_file,
        args_type=CreateFileArgs,
    ),
    ToolDescriptor(
        name="readFile",
        description="Read the contents of a file with metadata",
        parameters=(
            ParameterSpec("path", "string", "File path to read", required=True),
            ParameterSpec("encoding", "string", "File encoding (default: utf-8)", default="utf-8"),
        ),
        handler=read_file,
        args_type=ReadFileArgs,
    ),
    ToolDescriptor(
        name="editFile",
        description="Edit or create a file with new content and optional backup",
        parameters=(
            ParameterSpec("path", "string", "File path to edit", required=True),
            ParameterSpec("content", "string", "New file content", required=True),
            ParameterSpec("backup", "boolean", "Create backup of existing file", default=True),
        ),
        handler=edit_file,
        args_type=EditFileArgs,
    ),
    ToolDescriptor(
        name="deleteFile",
        description="Delete a file (irreversible operation)",
        parameters=(
            ParameterSpec("path", "string", "File path to delete", required=True),
        ),
        handler=delete_file,
        args_type=DeleteFileArgs,
    ),
    ToolDescriptor(
        name="listDir",
        description="List files and directories at the given path",
        parameters=(
            ParameterSpec("path", "string", "Directory path to list", required=True),
        ),
        handler=list_dir,
        args_type=ListDirArgs,
    ),
)
