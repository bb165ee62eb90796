# runner/tools/bash_tool.py
from __future__ import annotations

import logging
import math
import os
import platform
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from helpers.paths import resolve_tool_path
from runner.errors import (
    ExecutionError,
    SecurityError,
    ToolTimeoutError,
    ToolValidationError,
)
from runner.types import ParameterSpec, ToolDescriptor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 120
KILL_GRACE_SECONDS: float = 2
MAX_TIMEOUT_SECONDS: float = 3600

# Matched case-insensitively as plain substrings of the command text
DENYLIST = (
    "rm -rf /",
    "rm -rf /*",
    "rm -fr /",
    "dd if=/dev/zero",
    "dd if=/dev/random",
    "mkfs",
    "fdisk",
    "format c:",
    "shutdown",
    "reboot",
    "halt",
    "poweroff",
    ":(){",
)


def check_command(command: str) -> None:
    """
    Reject commands containing a denylisted substring.

    Raises:
        SecurityError naming the matched entry.
    """
    lowered = command.lower()
    for banned in DENYLIST:
        if banned in lowered:
            raise SecurityError(f"Command blocked for security: {banned}")


def _spawn(command: str, cwd: Path) -> subprocess.Popen:
    # New process group / session so a timeout can take down the children too
    if platform.system() == "Windows":
        return subprocess.Popen(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=str(cwd),
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
        )
    return subprocess.Popen(
        ["bash", "-c", command],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        cwd=str(cwd),
        start_new_session=True,
    )


def _terminate(process: subprocess.Popen) -> None:
    """SIGTERM the whole group, escalate to kill, and always reap the child."""
    try:
        if platform.system() == "Windows":
            process.send_signal(signal.CTRL_BREAK_EVENT)
        else:
            os.killpg(os.getpgid(process.pid), signal.SIGTERM)
    except (ProcessLookupError, OSError):
        pass

    try:
        process.communicate(timeout=KILL_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        try:
            if platform.system() == "Windows":
                process.kill()
            else:
                os.killpg(os.getpgid(process.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            pass
        process.communicate()


def _bounded_timeout(timeout: float) -> float:
    """Reject non-finite or non-positive timeouts and cap very long ones."""
    invalid = (
        isinstance(timeout, bool)
        or not isinstance(timeout, (int, float))
        or (isinstance(timeout, float) and not math.isfinite(timeout))
        or timeout <= 0
    )
    if invalid:
        raise ToolValidationError(
            f"Timeout must be a positive finite number of seconds, got {timeout!r}"
        )
    if timeout > MAX_TIMEOUT_SECONDS:
        logger.warning("Capping timeout %ss to %ss", timeout, MAX_TIMEOUT_SECONDS)
        return MAX_TIMEOUT_SECONDS
    return timeout


def run_command(command: str, timeout: float, cwd: Optional[str] = None) -> Dict[str, Any]:
    """
    Run a shell command with the denylist and timeout applied.

    Returns:
        {stdout, stderr, exit_code, command, cwd} on exit code 0.

    Raises:
        SecurityError: denylisted command (nothing is spawned).
        ToolValidationError: `timeout` is not a positive finite number.
        ToolTimeoutError: the command outlived `timeout` seconds and was killed.
        ExecutionError: bad cwd, spawn failure, or non-zero exit code.
    """
    check_command(command)
    timeout = _bounded_timeout(timeout)

    workdir = resolve_tool_path(cwd) if cwd else Path.cwd()
    if not workdir.is_dir():
        raise ExecutionError(f"Working directory does not exist: {workdir}")

    logger.info("bash: %r (cwd=%s, timeout=%ss)", command, workdir, timeout)
    try:
        process = _spawn(command, workdir)
    except OSError as e:
        raise ExecutionError(f"Failed to execute command: {e}") from None

    try:
        stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        _terminate(process)
        raise ToolTimeoutError(
            f"Command timed out after {timeout} seconds (process group terminated)"
        ) from None
    except BaseException:
        _terminate(process)
        raise

    stdout = (stdout or "").strip()
    stderr = (stderr or "").strip()

    if process.returncode != 0:
        detail = f": {stderr}" if stderr else ""
        raise ExecutionError(
            f"Command failed with exit code {process.returncode}{detail}"
        )

    return {
        "stdout": stdout,
        "stderr": stderr,
        "exit_code": process.returncode,
        "command": command,
        "cwd": str(workdir),
    }


@dataclass
class BashArgs:
    command: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    cwd: Optional[str] = None


def bash(args: BashArgs) -> Dict[str, Any]:
    timeout = args.timeout
    # 0 or a negative value means "use the default"; NaN and +inf are rejected later
    if timeout is None or timeout <= 0:
        timeout = DEFAULT_TIMEOUT_SECONDS
    return run_command(args.command, timeout=timeout, cwd=args.cwd)


BASH_TOOL = ToolDescriptor(
    name="bash",
    description="Execute bash commands in a secure environment",
    parameters=(
        ParameterSpec("command", "string", "Bash command to execute", required=True),
        ParameterSpec("timeout", "number", "Command timeout in seconds (default: 120)", default=DEFAULT_TIMEOUT_SECONDS),
        ParameterSpec("cwd", "string", "Working directory for command execution (default: current directory)"),
    ),
    handler=bash,
    args_type=BashArgs,
)
