# runner/plugins.py
from __future__ import annotations

"""
Extra tools declared as JSON descriptor files.

A descriptor names a shell command template instead of code, e.g.

    {
      "name": "countLines",
      "description": "Count lines in a file",
      "parameters": [
        {"name": "path", "type": "string", "description": "File", "required": true}
      ],
      "command": "wc -l {path}",
      "timeout": 30
    }

Argument values are shell-quoted before substitution, and the command runs
through the same denylist + timeout guard as the `bash` tool.
"""

import json
import logging
import math
import string
from pathlib import Path
from typing import Any, Dict, List

from helpers.text import shell_quote
from .errors import PluginDescriptorError, ToolValidationError
from .tools.bash_tool import DEFAULT_TIMEOUT_SECONDS, run_command
from .types import PARAM_KINDS, ParameterSpec, ToolDescriptor

logger = logging.getLogger(__name__)


def _parse_parameters(raw: Any, source: str) -> tuple[ParameterSpec, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise PluginDescriptorError(f"{source}: 'parameters' must be a list")

    params: List[ParameterSpec] = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise PluginDescriptorError(f"{source}: every parameter needs a string 'name'")
        kind = entry.get("type", "string")
        if kind not in PARAM_KINDS:
            raise PluginDescriptorError(
                f"{source}: parameter {entry['name']!r} has unknown type {kind!r}"
            )
        required = bool(entry.get("required", False))
        default = entry.get("default")
        if not required and default is not None and not PARAM_KINDS[kind](default):
            raise PluginDescriptorError(
                f"{source}: default for {entry['name']!r} is not a {kind}"
            )
        params.append(
            ParameterSpec(
                name=entry["name"],
                kind=kind,
                description=str(entry.get("description", "")),
                required=required,
                default=default,
            )
        )
    return tuple(params)


def _template_fields(template: str) -> List[str]:
    return [f for _, f, _, _ in string.Formatter().parse(template) if f]


def _make_handler(command: str, timeout: float, params: tuple[ParameterSpec, ...]):
    def handler(args: Dict[str, Any]) -> Dict[str, Any]:
        # Only declared parameters may reach the command line
        values = {p.name: shell_quote(args.get(p.name)) for p in params}
        try:
            rendered = command.format(**values)
        except (KeyError, IndexError, ValueError) as e:
            raise ToolValidationError(f"Cannot fill command template: {e}") from None
        return run_command(rendered, timeout=timeout)

    return handler


def descriptor_from_dict(data: Any, source: str = "<plugin>") -> ToolDescriptor:
    """
    Validate one descriptor mapping and build its ToolDescriptor.

    Raises:
        PluginDescriptorError on any structural problem.
    """
    if not isinstance(data, dict):
        raise PluginDescriptorError(f"{source}: descriptor must be a JSON object")

    name = data.get("name")
    if not isinstance(name, str) or not name.isidentifier():
        raise PluginDescriptorError(f"{source}: 'name' must be an identifier string")

    command = data.get("command")
    if not isinstance(command, str) or not command.strip():
        raise PluginDescriptorError(f"{source}: 'command' must be a non-empty string")

    params = _parse_parameters(data.get("parameters"), source)
    declared = {p.name for p in params}
    unknown = [f for f in _template_fields(command) if f not in declared]
    if unknown:
        raise PluginDescriptorError(
            f"{source}: command references undeclared parameters {unknown}"
        )

    timeout = data.get("timeout", DEFAULT_TIMEOUT_SECONDS)
    if (
        not PARAM_KINDS["number"](timeout)
        or (isinstance(timeout, float) and not math.isfinite(timeout))
        or timeout <= 0
    ):
        raise PluginDescriptorError(f"{source}: 'timeout' must be a positive finite number")

    return ToolDescriptor(
        name=name,
        description=str(data.get("description", "")),
        parameters=params,
        handler=_make_handler(command, timeout, params),
    )


def load_plugin_descriptors(plugin_dir: Path) -> List[ToolDescriptor]:
    """Load every `*.json` descriptor in `plugin_dir`, sorted by file name."""
    if not plugin_dir.is_dir():
        return []

    descriptors: List[ToolDescriptor] = []
    for path in sorted(plugin_dir.glob("*.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PluginDescriptorError(f"{path.name}: unreadable descriptor ({e})") from None
        descriptors.append(descriptor_from_dict(data, source=path.name))
        logger.info("Loaded plugin tool %s from %s", descriptors[-1].name, path.name)
    return descriptors
