# runner/registry.py
from __future__ import annotations

"""
Live catalogue of the operations the generator may call.

The registry is filled once at startup (see runner.tools.build_default_registry)
and only read afterwards. It is used:
- To build the tool block of the system prompt (catalogue)
- To reject unknown tool names
- To validate directive arguments before any handler runs
"""

import logging
import re
from dataclasses import fields as dataclass_fields
from typing import Any, Dict, List, Mapping, Optional

from .errors import (
    DuplicateToolError,
    ToolError,
    ToolNotFoundError,
    ToolValidationError,
)
from .types import ExecutionResult, ToolDescriptor, kind_of

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class Registry:
    def __init__(self) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, descriptor: ToolDescriptor) -> None:
        """Add an operation. Names are unique and case-sensitive."""
        if descriptor.name in self._tools:
            raise DuplicateToolError(
                f"Tool {descriptor.name!r} is already registered"
            )
        self._tools[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def list(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def catalogue(self) -> List[str]:
        """One `name(param?: kind): description` line per tool, in registration order."""
        return [d.catalogue_line() for d in self._tools.values()]

    # ------------------------------------------------------------------
    # Validation + dispatch
    # ------------------------------------------------------------------

    def validate(self, descriptor: ToolDescriptor, raw_input: Any) -> Dict[str, Any]:
        """
        Check raw_input against the descriptor's schema.

        Returns:
            A new dict with declared defaults filled in for missing optional
            parameters. Undeclared keys are kept.

        Raises:
            ToolValidationError on a missing required key or a kind mismatch.
        """
        if not isinstance(raw_input, Mapping):
            raise ToolValidationError(
                f"Input for tool {descriptor.name!r} must be an object, "
                f"got {kind_of(raw_input)}"
            )

        for param in descriptor.parameters:
            if param.required and param.name not in raw_input:
                raise ToolValidationError(
                    f"Required parameter {param.name!r} is missing"
                )
            if param.name in raw_input and not param.accepts(raw_input[param.name]):
                raise ToolValidationError(
                    f"Parameter {param.name!r} has invalid type. "
                    f"Expected {param.kind}, got {kind_of(raw_input[param.name])}"
                )

        merged = dict(raw_input)
        for param in descriptor.parameters:
            if not param.required and param.name not in merged:
                merged[param.name] = param.default
        return merged

    def _build_args(self, descriptor: ToolDescriptor, merged: Dict[str, Any]) -> Any:
        if descriptor.args_type is None:
            return merged

        # Only declared parameter names reach the dataclass; camelCase names
        # map onto snake_case fields.
        fields = {f.name for f in dataclass_fields(descriptor.args_type)}
        values: Dict[str, Any] = {}
        for param in descriptor.parameters:
            attr = _snake_case(param.name)
            if attr in fields and param.name in merged:
                values[attr] = merged[param.name]

        declared = {p.name for p in descriptor.parameters}
        extra = [key for key in merged if key not in declared]
        if extra:
            logger.debug("Ignoring undeclared keys for %s: %s", descriptor.name, sorted(extra))
        return descriptor.args_type(**values)

    def execute(self, name: str, raw_input: Any) -> ExecutionResult:
        """
        Validate and run one tool call. Never raises.

        Handler exceptions become failed results: ToolError subclasses keep
        their kind, anything else is reported as an ExecutionError.
        """
        descriptor = self.get(name)
        if descriptor is None:
            return ExecutionResult.fail(
                f"Tool {name!r} not found", ToolNotFoundError.kind
            )

        try:
            merged = self.validate(descriptor, raw_input)
            args = self._build_args(descriptor, merged)
        except ToolError as e:
            return ExecutionResult.fail(
                f"Invalid input for tool {name!r}: {e}", e.kind
            )

        try:
            data = descriptor.handler(args)
        except ToolError as e:
            return ExecutionResult.fail(str(e), e.kind)
        except Exception as e:  # noqa: BLE001
            logger.exception("Tool %s crashed", name)
            return ExecutionResult.fail(
                f"Error executing tool {name!r}: {type(e).__name__} - {e}"
            )

        return ExecutionResult.ok(data)
