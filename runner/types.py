# runner/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

PARAM_KINDS: Dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    # bool is an int subclass in Python; JSON true/false is not a number
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, dict),
}


def kind_of(value: Any) -> str:
    """Name the parameter kind a decoded JSON value belongs to."""
    for kind, accepts in PARAM_KINDS.items():
        if accepts(value):
            return kind
    if value is None:
        return "null"
    return type(value).__name__


@dataclass(frozen=True)
class ParameterSpec:
    """One formal argument of an operation."""

    name: str
    kind: str
    description: str = ""
    required: bool = False
    default: Any = None

    def __post_init__(self) -> None:
        if self.kind not in PARAM_KINDS:
            raise ValueError(
                f"Unknown parameter kind {self.kind!r} for {self.name!r}; "
                f"expected one of {sorted(PARAM_KINDS)}"
            )

    def accepts(self, value: Any) -> bool:
        return PARAM_KINDS[self.kind](value)

    def signature(self) -> str:
        marker = "" if self.required else "?"
        return f"{self.name}{marker}: {self.kind}"


Handler = Callable[[Any], Dict[str, Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Static registration for one operation.

    `args_type` is an optional dataclass. When set, the registry hands the
    handler an instance built from the validated input instead of a dict.
    """

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...]
    handler: Handler
    args_type: Optional[type] = None

    def parameter(self, name: str) -> Optional[ParameterSpec]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def catalogue_line(self) -> str:
        params = ", ".join(p.signature() for p in self.parameters)
        return f"{self.name}({params}): {self.description}"


@dataclass(frozen=True)
class InvocationDirective:
    """A (tool name, raw payload) pair lifted out of generated text."""

    tool: str
    payload: str
    position: int = 0
    syntax: str = "colon"


@dataclass
class ExecutionResult:
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[Dict[str, Any]] = None) -> "ExecutionResult":
        return cls(success=True, data=data if data is not None else {})

    @classmethod
    def fail(cls, error: str, kind: str = "ExecutionError") -> "ExecutionResult":
        return cls(success=False, error=error, error_kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "error_kind": self.error_kind,
        }


@dataclass
class DirectiveOutcome:
    """One directive together with the result it produced."""

    directive: InvocationDirective
    result: ExecutionResult
    rendered: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload = self.result.to_dict()
        payload["tool"] = self.directive.tool
        payload["rendered"] = self.rendered
        return payload
