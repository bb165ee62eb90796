# tests/test_plugins.py
from __future__ import annotations

import json
import sys

import pytest

from runner.errors import DuplicateToolError, PluginDescriptorError
from runner.plugins import descriptor_from_dict, load_plugin_descriptors
from runner.tools import build_default_registry

ECHO = {
    "name": "shout",
    "description": "Echo text back",
    "parameters": [
        {"name": "text", "type": "string", "description": "What to say", "required": True},
        {"name": "suffix", "type": "string", "default": "!"},
    ],
    "command": "printf '%s%s' {text} {suffix}",
    "timeout": 5,
}


def write_plugin(directory, data, filename=None):
    directory.mkdir(exist_ok=True)
    path = directory / (filename or f"{data['name']}.json")
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_descriptor_shape():
    descriptor = descriptor_from_dict(ECHO)
    assert descriptor.catalogue_line() == "shout(text: string, suffix?: string): Echo text back"


@pytest.mark.skipif(sys.platform == "win32", reason="needs bash")
def test_plugin_runs_with_quoted_arguments(workdir):
    registry = build_default_registry(plugin_dir=write_plugin(workdir / "tools", ECHO).parent)

    result = registry.execute("shout", {"text": "hi; echo pwned"})

    assert result.success
    assert result.data["stdout"] == "hi; echo pwned!"


@pytest.mark.skipif(sys.platform == "win32", reason="needs bash")
def test_plugin_goes_through_denylist(workdir):
    registry = build_default_registry(plugin_dir=write_plugin(workdir / "tools", ECHO).parent)
    result = registry.execute("shout", {"text": "reboot"})
    assert result.error_kind == "SecurityError"


def test_plugin_validation_uses_schema(workdir):
    registry = build_default_registry(plugin_dir=write_plugin(workdir / "tools", ECHO).parent)
    result = registry.execute("shout", {"text": 42})
    assert result.error_kind == "ValidationError"


def test_plugin_cannot_shadow_builtin(workdir):
    plugin_dir = write_plugin(workdir / "tools", dict(ECHO, name="bash")).parent
    with pytest.raises(DuplicateToolError):
        build_default_registry(plugin_dir=plugin_dir)


@pytest.mark.parametrize(
    "patch",
    [
        {"name": "not a name"},
        {"command": ""},
        {"command": "echo {missing}"},
        {"parameters": [{"name": "text", "type": "integer"}]},
        {"parameters": [{"name": "n", "type": "number", "default": "ten"}], "command": "seq {n}"},
        {"timeout": 0},
        {"timeout": float("inf")},
        {"parameters": {"text": "string"}},
    ],
)
def test_malformed_descriptors(patch):
    with pytest.raises(PluginDescriptorError):
        descriptor_from_dict(dict(ECHO, **patch))


def test_unreadable_json(workdir):
    plugin_dir = workdir / "tools"
    plugin_dir.mkdir()
    (plugin_dir / "broken.json").write_text("{nope", encoding="utf-8")
    with pytest.raises(PluginDescriptorError, match="broken.json"):
        load_plugin_descriptors(plugin_dir)


def test_load_order_and_missing_dir(workdir):
    plugin_dir = workdir / "tools"
    write_plugin(plugin_dir, dict(ECHO, name="zeta"), "b.json")
    write_plugin(plugin_dir, dict(ECHO, name="alpha"), "a.json")

    assert [d.name for d in load_plugin_descriptors(plugin_dir)] == ["alpha", "zeta"]
    assert load_plugin_descriptors(workdir / "absent") == []
