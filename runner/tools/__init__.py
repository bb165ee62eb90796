# runner/tools/__init__.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from runner.registry import Registry
from runner.types import ToolDescriptor

from .bash_tool import BASH_TOOL
from .file_tools import FILE_TOOLS
from .search_tools import SEARCH_TOOLS

logger = logging.getLogger(__name__)

# Registration order is the catalogue order shown to the model.
BUILTIN_TOOLS: tuple[ToolDescriptor, ...] = (*FILE_TOOLS, *SEARCH_TOOLS, BASH_TOOL)


def build_default_registry(
    extra: Iterable[ToolDescriptor] = (),
    plugin_dir: Optional[Path] = None,
) -> Registry:
    """
    Build the process-wide registry: built-ins, then `extra`, then any JSON
    plugin descriptors found in `plugin_dir`.

    Raises:
        DuplicateToolError if a later entry reuses a name.
        PluginDescriptorError if a descriptor file is malformed.
    """
    # imported here: runner.plugins depends on this package
    from runner.plugins import load_plugin_descriptors

    registry = Registry()
    for descriptor in BUILTIN_TOOLS:
        registry.register(descriptor)
    for descriptor in extra:
        registry.register(descriptor)
    if plugin_dir is not None:
        for descriptor in load_plugin_descriptors(plugin_dir):
            registry.register(descriptor)

    logger.info("Loaded %d tools", len(registry))
    return registry
