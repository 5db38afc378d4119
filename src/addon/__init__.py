"""Addon design model.

Typed entities for a plugin design (meta, modules, nodes, parameters and
commands), the factories that create them with fresh ids, and the shallow
patch rule used to edit them.

Usage::

    from src.addon import default_state, apply_patch

    state = default_state()
    module = state.modules[0]
    renamed = apply_patch(module, {"name": "ToolsModule"})
"""

from src.addon.defaults import clone_module, create_command, create_module, create_node, default_state
from src.addon.ids import new_id
from src.addon.models import (
    AddonMeta,
    AddonModule,
    AddonState,
    BlueprintNode,
    BlueprintParameter,
    CommandBinding,
    ModuleTarget,
    ParameterKind,
    Placement,
    PluginType,
)
from src.addon.patches import apply_patch

__all__ = [
    "AddonMeta",
    "AddonModule",
    "AddonState",
    "BlueprintNode",
    "BlueprintParameter",
    "CommandBinding",
    "ModuleTarget",
    "ParameterKind",
    "Placement",
    "PluginType",
    "apply_patch",
    "clone_module",
    "create_command",
    "create_module",
    "create_node",
    "default_state",
    "new_id",
]
