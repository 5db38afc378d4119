"""Pure state transitions for the addon design.

Each function takes the current ``AddonState`` and returns the next one.  The
input is never modified; unchanged entities are shared between the two
snapshots.  Operations that reference an id which does not exist return the
input state object itself, so ``next is state`` means "nothing happened".

Selection rules:

* adding or cloning a module selects it together with its first node;
* removing a module selects the last remaining module (and its first node);
* adding a node selects it; removing one selects its module's first node;
* ``select_module`` re-derives the node selection, ``select_node`` only
  accepts nodes of the selected module.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from src.addon import defaults
from src.addon.defaults import NEW_PARAMETER_NAMES
from src.addon.models import (
    AddonModule,
    AddonState,
    BlueprintNode,
    BlueprintParameter,
    CommandBinding,
    Placement,
)
from src.addon.patches import apply_patch

Patch = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Immutable update helpers
# ---------------------------------------------------------------------------

def _with_module(
    state: AddonState,
    module_id: str,
    change: Callable[[AddonModule], AddonModule],
) -> AddonState:
    module = state.find_module(module_id)
    if module is None:
        return state
    updated = change(module)
    if updated is module:
        return state
    modules = [updated if mod.id == module_id else mod for mod in state.modules]
    return state.model_copy(update={"modules": modules})


def _with_node(
    module: AddonModule,
    node_id: str,
    change: Callable[[BlueprintNode], BlueprintNode],
) -> AddonModule:
    node = module.find_node(node_id)
    if node is None:
        return module
    updated = change(node)
    if updated is node:
        return module
    nodes = [updated if item.id == node_id else item for item in module.nodes]
    return module.model_copy(update={"nodes": nodes})


def _with_parameters(
    node: BlueprintNode,
    placement: Placement,
    change: Callable[[list[BlueprintParameter]], list[BlueprintParameter] | None],
) -> BlueprintNode:
    """Apply *change* to one parameter list; ``None`` from *change* means no-op."""
    params = change(node.parameters(placement))
    if params is None:
        return node
    return node.model_copy(update={placement.value: params})


def _select(module: AddonModule | None) -> dict[str, Any]:
    return {
        "selected_module_id": module.id if module else None,
        "selected_node_id": module.first_node_id() if module else None,
    }


def _with_selection(state: AddonState, selection: Mapping[str, Any]) -> AddonState:
    """Apply *selection*, or return *state* itself if it is already current."""
    if all(getattr(state, field) == value for field, value in selection.items()):
        return state
    return state.model_copy(update=dict(selection))


# ---------------------------------------------------------------------------
# Meta
# ---------------------------------------------------------------------------

def update_meta(state: AddonState, field: str, value: Any) -> AddonState:
    meta = apply_patch(state.meta, {field: value})
    if meta is state.meta:
        return state
    return state.model_copy(update={"meta": meta})


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------

def add_module(state: AddonState) -> AddonState:
    module = defaults.create_module()
    return state.model_copy(
        update={"modules": [*state.modules, module], **_select(module)}
    )


def clone_module(state: AddonState, module_id: str) -> AddonState:
    existing = state.find_module(module_id)
    if existing is None:
        return state
    cloned = defaults.clone_module(existing)
    return state.model_copy(
        update={"modules": [*state.modules, cloned], **_select(cloned)}
    )


def update_module(state: AddonState, module_id: str, patch: Patch) -> AddonState:
    return _with_module(state, module_id, lambda mod: apply_patch(mod, patch))


def remove_module(state: AddonState, module_id: str) -> AddonState:
    if state.find_module(module_id) is None:
        return state
    modules = [mod for mod in state.modules if mod.id != module_id]
    last = modules[-1] if modules else None
    return state.model_copy(update={"modules": modules, **_select(last)})


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

def add_node(state: AddonState, module_id: str) -> AddonState:
    if state.find_module(module_id) is None:
        return state
    node = defaults.create_node()
    next_state = _with_module(
        state, module_id, lambda mod: mod.model_copy(update={"nodes": [*mod.nodes, node]})
    )
    return next_state.model_copy(
        update={"selected_module_id": module_id, "selected_node_id": node.id}
    )


def update_node(state: AddonState, module_id: str, node_id: str, patch: Patch) -> AddonState:
    return _with_module(
        state,
        module_id,
        lambda mod: _with_node(mod, node_id, lambda node: apply_patch(node, patch)),
    )


def remove_node(state: AddonState, module_id: str, node_id: str) -> AddonState:
    module = state.find_module(module_id)
    if module is None or module.find_node(node_id) is None:
        return state
    remaining = module.model_copy(
        update={"nodes": [node for node in module.nodes if node.id != node_id]}
    )
    next_state = _with_module(state, module_id, lambda _: remaining)
    return next_state.model_copy(update=_select(remaining))


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

def add_parameter(
    state: AddonState, module_id: str, node_id: str, placement: Placement | str
) -> AddonState:
    placement = Placement(placement)
    param = defaults.create_parameter(NEW_PARAMETER_NAMES[placement])
    return _with_module(
        state,
        module_id,
        lambda mod: _with_node(
            mod,
            node_id,
            lambda node: _with_parameters(node, placement, lambda params: [*params, param]),
        ),
    )


def update_parameter(
    state: AddonState,
    module_id: str,
    node_id: str,
    placement: Placement | str,
    param_id: str,
    patch: Patch,
) -> AddonState:
    placement = Placement(placement)

    def change(params: list[BlueprintParameter]) -> list[BlueprintParameter] | None:
        if not any(p.id == param_id for p in params):
            return None
        return [apply_patch(p, patch) if p.id == param_id else p for p in params]

    return _with_module(
        state,
        module_id,
        lambda mod: _with_node(
            mod, node_id, lambda node: _with_parameters(node, placement, change)
        ),
    )


def remove_parameter(
    state: AddonState,
    module_id: str,
    node_id: str,
    placement: Placement | str,
    param_id: str,
) -> AddonState:
    placement = Placement(placement)

    def change(params: list[BlueprintParameter]) -> list[BlueprintParameter] | None:
        if not any(p.id == param_id for p in params):
            return None
        return [p for p in params if p.id != param_id]

    return _with_module(
        state,
        module_id,
        lambda mod: _with_node(
            mod, node_id, lambda node: _with_parameters(node, placement, change)
        ),
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def add_command(state: AddonState, module_id: str) -> AddonState:
    command = defaults.create_command()
    return _with_module(
        state,
        module_id,
        lambda mod: mod.model_copy(update={"commands": [*mod.commands, command]}),
    )


def update_command(
    state: AddonState, module_id: str, command_id: str, patch: Patch
) -> AddonState:
    def change(module: AddonModule) -> AddonModule:
        command = module.find_command(command_id)
        if command is None:
            return module
        updated: CommandBinding = apply_patch(command, patch)
        if updated is command:
            return module
        commands = [updated if cmd.id == command_id else cmd for cmd in module.commands]
        return module.model_copy(update={"commands": commands})

    return _with_module(state, module_id, change)


def remove_command(state: AddonState, module_id: str, command_id: str) -> AddonState:
    def change(module: AddonModule) -> AddonModule:
        if module.find_command(command_id) is None:
            return module
        commands = [cmd for cmd in module.commands if cmd.id != command_id]
        return module.model_copy(update={"commands": commands})

    return _with_module(state, module_id, change)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def select_module(state: AddonState, module_id: str | None) -> AddonState:
    if module_id is None:
        return _with_selection(state, _select(None))
    module = state.find_module(module_id)
    if module is None:
        return state
    return _with_selection(state, _select(module))


def select_node(state: AddonState, node_id: str | None) -> AddonState:
    if node_id is None:
        return _with_selection(state, {"selected_node_id": None})
    module = state.selected_module
    if module is None or module.find_node(node_id) is None:
        return state
    return _with_selection(state, {"selected_node_id": node_id})


def reset(state: AddonState | None = None) -> AddonState:
    """Return a fresh default state; *state* is accepted for a uniform signature."""
    return defaults.default_state()


def repair_selection(state: AddonState) -> AddonState:
    """Clear or re-derive a selection that points at missing entities."""
    if state.selected_module_id is not None and state.selected_module is None:
        return state.model_copy(update={"selected_module_id": None, "selected_node_id": None})
    if not state.selection_is_consistent():
        return state.model_copy(update=_select(state.selected_module))
    return state
