"""Tests for the pure state transitions (src.store.reducers).

Covers:
- Meta, module, node, parameter and command operations
- Selection re-derivation after every structural change
- Tolerant no-ops for unknown ids
- Cascading removal and order preservation
- Snapshot immutability
"""

from __future__ import annotations

import pytest

from src.addon.models import AddonState, ParameterKind, Placement
from src.store import reducers

pytestmark = pytest.mark.unit


def _all_ids(state: AddonState) -> set[str]:
    ids: set[str] = set()
    for module in state.modules:
        ids |= module.nested_ids()
    return ids


# ---------------------------------------------------------------------------
# Meta
# ---------------------------------------------------------------------------


class TestUpdateMeta:
    def test_replaces_one_field(self, state):
        next_state = reducers.update_meta(state, "title", "Renamed")
        assert next_state.meta.title == "Renamed"
        assert next_state.meta.author == state.meta.author

    def test_alias_field(self, state):
        next_state = reducers.update_meta(state, "minEngineVersion", "5.5")
        assert next_state.meta.min_engine_version == "5.5"

    def test_unknown_field_is_noop(self, state):
        assert reducers.update_meta(state, "colour", "red") is state

    def test_input_not_modified(self, state):
        reducers.update_meta(state, "title", "Renamed")
        assert state.meta.title == "AddOn Architect"


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


class TestAddModule:
    def test_default_example(self, state):
        next_state = reducers.add_module(state)
        assert len(next_state.modules) == 2
        added = next_state.modules[-1]
        assert next_state.selected_module_id == added.id
        assert next_state.selected_node_id == added.nodes[0].id
        assert len(added.nodes) == 1

    def test_existing_modules_shared(self, state):
        next_state = reducers.add_module(state)
        assert next_state.modules[0] is state.modules[0]
        assert len(state.modules) == 1


class TestCloneModule:
    def test_clone_appended_and_selected(self, sample_state):
        next_state = reducers.clone_module(sample_state, "mod-tools")
        cloned = next_state.modules[-1]
        assert cloned.name == "ToolsModuleCopy"
        assert next_state.selected_module_id == cloned.id
        assert next_state.selected_node_id == cloned.nodes[0].id

    def test_ids_disjoint(self, sample_state):
        next_state = reducers.clone_module(sample_state, "mod-tools")
        original, cloned = next_state.modules[0], next_state.modules[-1]
        assert original.nested_ids().isdisjoint(cloned.nested_ids())

    def test_clone_empty_module_selects_no_node(self, sample_state):
        next_state = reducers.clone_module(sample_state, "mod-empty")
        assert next_state.selected_module_id == next_state.modules[-1].id
        assert next_state.selected_node_id is None

    def test_missing_id_is_noop(self, sample_state):
        assert reducers.clone_module(sample_state, "nope") is sample_state


class TestUpdateModule:
    def test_patch(self, sample_state):
        next_state = reducers.update_module(
            sample_state, "mod-tools", {"name": "Renamed", "target": "Runtime"}
        )
        module = next_state.find_module("mod-tools")
        assert module.name == "Renamed"
        assert module.target.value == "Runtime"
        assert module.nodes == sample_state.find_module("mod-tools").nodes

    def test_missing_id_is_noop(self, sample_state):
        assert reducers.update_module(sample_state, "nope", {"name": "X"}) is sample_state

    def test_unknown_fields_ignored(self, sample_state):
        assert reducers.update_module(sample_state, "mod-tools", {"colour": "red"}) is sample_state


class TestRemoveModule:
    def test_cascades(self, sample_state):
        owned = sample_state.find_module("mod-tools").nested_ids()
        next_state = reducers.remove_module(sample_state, "mod-tools")
        assert next_state.find_module("mod-tools") is None
        assert owned.isdisjoint(_all_ids(next_state))

    def test_selects_last_remaining(self, state):
        state = reducers.add_module(state)
        state = reducers.add_module(state)
        first, middle, last = state.modules
        next_state = reducers.remove_module(state, middle.id)
        assert next_state.selected_module_id == last.id
        assert next_state.selected_node_id == last.nodes[0].id

    def test_selection_cleared_when_none_left(self, state):
        next_state = reducers.remove_module(state, state.modules[0].id)
        assert next_state.modules == []
        assert next_state.selected_module_id is None
        assert next_state.selected_node_id is None

    def test_order_preserved(self, state):
        state = reducers.add_module(state)
        state = reducers.add_module(state)
        ids = [m.id for m in state.modules]
        next_state = reducers.remove_module(state, ids[0])
        assert [m.id for m in next_state.modules] == ids[1:]

    def test_missing_id_is_noop(self, sample_state):
        assert reducers.remove_module(sample_state, "nope") is sample_state


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class TestNodes:
    def test_add_node_selects_it(self, sample_state):
        next_state = reducers.add_node(sample_state, "mod-empty")
        module = next_state.find_module("mod-empty")
        assert len(module.nodes) == 1
        assert next_state.selected_module_id == "mod-empty"
        assert next_state.selected_node_id == module.nodes[0].id

    def test_add_node_appends(self, sample_state):
        next_state = reducers.add_node(sample_state, "mod-tools")
        titles = [n.title for n in next_state.find_module("mod-tools").nodes]
        assert titles == ["SpawnActor", "Execute Task"]

    def test_add_node_missing_module_is_noop(self, sample_state):
        assert reducers.add_node(sample_state, "nope") is sample_state

    def test_update_node(self, sample_state):
        next_state = reducers.update_node(
            sample_state, "mod-tools", "node-spawn", {"title": "Spawn", "body": "// new"}
        )
        node = next_state.find_module("mod-tools").find_node("node-spawn")
        assert node.title == "Spawn"
        assert node.body == "// new"
        assert node.inputs == sample_state.modules[0].nodes[0].inputs

    def test_update_node_wrong_module_is_noop(self, sample_state):
        assert (
            reducers.update_node(sample_state, "mod-empty", "node-spawn", {"title": "X"})
            is sample_state
        )

    def test_update_node_missing_node_is_noop(self, sample_state):
        assert reducers.update_node(sample_state, "mod-tools", "nope", {"title": "X"}) is sample_state

    def test_remove_node_reselects_first(self, sample_state):
        state = reducers.add_node(sample_state, "mod-tools")
        second = state.find_module("mod-tools").nodes[1]
        next_state = reducers.remove_node(state, "mod-tools", "node-spawn")
        assert [n.id for n in next_state.find_module("mod-tools").nodes] == [second.id]
        assert next_state.selected_module_id == "mod-tools"
        assert next_state.selected_node_id == second.id

    def test_remove_last_node_clears_node_selection(self, sample_state):
        next_state = reducers.remove_node(sample_state, "mod-tools", "node-spawn")
        assert next_state.selected_module_id == "mod-tools"
        assert next_state.selected_node_id is None

    def test_remove_node_cascades_parameters(self, sample_state):
        next_state = reducers.remove_node(sample_state, "mod-tools", "node-spawn")
        assert {"param-target", "param-count", "param-spawned"}.isdisjoint(_all_ids(next_state))

    def test_remove_node_missing_is_noop(self, sample_state):
        assert reducers.remove_node(sample_state, "mod-tools", "nope") is sample_state
        assert reducers.remove_node(sample_state, "nope", "node-spawn") is sample_state


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


class TestParameters:
    def test_add_input(self, sample_state):
        next_state = reducers.add_parameter(sample_state, "mod-tools", "node-spawn", "inputs")
        node = next_state.find_module("mod-tools").find_node("node-spawn")
        assert [p.name for p in node.inputs] == ["Target", "Count", "InputParam"]
        assert node.inputs[-1].kind == ParameterKind.STRING
        assert len(node.outputs) == 1

    def test_add_output(self, sample_state):
        next_state = reducers.add_parameter(
            sample_state, "mod-tools", "node-spawn", Placement.OUTPUTS
        )
        node = next_state.find_module("mod-tools").find_node("node-spawn")
        assert [p.name for p in node.outputs] == ["Spawned", "OutputParam"]

    def test_bad_placement_raises(self, sample_state):
        with pytest.raises(ValueError):
            reducers.add_parameter(sample_state, "mod-tools", "node-spawn", "sideways")

    def test_add_missing_node_is_noop(self, sample_state):
        assert reducers.add_parameter(sample_state, "mod-tools", "nope", "inputs") is sample_state

    def test_update(self, sample_state):
        next_state = reducers.update_parameter(
            sample_state,
            "mod-tools",
            "node-spawn",
            "inputs",
            "param-count",
            {"kind": "float", "isArray": True},
        )
        count = next_state.find_module("mod-tools").find_node("node-spawn").inputs[1]
        assert count.kind == ParameterKind.FLOAT
        assert count.is_array is True
        assert count.name == "Count"

    def test_update_wrong_placement_is_noop(self, sample_state):
        next_state = reducers.update_parameter(
            sample_state, "mod-tools", "node-spawn", "outputs", "param-count", {"name": "X"}
        )
        assert next_state is sample_state

    def test_remove_preserves_order(self, sample_state):
        state = reducers.add_parameter(sample_state, "mod-tools", "node-spawn", "inputs")
        next_state = reducers.remove_parameter(
            state, "mod-tools", "node-spawn", "inputs", "param-count"
        )
        names = [p.name for p in next_state.find_module("mod-tools").find_node("node-spawn").inputs]
        assert names == ["Target", "InputParam"]

    def test_remove_missing_is_noop(self, sample_state):
        assert (
            reducers.remove_parameter(sample_state, "mod-tools", "node-spawn", "inputs", "nope")
            is sample_state
        )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestCommands:
    def test_add(self, sample_state):
        next_state = reducers.add_command(sample_state, "mod-empty")
        commands = next_state.find_module("mod-empty").commands
        assert [c.name for c in commands] == ["NewCommand"]
        assert next_state.selected_module_id == sample_state.selected_module_id

    def test_add_missing_module_is_noop(self, sample_state):
        assert reducers.add_command(sample_state, "nope") is sample_state

    def test_update(self, sample_state):
        next_state = reducers.update_command(
            sample_state, "mod-tools", "cmd-spawn", {"hotkey": "Shift+F5"}
        )
        assert next_state.find_module("mod-tools").find_command("cmd-spawn").hotkey == "Shift+F5"

    def test_update_missing_is_noop(self, sample_state):
        assert (
            reducers.update_command(sample_state, "mod-tools", "nope", {"name": "X"})
            is sample_state
        )

    def test_remove(self, sample_state):
        next_state = reducers.remove_command(sample_state, "mod-tools", "cmd-spawn")
        assert next_state.find_module("mod-tools").commands == []

    def test_remove_missing_is_noop(self, sample_state):
        assert reducers.remove_command(sample_state, "mod-empty", "cmd-spawn") is sample_state


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_select_module_picks_first_node(self, state):
        state = reducers.add_module(state)
        first = state.modules[0]
        next_state = reducers.select_module(state, first.id)
        assert next_state.selected_module_id == first.id
        assert next_state.selected_node_id == first.nodes[0].id

    def test_select_module_without_nodes(self, sample_state):
        next_state = reducers.select_module(sample_state, "mod-empty")
        assert next_state.selected_module_id == "mod-empty"
        assert next_state.selected_node_id is None

    def test_select_module_none(self, sample_state):
        next_state = reducers.select_module(sample_state, None)
        assert next_state.selected_module_id is None
        assert next_state.selected_node_id is None

    def test_select_missing_module_is_noop(self, sample_state):
        assert reducers.select_module(sample_state, "nope") is sample_state

    def test_select_node_in_selected_module(self, sample_state):
        state = reducers.add_node(sample_state, "mod-tools")
        next_state = reducers.select_node(state, "node-spawn")
        assert next_state.selected_node_id == "node-spawn"
        assert next_state.selected_module_id == "mod-tools"

    def test_select_node_none(self, sample_state):
        next_state = reducers.select_node(sample_state, None)
        assert next_state.selected_node_id is None
        assert next_state.selected_module_id == "mod-tools"

    def test_clearing_empty_selection_is_noop(self, state):
        assert state.selected_module_id is None
        assert reducers.select_module(state, None) is state
        assert reducers.select_node(state, None) is state

    def test_reselecting_current_selection_is_noop(self, sample_state):
        assert reducers.select_module(sample_state, "mod-tools") is sample_state
        assert reducers.select_node(sample_state, "node-spawn") is sample_state

    def test_select_node_outside_selected_module_is_noop(self, sample_state):
        state = reducers.add_node(sample_state, "mod-empty")
        assert reducers.select_node(state, "node-spawn") is state

    def test_invariant_holds_through_a_session(self, state):
        steps = [
            lambda s: reducers.add_module(s),
            lambda s: reducers.clone_module(s, s.modules[0].id),
            lambda s: reducers.add_node(s, s.modules[0].id),
            lambda s: reducers.remove_node(s, s.modules[0].id, s.modules[0].nodes[0].id),
            lambda s: reducers.select_module(s, s.modules[1].id),
            lambda s: reducers.remove_module(s, s.modules[-1].id),
            lambda s: reducers.select_node(s, s.modules[0].nodes[0].id),
            lambda s: reducers.remove_module(s, s.selected_module_id),
            lambda s: reducers.select_module(s, None),
        ]
        for step in steps:
            state = step(state)
            assert state.selection_is_consistent()


# ---------------------------------------------------------------------------
# Reset & repair
# ---------------------------------------------------------------------------


class TestReset:
    def test_reset_restores_default_shape(self, sample_state):
        next_state = reducers.reset(sample_state)
        assert next_state.meta.identifier == "AddonArchitect"
        assert len(next_state.modules) == 1
        assert next_state.selected_module_id is None

    def test_reset_twice_structurally_equal(self, sample_state):
        first = reducers.reset(sample_state)
        second = reducers.reset(first)
        assert first.meta == second.meta
        assert [m.name for m in first.modules] == [m.name for m in second.modules]
        assert first.modules[0].nodes[0].title == second.modules[0].nodes[0].title


class TestRepairSelection:
    def test_consistent_state_unchanged(self, sample_state):
        assert reducers.repair_selection(sample_state) is sample_state

    def test_missing_module_cleared(self, sample_state):
        broken = sample_state.model_copy(update={"selected_module_id": "gone"})
        repaired = reducers.repair_selection(broken)
        assert repaired.selected_module_id is None
        assert repaired.selected_node_id is None

    def test_dangling_node_rederived(self, sample_state):
        broken = sample_state.model_copy(update={"selected_node_id": "gone"})
        repaired = reducers.repair_selection(broken)
        assert repaired.selected_module_id == "mod-tools"
        assert repaired.selected_node_id == "node-spawn"
