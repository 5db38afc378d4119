"""Shared pytest fixtures for the Addon Architect test suite.

Provides reusable fixtures for:
- Default and hand-built designs with fixed ids
- Stores with and without storage
- Temporary storage files
- Golden output files for the renderers
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.addon.defaults import default_state
from src.addon.models import (
    AddonMeta,
    AddonModule,
    AddonState,
    BlueprintNode,
    BlueprintParameter,
    CommandBinding,
    ModuleTarget,
    ParameterKind,
    PluginType,
)
from src.store import AddonStore, StateStorage

GOLDEN_DIR = Path(__file__).parent / "fixtures" / "golden"


# ---------------------------------------------------------------------------
# Designs
# ---------------------------------------------------------------------------

@pytest.fixture
def state() -> AddonState:
    """The default design, fresh ids."""
    return default_state()


@pytest.fixture
def sample_state() -> AddonState:
    """A small design with fixed ids, used by the golden renderer tests.

    ``ToolsModule`` has one node (an object input, an int input with a
    default and description, an array object output) and one command;
    ``EmptyModule`` has neither nodes nor commands.
    """
    node = BlueprintNode(
        id="node-spawn",
        title="SpawnActor",
        category="Actors",
        description="Spawns an actor.",
        inputs=[
            BlueprintParameter(id="param-target", name="Target", kind=ParameterKind.OBJECT),
            BlueprintParameter(
                id="param-count",
                name="Count",
                kind=ParameterKind.INT,
                default_value="1",
                description="How many to spawn",
            ),
        ],
        outputs=[
            BlueprintParameter(
                id="param-spawned", name="Spawned", kind=ParameterKind.OBJECT, is_array=True
            ),
        ],
        body="return Spawned;",
    )
    command = CommandBinding(
        id="cmd-spawn",
        name="Spawn",
        context="LevelEditor",
        hotkey="Ctrl+Alt+P",
        description="Spawns things.",
        script="DoSpawn();",
    )
    return AddonState(
        meta=AddonMeta(
            title="Demo Tools",
            identifier="DemoTools",
            author="Acme",
            version="2.1.0",
            min_engine_version="5.4",
            plugin_type=PluginType.CODE,
            description="Demo plugin.",
        ),
        modules=[
            AddonModule(
                id="mod-tools",
                name="ToolsModule",
                target=ModuleTarget.EDITOR,
                description="Editor tooling.",
                dependencies=["Core"],
                nodes=[node],
                commands=[command],
            ),
            AddonModule(
                id="mod-empty",
                name="EmptyModule",
                target=ModuleTarget.RUNTIME,
                description="",
                dependencies=[],
                nodes=[],
                commands=[],
            ),
        ],
        selected_module_id="mod-tools",
        selected_node_id="node-spawn",
    )


@pytest.fixture
def empty_state() -> AddonState:
    """A design with default meta and no modules at all."""
    return default_state().model_copy(update={"modules": []})


# ---------------------------------------------------------------------------
# Store & storage
# ---------------------------------------------------------------------------

@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "storage" / "storage.json"


@pytest.fixture
def storage(storage_path: Path) -> StateStorage:
    return StateStorage(storage_path)


@pytest.fixture
def store() -> AddonStore:
    """An in-memory store over the default design."""
    return AddonStore()


@pytest.fixture
def persisted_store(storage: StateStorage) -> AddonStore:
    """A store that writes every change to a temporary storage file."""
    return AddonStore(storage=storage)


# ---------------------------------------------------------------------------
# Golden files
# ---------------------------------------------------------------------------

@pytest.fixture
def golden():
    """Read a golden output file, without the newline that ends the file."""

    def _read(name: str) -> str:
        text = (GOLDEN_DIR / name).read_text(encoding="utf-8")
        return text[:-1] if text.endswith("\n") else text

    return _read
