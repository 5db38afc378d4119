"""Pydantic v2 models for the addon design model.

Defines the entity hierarchy a plugin design is made of: the plugin ``Meta``,
its ``AddonModule``s, the callable ``BlueprintNode``s and editor
``CommandBinding``s each module owns, and the ``BlueprintParameter`` slots of a
node.  ``AddonState`` ties them together with the current selection.

Every model is frozen.  State changes never assign to an existing instance;
the store derives new instances with ``model_copy`` so older snapshots stay
valid for anyone still holding them.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ParameterKind(str, Enum):
    """Value kinds a node parameter can carry."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    VECTOR = "vector"
    ROTATOR = "rotator"
    TRANSFORM = "transform"
    OBJECT = "object"
    NAME = "name"
    ARRAY = "array"
    MAP = "map"


class ModuleTarget(str, Enum):
    """Where a module is loaded."""
    EDITOR = "Editor"
    RUNTIME = "Runtime"
    EDITOR_AND_RUNTIME = "EditorAndRuntime"


class PluginType(str, Enum):
    """Overall flavour of the plugin."""
    CODE = "Code"
    BLUEPRINT = "Blueprint"
    HYBRID = "Hybrid"


class Placement(str, Enum):
    """Which parameter list of a node an operation targets."""
    INPUTS = "inputs"
    OUTPUTS = "outputs"


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class AddonModel(BaseModel):
    """Common configuration: frozen, snake_case fields, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


# ---------------------------------------------------------------------------
# Leaf entities
# ---------------------------------------------------------------------------

class BlueprintParameter(AddonModel):
    """A typed, named value slot on a node."""
    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(..., description="Parameter name as emitted in code")
    kind: ParameterKind = Field(default=ParameterKind.STRING, description="Value kind")
    default_value: Optional[str] = Field(default=None, description="Default value literal")
    description: Optional[str] = Field(default=None, description="What the parameter means")
    is_array: Optional[bool] = Field(default=None, description="Whether the slot holds an array")


class BlueprintNode(AddonModel):
    """A callable node with ordered input and output parameters."""
    id: str = Field(..., description="Opaque unique identifier")
    title: str = Field(default="", description="Function name of the node")
    category: str = Field(default="", description="Palette category")
    description: str = Field(default="")
    inputs: list[BlueprintParameter] = Field(default_factory=list)
    outputs: list[BlueprintParameter] = Field(default_factory=list)
    body: str = Field(default="", description="Opaque body fragment, never parsed")

    def parameters(self, placement: Placement) -> list[BlueprintParameter]:
        """Return the parameter list for *placement*."""
        return self.inputs if Placement(placement) == Placement.INPUTS else self.outputs


class CommandBinding(AddonModel):
    """An editor command bound to a hotkey."""
    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(default="")
    context: str = Field(default="", description="Editor context tag, e.g. 'LevelEditor'")
    hotkey: str = Field(default="", description="'+'-joined key tokens, e.g. 'Ctrl+Alt+P'")
    description: str = Field(default="")
    script: str = Field(default="", description="Opaque script fragment, never parsed")


# ---------------------------------------------------------------------------
# Module
# ---------------------------------------------------------------------------

class AddonModule(AddonModel):
    """A named grouping of nodes and commands with a deployment target."""
    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(default="")
    target: ModuleTarget = Field(default=ModuleTarget.EDITOR_AND_RUNTIME)
    description: str = Field(default="")
    dependencies: list[str] = Field(
        default_factory=list, description="Module dependency names; duplicates are allowed"
    )
    nodes: list[BlueprintNode] = Field(default_factory=list)
    commands: list[CommandBinding] = Field(default_factory=list)

    def find_node(self, node_id: str | None) -> BlueprintNode | None:
        return next((node for node in self.nodes if node.id == node_id), None)

    def find_command(self, command_id: str | None) -> CommandBinding | None:
        return next((cmd for cmd in self.commands if cmd.id == command_id), None)

    def first_node_id(self) -> str | None:
        """Id of the first node, or ``None`` when the module has none."""
        return self.nodes[0].id if self.nodes else None

    def nested_ids(self) -> set[str]:
        """Every id owned by this module, its own included."""
        ids = {self.id}
        for node in self.nodes:
            ids.add(node.id)
            ids.update(param.id for param in node.inputs)
            ids.update(param.id for param in node.outputs)
        ids.update(cmd.id for cmd in self.commands)
        return ids


# ---------------------------------------------------------------------------
# Meta & top-level state
# ---------------------------------------------------------------------------

class AddonMeta(AddonModel):
    """Plugin-wide metadata.  A singleton per state."""
    title: str = Field(default="", description="Friendly plugin name")
    identifier: str = Field(default="", description="Code-safe symbol prefix and file stem")
    author: str = Field(default="")
    version: str = Field(default="1.0.0")
    min_engine_version: str = Field(default="", description="Engine compatibility floor")
    plugin_type: PluginType = Field(default=PluginType.HYBRID)
    description: str = Field(default="")


class AddonState(AddonModel):
    """The complete plugin design plus the editor selection."""
    meta: AddonMeta = Field(default_factory=AddonMeta)
    modules: list[AddonModule] = Field(default_factory=list)
    selected_module_id: Optional[str] = Field(default=None)
    selected_node_id: Optional[str] = Field(
        default=None, description="Must name a node of the selected module when set"
    )

    def find_module(self, module_id: str | None) -> AddonModule | None:
        return next((mod for mod in self.modules if mod.id == module_id), None)

    @property
    def selected_module(self) -> AddonModule | None:
        return self.find_module(self.selected_module_id)

    def selection_is_consistent(self) -> bool:
        """True when the node selection is empty or inside the selected module."""
        if self.selected_node_id is None:
            return True
        module = self.selected_module
        return module is not None and module.find_node(self.selected_node_id) is not None

    def to_document(self) -> dict:
        """JSON-compatible dict in the persisted camelCase layout."""
        return self.model_dump(mode="json", by_alias=True)
