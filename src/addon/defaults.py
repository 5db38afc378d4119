"""Factories that stamp new entities with fresh ids and default content.

Every entity in a state is created through one of these functions, which is
what keeps ids unique: nothing ever reuses an id from another entity.
"""

from __future__ import annotations

from .ids import new_id
from .models import (
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


DEFAULT_NODE_BODY = (
    "// Describe the node behaviour here. This will be exported as a comment "
    "in the generated C++ scaffold.\nreturn Result;"
)

DEFAULT_COMMAND_SCRIPT = (
    "UEditorUtilitySubsystem* UtilitySubsystem = "
    "GEditor->GetEditorSubsystem<UEditorUtilitySubsystem>();\n"
    'UtilitySubsystem->ExecuteUtility(FName("BP_OpenPaletteUtility"));'
)

# Names given to parameters appended through the store.
NEW_PARAMETER_NAMES: dict[Placement, str] = {
    Placement.INPUTS: "InputParam",
    Placement.OUTPUTS: "OutputParam",
}

CLONE_SUFFIX = "Copy"


def create_parameter(name: str, kind: ParameterKind = ParameterKind.STRING) -> BlueprintParameter:
    return BlueprintParameter(id=new_id(), name=name, kind=kind)


def create_node() -> BlueprintNode:
    return BlueprintNode(
        id=new_id(),
        title="Execute Task",
        description="Runs a custom task in the editor or runtime.",
        category="Utilities",
        inputs=[create_parameter("Context")],
        outputs=[create_parameter("Result")],
        body=DEFAULT_NODE_BODY,
    )


def create_command() -> CommandBinding:
    """A blank command as appended by ``add_command``."""
    return CommandBinding(
        id=new_id(),
        name="NewCommand",
        context="LevelEditor",
        hotkey="Ctrl+Shift+N",
        description="Executes a custom command.",
        script="// Script body",
    )


def create_palette_command() -> CommandBinding:
    """The command every new module ships with."""
    return CommandBinding(
        id=new_id(),
        name="OpenPalette",
        context="LevelEditor",
        hotkey="Ctrl+Alt+P",
        description="Opens the add-on palette.",
        script=DEFAULT_COMMAND_SCRIPT,
    )


def create_module() -> AddonModule:
    return AddonModule(
        id=new_id(),
        name="CoreModule",
        target=ModuleTarget.EDITOR_AND_RUNTIME,
        description="Primary module that ships with the add-on.",
        dependencies=["Core", "Engine", "UnrealEd"],
        nodes=[create_node()],
        commands=[create_palette_command()],
    )


def create_meta() -> AddonMeta:
    return AddonMeta(
        title="AddOn Architect",
        identifier="AddonArchitect",
        author="StudioX",
        version="1.0.0",
        min_engine_version="5.3",
        plugin_type=PluginType.HYBRID,
        description=(
            "Design a hybrid Blueprint/C++ add-on with modular nodes, editor "
            "commands, and export utilities."
        ),
    )


def default_state() -> AddonState:
    """Build the initial state: default meta and one default module, nothing selected.

    Each call issues fresh ids, so two default states are equal in everything
    but identity.
    """
    return AddonState(
        meta=create_meta(),
        modules=[create_module()],
        selected_module_id=None,
        selected_node_id=None,
    )


# ---------------------------------------------------------------------------
# Cloning
# ---------------------------------------------------------------------------

def _reissue_parameter(param: BlueprintParameter) -> BlueprintParameter:
    return param.model_copy(update={"id": new_id()})


def _reissue_node(node: BlueprintNode) -> BlueprintNode:
    return node.model_copy(
        update={
            "id": new_id(),
            "inputs": [_reissue_parameter(p) for p in node.inputs],
            "outputs": [_reissue_parameter(p) for p in node.outputs],
        }
    )


def clone_module(module: AddonModule) -> AddonModule:
    """Deep copy *module* with fresh ids throughout and a ``Copy`` name suffix."""
    return module.model_copy(
        update={
            "id": new_id(),
            "name": f"{module.name}{CLONE_SUFFIX}",
            "dependencies": list(module.dependencies),
            "nodes": [_reissue_node(node) for node in module.nodes],
            "commands": [cmd.model_copy(update={"id": new_id()}) for cmd in module.commands],
        }
    )
