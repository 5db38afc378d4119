"""Blueprint specification (``.json``) renderer.

Dumps the whole design.  Parameters are flattened to a fixed shape with every
optional field materialised (``isArray`` false, ``defaultValue`` null,
``description`` empty) and without their ids; everything else is emitted as
stored, in camelCase.
"""

from __future__ import annotations

from typing import Any

from src.addon.models import AddonModule, AddonState, BlueprintNode, BlueprintParameter
from src.utils import dump_json


def normalize_parameter(param: BlueprintParameter) -> dict[str, Any]:
    return {
        "name": param.name,
        "type": param.kind.value,
        "isArray": param.is_array if param.is_array is not None else False,
        "defaultValue": param.default_value,
        "description": param.description if param.description is not None else "",
    }


def _node_entry(node: BlueprintNode) -> dict[str, Any]:
    return {
        "id": node.id,
        "title": node.title,
        "category": node.category,
        "description": node.description,
        "inputs": [normalize_parameter(p) for p in node.inputs],
        "outputs": [normalize_parameter(p) for p in node.outputs],
        "body": node.body,
    }


def _module_entry(module: AddonModule) -> dict[str, Any]:
    return {
        "id": module.id,
        "name": module.name,
        "target": module.target.value,
        "description": module.description,
        "dependencies": list(module.dependencies),
        "nodes": [_node_entry(node) for node in module.nodes],
        "commands": [
            command.model_dump(mode="json", by_alias=True) for command in module.commands
        ],
    }


def build_specification(state: AddonState) -> dict[str, Any]:
    """Specification as a plain dict, before serialisation."""
    return {
        "meta": state.meta.model_dump(mode="json", by_alias=True),
        "modules": [_module_entry(module) for module in state.modules],
    }


def render_specification(state: AddonState) -> str:
    """Render *state* as a two-space indented specification document."""
    return dump_json(build_specification(state))
