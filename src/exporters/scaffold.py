"""C++ header scaffold renderer.

Produces a ``{identifier}.h`` text with two generated regions:

* a ``UBlueprintFunctionLibrary`` subclass holding one ``UFUNCTION``
  declaration per node, each followed by the node's description, body,
  outputs and inputs in comment blocks;
* a ``Register{identifier}Commands`` function holding one
  ``FUICommandInfoDecl`` binding per command of every module.

``{identifier}`` is the plugin identifier reduced by ``sanitize_identifier``,
the same stem the export file names use.

Node bodies and command scripts are copied verbatim; nothing in them is
parsed or escaped.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from src.addon.models import AddonState, BlueprintNode, BlueprintParameter, ParameterKind
from src.utils import sanitize_identifier

from .hotkeys import KEY_ALIASES
from .templates import TemplateRenderer

EMPTY_OUTPUTS_PLACEHOLDER = "// void"
EMPTY_INPUTS_PLACEHOLDER = "// none"
OBJECT_PARAMETER_TYPE = "UObject*"

SNIPPET_SEPARATOR = "\n\n"


@lru_cache(maxsize=1)
def _default_renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Parameter formatting
# ---------------------------------------------------------------------------

def _signature_argument(param: BlueprintParameter) -> str:
    if param.kind == ParameterKind.OBJECT:
        return f"    {OBJECT_PARAMETER_TYPE} {param.name}"
    return f"    const {param.kind.value} {param.name}"


def _output_line(param: BlueprintParameter) -> str:
    suffix = "[]" if param.is_array else ""
    return f"  {param.kind.value} {param.name}{suffix};"


def _input_line(param: BlueprintParameter) -> str:
    return f"  {param.kind.value} {param.name};"


def _node_context(module_name: str, node: BlueprintNode) -> dict[str, Any]:
    return {
        "module_name": module_name,
        "node": node,
        "signature": ",\n".join(_signature_argument(p) for p in node.inputs),
        "outputs": "\n".join(_output_line(p) for p in node.outputs),
        "inputs": "\n".join(_input_line(p) for p in node.inputs),
        "empty_outputs": EMPTY_OUTPUTS_PLACEHOLDER,
        "empty_inputs": EMPTY_INPUTS_PLACEHOLDER,
    }


# ---------------------------------------------------------------------------
# Regions
# ---------------------------------------------------------------------------

def render_node_region(state: AddonState, renderer: TemplateRenderer | None = None) -> str:
    """All node declarations, grouped by module, unindented."""
    renderer = renderer or _default_renderer()
    per_module = [
        SNIPPET_SEPARATOR.join(
            renderer.render("scaffold/node.h.j2", _node_context(module.name, node))
            for node in module.nodes
        )
        for module in state.modules
    ]
    return SNIPPET_SEPARATOR.join(block for block in per_module if block)


def render_command_region(
    state: AddonState,
    key_aliases: Mapping[str, str] = KEY_ALIASES,
    renderer: TemplateRenderer | None = None,
) -> str:
    """All command bindings across every module, unindented."""
    renderer = renderer or _default_renderer()
    return SNIPPET_SEPARATOR.join(
        renderer.render(
            "scaffold/command.cpp.j2",
            {"command": command, "key_aliases": key_aliases},
        )
        for module in state.modules
        for command in module.commands
    )


def render_scaffold(
    state: AddonState,
    key_aliases: Mapping[str, str] = KEY_ALIASES,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the full header scaffold for *state*."""
    renderer = renderer or _default_renderer()
    return renderer.render(
        "scaffold/header.h.j2",
        {
            "identifier": sanitize_identifier(state.meta.identifier),
            "node_region": render_node_region(state, renderer),
            "command_region": render_command_region(state, key_aliases, renderer),
        },
    )
