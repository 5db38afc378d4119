"""Plugin descriptor (``.uplugin``) renderer.

The key names, their order and the nesting follow the engine's descriptor
schema and must not change: the output is compared byte for byte.
"""

from __future__ import annotations

from typing import Any

from src.addon.models import AddonModule, AddonState
from src.utils import dump_json

FILE_VERSION = 3
DESCRIPTOR_VERSION = 1
DESCRIPTOR_CATEGORY = "Editor"
CREATED_BY_URL = "https://addon-architect.vercel.app"
LOADING_PHASE = "Default"


def _module_entry(module: AddonModule) -> dict[str, Any]:
    return {
        "Name": module.name,
        "Type": module.target.value,
        "LoadingPhase": LOADING_PHASE,
        "AdditionalDependencies": list(module.dependencies),
    }


def build_descriptor(state: AddonState) -> dict[str, Any]:
    """Descriptor as an ordered dict, before serialisation."""
    meta = state.meta
    return {
        "FileVersion": FILE_VERSION,
        "Version": DESCRIPTOR_VERSION,
        "VersionName": meta.version,
        "FriendlyName": meta.title,
        "EngineVersion": meta.min_engine_version,
        "Description": meta.description,
        "Category": DESCRIPTOR_CATEGORY,
        "CreatedBy": meta.author,
        "CreatedByURL": CREATED_BY_URL,
        "Modules": [_module_entry(module) for module in state.modules],
    }


def render_descriptor(state: AddonState) -> str:
    """Render *state* as a two-space indented ``.uplugin`` JSON document."""
    return dump_json(build_descriptor(state))
