"""Render every export artifact for a state and hand them to a sink."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from src.addon.models import AddonMeta, AddonState
from src.delivery import DeliverySink
from src.utils import sanitize_identifier

from .descriptor import render_descriptor
from .hotkeys import KEY_ALIASES
from .scaffold import render_scaffold
from .specification import render_specification


class ExportKind(str, Enum):
    """The three artifacts a design exports to."""
    DESCRIPTOR = "descriptor"
    SPECIFICATION = "specification"
    SCAFFOLD = "scaffold"


EXTENSIONS: dict[ExportKind, str] = {
    ExportKind.DESCRIPTOR: ".uplugin",
    ExportKind.SPECIFICATION: ".json",
    ExportKind.SCAFFOLD: ".h",
}


class ExportArtifact(BaseModel):
    """One rendered file, ready for delivery."""
    kind: ExportKind = Field(..., description="Which renderer produced it")
    filename: str = Field(..., description="File name including extension")
    content: str = Field(..., description="Rendered text")


def export_filenames(meta: AddonMeta) -> dict[ExportKind, str]:
    """File names for each artifact, stemmed on the plugin identifier.

    A blank or symbol-only identifier falls back to ``Addon``.
    """
    stem = sanitize_identifier(meta.identifier)
    return {kind: f"{stem}{ext}" for kind, ext in EXTENSIONS.items()}


def build_exports(
    state: AddonState,
    kinds: Iterable[ExportKind | str] | None = None,
    key_aliases: Mapping[str, str] = KEY_ALIASES,
) -> list[ExportArtifact]:
    """Render the requested artifacts (all three by default), in a fixed order."""
    wanted = {ExportKind(k) for k in kinds} if kinds is not None else set(ExportKind)
    names = export_filenames(state.meta)
    renderers = {
        ExportKind.DESCRIPTOR: lambda: render_descriptor(state),
        ExportKind.SPECIFICATION: lambda: render_specification(state),
        ExportKind.SCAFFOLD: lambda: render_scaffold(state, key_aliases),
    }
    return [
        ExportArtifact(kind=kind, filename=names[kind], content=renderers[kind]())
        for kind in ExportKind
        if kind in wanted
    ]


def deliver_all(
    state: AddonState,
    sink: DeliverySink,
    kinds: Iterable[ExportKind | str] | None = None,
    key_aliases: Mapping[str, str] = KEY_ALIASES,
) -> list[Path | None]:
    """Render the requested artifacts and deliver each one through *sink*."""
    return [
        sink.deliver(artifact.filename, artifact.content)
        for artifact in build_exports(state, kinds, key_aliases)
    ]
