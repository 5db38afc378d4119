"""Addon Architect exporters -- render a design into text artifacts.

Three pure renderers, each ``(AddonState) -> str``:

* ``render_descriptor``    -- the ``.uplugin`` plugin descriptor;
* ``render_specification`` -- the full design as a ``.json`` document;
* ``render_scaffold``      -- a C++ ``.h`` scaffold with node declarations
  and editor command bindings.

Quick usage::

    from src.delivery import DirectorySink
    from src.exporters import deliver_all

    deliver_all(state, DirectorySink("./output"))
"""

from src.exporters.bundle import ExportArtifact, ExportKind, build_exports, deliver_all, export_filenames
from src.exporters.descriptor import render_descriptor
from src.exporters.scaffold import render_scaffold
from src.exporters.specification import render_specification
from src.exporters.templates import TemplateRenderer

__all__ = [
    "ExportArtifact",
    "ExportKind",
    "TemplateRenderer",
    "build_exports",
    "deliver_all",
    "export_filenames",
    "render_descriptor",
    "render_scaffold",
    "render_specification",
]
