"""Delivery sinks for rendered artifacts.

A sink takes a filename and text content and hands the file to the user.
``DirectorySink`` writes into a local directory; anything else that offers a
``deliver(filename, content)`` method can stand in for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from src.utils import ensure_dir, write_text


@runtime_checkable
class DeliverySink(Protocol):
    """Anything that can receive a named text file."""

    def deliver(self, filename: str, content: str) -> Path | None:
        ...


class DirectorySink:
    """Writes delivered files into *output_dir* as UTF-8 text."""

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def deliver(self, filename: str, content: str) -> Path:
        # Only the final path component is honoured.
        target = ensure_dir(self.output_dir) / Path(filename).name
        return write_text(target, content)
