"""Shared utility functions for Addon Architect.

Provides JSON I/O, file-system helpers and Rich-based console reporting.
Recoverable faults (storage unavailable, corrupt saved state) are reported
through ``print_warning`` and never raised past the helper that hit them.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_identifier(name: str, fallback: str = "Addon") -> str:
    """Reduce *name* to a code-safe symbol usable as a file stem.

    Characters outside ``[A-Za-z0-9_]`` are dropped.  An empty result falls
    back to *fallback*.

    Examples::

        sanitize_identifier("AddonArchitect")   -> "AddonArchitect"
        sanitize_identifier("My Addon!")        -> "MyAddon"
        sanitize_identifier("   ")              -> "Addon"
    """
    result = re.sub(r"[^A-Za-z0-9_]", "", name)
    return result or fallback


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def dump_json(data: Any) -> str:
    """Serialise *data* as two-space indented JSON, keeping non-ASCII text as is."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not UTF-8 text.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not a JSON object.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: top-level JSON value is not an object")
    return data


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.

    Args:
        data: Serialisable data (dict or list).
        path: Destination file path.

    Returns:
        The path written.
    """
    file_path = Path(path)
    return write_text(file_path, dump_json(data))


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def write_text(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content* as UTF-8."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
