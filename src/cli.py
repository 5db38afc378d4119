"""Addon Architect command line.

Works on the persisted design state:

    python -m src.cli show
    python -m src.cli export -o ./build
    python -m src.cli export --only scaffold --only descriptor
    python -m src.cli reset
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.addon.models import AddonState
from src.config import Config
from src.delivery import DirectorySink
from src.exporters.bundle import ExportKind, deliver_all
from src.store import AddonStore, StateStorage
from src.utils import console, print_error, print_success, print_summary_table


def _summary(state: AddonState) -> dict[str, str]:
    meta = state.meta
    node_count = sum(len(module.nodes) for module in state.modules)
    command_count = sum(len(module.commands) for module in state.modules)
    selected = state.selected_module
    return {
        "Title": meta.title,
        "Identifier": meta.identifier,
        "Author": meta.author,
        "Version": meta.version,
        "Engine": meta.min_engine_version,
        "Type": meta.plugin_type.value,
        "Modules": ", ".join(module.name for module in state.modules) or "-",
        "Nodes": str(node_count),
        "Commands": str(command_count),
        "Selected module": selected.name if selected else "-",
    }


def _build_config(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    updates: dict[str, object] = {}
    if args.storage:
        updates["storage_path"] = Path(args.storage)
    if args.key:
        updates["storage_key"] = args.key
    if getattr(args, "output", None):
        updates["output_dir"] = Path(args.output)
    return config.model_copy(update=updates)


def cmd_show(store: AddonStore, config: Config, args: argparse.Namespace) -> int:
    print_summary_table(_summary(store.state), title="Addon design")
    return 0


def cmd_export(store: AddonStore, config: Config, args: argparse.Namespace) -> int:
    sink = DirectorySink(config.output_dir)
    try:
        written = deliver_all(store.state, sink, args.only, config.key_aliases)
    except OSError as exc:
        print_error(f"Export failed: {exc}")
        return 1
    for path in written:
        console.print(f"  [green]+[/green] {path}")
    print_success(f"Exported {len(written)} file(s) to {config.output_dir}")
    return 0


def cmd_reset(store: AddonStore, config: Config, args: argparse.Namespace) -> int:
    store.reset()
    print_success(f"Reset design in {config.storage_path}")
    return 0


COMMANDS = {
    "show": cmd_show,
    "export": cmd_export,
    "reset": cmd_reset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addon-architect",
        description="Addon Architect -- render a plugin design to descriptor, spec and scaffold",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.cli show\n"
            "  python -m src.cli export -o ./build\n"
            "  python -m src.cli export --only scaffold\n"
        ),
    )
    parser.add_argument("--storage", default=None, help="Storage JSON file")
    parser.add_argument("--key", default=None, help="Storage key holding the design")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Summarise the saved design")
    export = sub.add_parser("export", help="Render and write the export files")
    export.add_argument("--output", "-o", default=None, help="Output directory")
    export.add_argument(
        "--only",
        action="append",
        choices=[kind.value for kind in ExportKind],
        default=None,
        help="Render only this artifact (repeatable)",
    )
    sub.add_parser("reset", help="Replace the saved design with the default one")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m src.cli``."""
    args = build_parser().parse_args(argv)
    config = _build_config(args)
    store = AddonStore(storage=StateStorage(config.storage_path, config.storage_key))
    return COMMANDS[args.command](store, config, args)


if __name__ == "__main__":
    sys.exit(main())
