"""Addon Architect configuration.

Typed settings for storage, export and hotkey rendering.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from src.exporters.hotkeys import KEY_ALIASES

DEFAULT_STORAGE_KEY = "addon-architect-storage"


class Config(BaseModel):
    """Global Addon Architect configuration.

    Instances are typically created once by the CLI entry point and then
    handed to the store and exporters.
    """

    storage_path: Path = Field(
        default=Path("./.addon-architect/storage.json"),
        description="JSON file holding persisted state, keyed like local storage",
    )
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    output_dir: Path = Field(default=Path("./output"))
    key_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(KEY_ALIASES),
        description="Hotkey token substitutions applied by the scaffold renderer",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def storage_dir(self) -> Path:
        """Directory that holds the storage file."""
        return self.storage_path.parent

    @property
    def config_path(self) -> Path:
        """Default location for a saved ``config.json``."""
        return self.storage_dir / "config.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<storage_dir>/config.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or self.config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            ADDON_STORAGE_PATH, ADDON_STORAGE_KEY, ADDON_OUTPUT_DIR.
        """
        return cls(
            storage_path=Path(
                os.environ.get("ADDON_STORAGE_PATH", "./.addon-architect/storage.json")
            ),
            storage_key=os.environ.get("ADDON_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
            output_dir=Path(os.environ.get("ADDON_OUTPUT_DIR", "./output")),
        )
