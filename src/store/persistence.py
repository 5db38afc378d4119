"""Durable storage for the addon state.

``StateStorage`` treats one JSON file as a key/value store and keeps the whole
state under a single fixed key, wrapped as ``{"state": ..., "version": 0}``.
Other keys in the same file are left alone.

Storage is a best-effort collaborator: read and write failures are reported
on the console and swallowed, and a missing or corrupt document restores the
default state.  Nothing here raises into the mutation path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.addon.defaults import default_state
from src.addon.models import AddonState
from src.config import DEFAULT_STORAGE_KEY
from src.store.reducers import repair_selection
from src.utils import load_json, print_warning, save_json

STORAGE_VERSION = 0


class StateStorage:
    """Load and save ``AddonState`` snapshots under a fixed key of a JSON file."""

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    # -- Reading -----------------------------------------------------------

    def _read_entries(self) -> dict[str, Any]:
        """Parse the storage file.

        Raises ``OSError``, or ``ValueError`` for undecodable bytes, invalid
        JSON and a non-object root.
        """
        if not self.path.exists():
            return {}
        return load_json(self.path)

    def load(self) -> AddonState:
        """Restore the persisted state, or the default state if there is none.

        A document that is not valid JSON, or that does not validate as an
        ``AddonState``, is discarded with a warning.  A selection that points
        at entities missing from the document is re-derived.
        """
        try:
            entries = self._read_entries()
        except (OSError, ValueError) as exc:
            print_warning(f"Could not read saved state from {self.path}: {exc}")
            return default_state()

        document = entries.get(self.key)
        if document is None:
            return default_state()

        if isinstance(document, str):
            # Stored as an encoded string, the way browser storage keeps it.
            try:
                document = json.loads(document)
            except json.JSONDecodeError as exc:
                print_warning(f"Discarding corrupt saved state '{self.key}': {exc}")
                return default_state()

        payload = document.get("state") if isinstance(document, dict) else None
        if not isinstance(payload, dict):
            print_warning(f"Discarding malformed saved state '{self.key}'")
            return default_state()

        try:
            state = AddonState.model_validate(payload)
        except ValidationError as exc:
            print_warning(
                f"Discarding saved state '{self.key}' ({exc.error_count()} validation errors)"
            )
            return default_state()
        return repair_selection(state)

    # -- Writing -----------------------------------------------------------

    def save(self, state: AddonState) -> bool:
        """Write *state* under the storage key.

        Returns:
            ``True`` on success, ``False`` if the write failed (already
            reported).
        """
        try:
            entries = self._read_entries()
        except (OSError, ValueError):
            # Unreadable or not a JSON object: start over.
            entries = {}
        entries[self.key] = {"state": state.to_document(), "version": STORAGE_VERSION}
        try:
            save_json(entries, self.path)
        except OSError as exc:
            print_warning(f"Could not save state to {self.path}: {exc}")
            return False
        return True

    def clear(self) -> bool:
        """Remove the storage key, keeping any other entries in the file."""
        try:
            entries = self._read_entries()
            if self.key not in entries:
                return True
            del entries[self.key]
            save_json(entries, self.path)
        except (OSError, ValueError) as exc:
            print_warning(f"Could not clear saved state in {self.path}: {exc}")
            return False
        return True
