"""Addon Architect state store.

Owns the live design state and exposes every create/update/delete/select
operation on it.  The transitions themselves are pure functions in
``src.store.reducers``; ``AddonStore`` applies them one at a time, persists
the result through ``StateStorage`` and notifies subscribers.

Usage::

    from src.store import AddonStore, StateStorage

    store = AddonStore(storage=StateStorage("storage.json"))
    state = store.add_module()
    state = store.update_module(state.selected_module_id, {"name": "Tools"})
"""

from src.store.persistence import StateStorage
from src.store.store import AddonStore

__all__ = [
    "AddonStore",
    "StateStorage",
]
