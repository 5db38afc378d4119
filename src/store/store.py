"""The addon store: single owner of the live design state.

``AddonStore`` is an explicit context object.  The application root creates
one and passes it to whatever drives edits; there is no module-level
instance.  Every operation runs a pure reducer from ``src.store.reducers``
against the current snapshot, swaps in the result, persists it and notifies
subscribers, then returns the new snapshot.

Calls are expected to come from a single thread, one at a time.  Snapshots
handed out are frozen, so readers (renderers, views) can keep them for as
long as they like.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from src.addon.defaults import default_state
from src.addon.models import AddonState, Placement

from . import reducers
from .persistence import StateStorage
from .reducers import Patch

Listener = Callable[[AddonState], None]


class AddonStore:
    """Holds the current ``AddonState`` and applies mutations to it.

    Attributes:
        storage: Optional persistence collaborator.  When set, the initial
            state is restored from it and every change is written back.
    """

    def __init__(
        self,
        state: AddonState | None = None,
        storage: StateStorage | None = None,
    ) -> None:
        self.storage = storage
        if state is None:
            state = storage.load() if storage is not None else default_state()
        self._state = state
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AddonState:
        """The current snapshot."""
        return self._state

    # -- Subscription ------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Core dispatch -----------------------------------------------------

    def dispatch(self, reducer: Callable[..., AddonState], *args: Any) -> AddonState:
        """Apply *reducer* to the current state and commit the result.

        A reducer that returns the current state unchanged is a no-op: nothing
        is persisted and no listener is called.
        """
        next_state = reducer(self._state, *args)
        if next_state is self._state:
            return next_state
        self._state = next_state
        if self.storage is not None:
            self.storage.save(next_state)
        for listener in list(self._listeners):
            listener(next_state)
        return next_state

    # -- Meta --------------------------------------------------------------

    def update_meta(self, field: str, value: Any) -> AddonState:
        return self.dispatch(reducers.update_meta, field, value)

    # -- Modules -----------------------------------------------------------

    def add_module(self) -> AddonState:
        return self.dispatch(reducers.add_module)

    def clone_module(self, module_id: str) -> AddonState:
        return self.dispatch(reducers.clone_module, module_id)

    def update_module(self, module_id: str, patch: Patch) -> AddonState:
        return self.dispatch(reducers.update_module, module_id, patch)

    def remove_module(self, module_id: str) -> AddonState:
        return self.dispatch(reducers.remove_module, module_id)

    # -- Nodes -------------------------------------------------------------

    def add_node(self, module_id: str) -> AddonState:
        return self.dispatch(reducers.add_node, module_id)

    def update_node(self, module_id: str, node_id: str, patch: Patch) -> AddonState:
        return self.dispatch(reducers.update_node, module_id, node_id, patch)

    def remove_node(self, module_id: str, node_id: str) -> AddonState:
        return self.dispatch(reducers.remove_node, module_id, node_id)

    # -- Parameters --------------------------------------------------------

    def add_parameter(
        self, module_id: str, node_id: str, placement: Placement | str
    ) -> AddonState:
        return self.dispatch(reducers.add_parameter, module_id, node_id, placement)

    def update_parameter(
        self,
        module_id: str,
        node_id: str,
        placement: Placement | str,
        param_id: str,
        patch: Patch,
    ) -> AddonState:
        return self.dispatch(
            reducers.update_parameter, module_id, node_id, placement, param_id, patch
        )

    def remove_parameter(
        self, module_id: str, node_id: str, placement: Placement | str, param_id: str
    ) -> AddonState:
        return self.dispatch(
            reducers.remove_parameter, module_id, node_id, placement, param_id
        )

    # -- Commands ----------------------------------------------------------

    def add_command(self, module_id: str) -> AddonState:
        return self.dispatch(reducers.add_command, module_id)

    def update_command(self, module_id: str, command_id: str, patch: Patch) -> AddonState:
        return self.dispatch(reducers.update_command, module_id, command_id, patch)

    def remove_command(self, module_id: str, command_id: str) -> AddonState:
        return self.dispatch(reducers.remove_command, module_id, command_id)

    # -- Selection ---------------------------------------------------------

    def select_module(self, module_id: str | None) -> AddonState:
        return self.dispatch(reducers.select_module, module_id)

    def select_node(self, node_id: str | None) -> AddonState:
        return self.dispatch(reducers.select_node, node_id)

    # -- Lifecycle ---------------------------------------------------------

    def reset(self) -> AddonState:
        """Replace the state with a fresh default design."""
        return self.dispatch(reducers.reset)

    def restore(self) -> AddonState:
        """Reload the state from storage, replacing the in-memory snapshot."""
        if self.storage is None:
            return self._state
        self._state = self.storage.load()
        for listener in list(self._listeners):
            listener(self._state)
        return self._state
