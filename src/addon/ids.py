"""Opaque identifier generation for addon entities."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Return a fresh random identifier.

    Identifiers are UUID4 strings.  Collisions are treated as impossible and
    successive ids carry no ordering.
    """
    return str(uuid.uuid4())
