"""Shallow patch merging for frozen addon entities.

A patch is a mapping of field name (snake_case or its camelCase alias) to new
value.  Only scalar fields declared on the target entity can be patched:
unknown keys, ``id`` and the owned collections (``nodes``, ``commands``,
``inputs``, ``outputs``) are dropped without complaint.  Values are validated
against the field type, so a wrong type raises ``pydantic.ValidationError``
and the original entity is left as it was.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from .models import AddonModel

EntityT = TypeVar("EntityT", bound=AddonModel)

# Structural fields only change through the store's add/remove operations.
LOCKED_FIELDS: frozenset[str] = frozenset({"id", "nodes", "commands", "inputs", "outputs"})


def patchable_fields(model_cls: type[AddonModel]) -> dict[str, str]:
    """Map every accepted patch key (field name and alias) to its field name."""
    keys: dict[str, str] = {}
    for name, info in model_cls.model_fields.items():
        if name in LOCKED_FIELDS:
            continue
        keys[name] = name
        if info.alias:
            keys[info.alias] = name
    return keys


def clean_patch(model_cls: type[AddonModel], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys the entity does not accept and normalise aliases to field names."""
    accepted = patchable_fields(model_cls)
    return {accepted[key]: value for key, value in patch.items() if key in accepted}


def apply_patch(entity: EntityT, patch: Mapping[str, Any]) -> EntityT:
    """Return a copy of *entity* with the accepted fields of *patch* merged in.

    Returns *entity* itself when nothing in the patch is accepted.
    """
    changes = clean_patch(type(entity), patch)
    if not changes:
        return entity
    data = entity.model_dump()
    data.update(changes)
    return type(entity).model_validate(data)
