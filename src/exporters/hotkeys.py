"""Hotkey token translation for editor command bindings.

A hotkey is written as ``"+"``-joined tokens (``"Ctrl+Alt+P"``).  Each token
is trimmed and looked up in ``KEY_ALIASES``; tokens without an entry are kept
as written.  The result is emitted as ``EKeys::<token>`` chord arguments.
"""

from __future__ import annotations

from collections.abc import Mapping

KEY_ALIASES: dict[str, str] = {
    "Ctrl": "LeftControl",
    "Control": "LeftControl",
    "Cmd": "LeftCommand",
    "Esc": "Escape",
}

KEY_PREFIX = "EKeys::"
CHORD_SEPARATOR = ", "


def hotkey_tokens(hotkey: str, aliases: Mapping[str, str] = KEY_ALIASES) -> list[str]:
    """Split, trim and translate *hotkey*.  Empty tokens are dropped."""
    tokens = (token.strip() for token in hotkey.split("+"))
    return [aliases.get(token, token) for token in tokens if token]


def format_chord(hotkey: str, aliases: Mapping[str, str] = KEY_ALIASES) -> str:
    """Render *hotkey* as the argument list of an ``FInputChord``.

    Examples::

        format_chord("Ctrl+Alt+P")  -> "EKeys::LeftControl, EKeys::Alt, EKeys::P"
        format_chord("")            -> ""
    """
    return CHORD_SEPARATOR.join(f"{KEY_PREFIX}{token}" for token in hotkey_tokens(hotkey, aliases))
