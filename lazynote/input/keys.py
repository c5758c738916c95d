"""Keyboard dispatch facade: route each key by interaction mode."""

from __future__ import annotations

from .key_normal import NormalKeyContext, handle_normal_key
from .key_rename import RenameKeyContext, handle_rename_key


def handle_key(key: str, normal: NormalKeyContext, rename: RenameKeyContext) -> bool:
    """Handle one key token and return ``True`` when the app should quit."""
    if not key:
        return False
    if normal.state.renaming:
        return handle_rename_key(key, rename)
    return handle_normal_key(key, normal)
