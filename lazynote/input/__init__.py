"""Input-layer public API for key decoding and interaction handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
mode handlers used by the runtime loop.
"""

from .key_normal import NormalKeyContext, handle_normal_key, open_in_editor
from .key_preview import handle_preview_scroll_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .key_rename import RenameKeyContext, handle_rename_key
from .keys import handle_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "NormalKeyContext",
    "RenameKeyContext",
    "handle_key",
    "handle_normal_key",
    "handle_preview_scroll_key",
    "handle_rename_key",
    "open_in_editor",
    "read_key",
]
