"""Persistent JSON config helpers.

Stores the notes and archive locations, editor command, and layout
preferences. A missing config file is created with defaults; a file that
cannot be read or decoded is a startup error.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from ..errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "lazynote"
NOTES_APP_NAME = "note"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_SIDEBAR_WIDTH = 30
DEFAULT_STYLE = "monokai"
EDITOR_ENV_VARS = ("NOTE_EDITOR", "VISUAL", "EDITOR")
FALLBACK_EDITORS = (Path("/usr/bin/vi"), Path("/bin/ed"))


@dataclass(frozen=True)
class NoteSettings:
    """Resolved configuration values used by the runtime."""

    notes_dir: Path
    archive_dir: Path
    editor: str = ""
    sidebar_width: int = DEFAULT_SIDEBAR_WIDTH
    style: str = DEFAULT_STYLE
    show_sidebar: bool = True

    def to_json(self) -> dict[str, object]:
        return {
            "notes_dir": str(self.notes_dir),
            "archive_dir": str(self.archive_dir),
            "editor": self.editor,
            "sidebar_width": self.sidebar_width,
            "style": self.style,
            "show_sidebar": self.show_sidebar,
        }


def default_settings() -> NoteSettings:
    notes_dir = Path(user_data_dir(NOTES_APP_NAME, appauthor=False))
    return NoteSettings(notes_dir=notes_dir, archive_dir=notes_dir / "archive")


def resolve_editor_command(configured: str = "") -> list[str]:
    """Return the editor argv prefix.

    Order: configured value, ``$NOTE_EDITOR``, ``$VISUAL``, ``$EDITOR``,
    ``/usr/bin/vi``, then ``/bin/ed``.
    """
    candidates = [configured] + [os.environ.get(name, "") for name in EDITOR_ENV_VARS]
    for candidate in candidates:
        candidate = candidate.strip()
        if not candidate:
            continue
        try:
            cmd = shlex.split(candidate)
        except ValueError:
            continue
        if cmd:
            return cmd
    for fallback in FALLBACK_EDITORS:
        if fallback.exists():
            return [str(fallback)]
    return [str(FALLBACK_EDITORS[-1])]


def _coerce_path(value: object, default: Path) -> Path:
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return default


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans and non-integers are treated as invalid."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _coerce_str(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    return value.strip()


def settings_from_json(data: dict[str, object]) -> NoteSettings:
    """Build settings from decoded JSON, using defaults for invalid values.

    ``archive_dir`` defaults to ``<notes_dir>/archive`` for the configured
    notes directory.
    """
    defaults = default_settings()
    notes_dir = _coerce_path(data.get("notes_dir"), defaults.notes_dir)
    archive_dir = _coerce_path(data.get("archive_dir"), notes_dir / "archive")
    show_sidebar = data.get("show_sidebar")
    return NoteSettings(
        notes_dir=notes_dir,
        archive_dir=archive_dir,
        editor=_coerce_str(data.get("editor"), defaults.editor),
        sidebar_width=_coerce_positive_int(data.get("sidebar_width"), defaults.sidebar_width),
        style=_coerce_str(data.get("style"), defaults.style) or defaults.style,
        show_sidebar=show_sidebar if isinstance(show_sidebar, bool) else defaults.show_sidebar,
    )


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Raises ``ConfigError`` when the file is unreadable, malformed, or not a
    top-level JSON object. A missing file returns an empty dict.
    """
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigError(f"cannot read config {CONFIG_PATH}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {CONFIG_PATH}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {CONFIG_PATH} must contain a JSON object")
    return data


def save_settings(settings: NoteSettings) -> None:
    """Persist settings as pretty-printed JSON."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(settings.to_json(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot write config {CONFIG_PATH}: {exc}") from exc


def load_settings() -> NoteSettings:
    """Load settings, writing a default config file on first run.

    The first-run file records the resolved editor so users can see and
    change it.
    """
    if not CONFIG_PATH.exists():
        settings = default_settings()
        settings = replace(settings, editor=shlex.join(resolve_editor_command()))
        save_settings(settings)
        return settings
    return settings_from_json(load_config())


def prepare_directories(settings: NoteSettings) -> None:
    """Create the notes and archive directories if missing."""
    for directory in (settings.notes_dir, settings.archive_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"failed to create directory {directory}: {exc}") from exc


def save_show_sidebar(show_sidebar: bool) -> None:
    """Persist sidebar visibility; failures are logged, not raised."""
    try:
        data = load_config()
    except ConfigError as exc:
        logger.warning("not saving sidebar preference: %s", exc)
        return
    data["show_sidebar"] = bool(show_sidebar)
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot persist sidebar preference: %s", exc)
