"""User preferences stored as a small JSON object.

Holds the theme, icon set, preview size and preview visibility. Bad or
missing values fall back to defaults per key; write failures are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "yamlist"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_MAX_PREVIEW_LINES = 200


@dataclass(frozen=True)
class ViewerConfig:
    theme: str | None = None
    use_icons: bool = True
    max_preview_lines: int = DEFAULT_MAX_PREVIEW_LINES
    show_preview: bool = True


def load_config() -> dict[str, object]:
    """Return the stored object, or ``{}`` if it is absent, unreadable or not a JSON object."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring filesystem errors."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_viewer_config() -> ViewerConfig:
    """Return persisted preferences; invalid values fall back per key."""
    data = load_config()
    theme = data.get("theme")
    return ViewerConfig(
        theme=theme if isinstance(theme, str) and theme.strip() else None,
        use_icons=_load_bool(data, "use_icons", True),
        max_preview_lines=_load_positive_int(data, "max_preview_lines", DEFAULT_MAX_PREVIEW_LINES),
        show_preview=_load_bool(data, "show_preview", True),
    )


def save_show_preview(show_preview: bool) -> None:
    """Persist preview-pane visibility as a boolean."""
    config = load_config()
    config["show_preview"] = bool(show_preview)
    save_config(config)
