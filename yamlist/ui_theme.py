"""ANSI palettes for the tree rows, preview header, search bar and status bar.

The Pygments style that colors preview source text is chosen separately.
"""

from __future__ import annotations

from dataclasses import dataclass

from .document import ScalarType


@dataclass(frozen=True)
class UITheme:
    """SGR prefixes keyed by what they paint; empty strings mean unstyled."""

    name: str
    divider: str
    reset: str
    selected_row: str
    key: str
    dimmed: str
    expand_icon: str
    type_icon: str
    child_count: str
    string_value: str
    number_value: str
    bool_value: str
    null_value: str
    timestamp_value: str
    match_marker: str
    preview_path: str
    preview_info: str
    search_prompt: str
    search_query: str
    match_count: str
    status_bar: str
    status_mode: str
    status_info: str
    error: str

    def value_style(self, scalar_type: ScalarType) -> str:
        if scalar_type in {ScalarType.INT, ScalarType.FLOAT}:
            return self.number_value
        if scalar_type is ScalarType.BOOL:
            return self.bool_value
        if scalar_type is ScalarType.NULL:
            return self.null_value
        if scalar_type is ScalarType.TIMESTAMP:
            return self.timestamp_value
        return self.string_value


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2;38;5;240m",
    reset="\033[0m",
    selected_row="\033[48;5;62;38;5;230m",
    key="\033[38;5;117m",
    dimmed="\033[2;38;5;240m",
    expand_icon="\033[38;5;245m",
    type_icon="\033[38;5;245m",
    child_count="\033[3;38;5;245m",
    string_value="\033[38;5;114m",
    number_value="\033[38;5;209m",
    bool_value="\033[38;5;213m",
    null_value="\033[3;38;5;245m",
    timestamp_value="\033[38;5;180m",
    match_marker="\033[1;38;5;227m",
    preview_path="\033[3;38;5;245m",
    preview_info="\033[3;38;5;245m",
    search_prompt="\033[38;5;205m",
    search_query="\033[38;5;230m",
    match_count="\033[38;5;245m",
    status_bar="\033[48;5;236;38;5;250m",
    status_mode="\033[48;5;62;38;5;230m",
    status_info="\033[48;5;236;38;5;245m",
    error="\033[48;5;227;38;5;0m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    selected_row="\033[48;5;24;38;5;231m",
    key="\033[38;5;81m",
    dimmed="\033[2;38;5;24m",
    expand_icon="\033[38;5;73m",
    type_icon="\033[38;5;73m",
    child_count="\033[3;38;5;110m",
    string_value="\033[38;5;153m",
    number_value="\033[38;5;215m",
    bool_value="\033[38;5;117m",
    null_value="\033[3;38;5;110m",
    timestamp_value="\033[38;5;152m",
    match_marker="\033[1;38;5;45m",
    preview_path="\033[3;38;5;110m",
    preview_info="\033[3;38;5;110m",
    search_prompt="\033[38;5;45m",
    search_query="\033[38;5;231m",
    match_count="\033[38;5;110m",
    status_bar="\033[48;5;17;38;5;153m",
    status_mode="\033[48;5;31;38;5;231m",
    status_info="\033[48;5;17;38;5;110m",
    error="\033[48;5;215;38;5;0m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="\033[0m",
    selected_row="\033[7m",
    key="",
    dimmed="",
    expand_icon="",
    type_icon="",
    child_count="",
    string_value="",
    number_value="",
    bool_value="",
    null_value="",
    timestamp_value="",
    match_marker="",
    preview_path="",
    preview_info="",
    search_prompt="",
    search_query="",
    match_count="",
    status_bar="",
    status_mode="",
    status_info="",
    error="",
)

SELECTABLE_THEMES: tuple[UITheme, ...] = (DEFAULT_THEME, OCEAN_THEME)


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme`` and the ``theme`` config key."""
    return tuple(sorted(theme.name for theme in SELECTABLE_THEMES))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``name``; unknown names get the default, ``no_color`` the plain one."""
    if no_color:
        return PLAIN_THEME
    wanted = (name or "").strip().lower()
    for theme in SELECTABLE_THEMES:
        if theme.name == wanted:
            return theme
    return DEFAULT_THEME


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "SELECTABLE_THEMES",
    "UITheme",
    "available_theme_names",
    "resolve_theme",
]
