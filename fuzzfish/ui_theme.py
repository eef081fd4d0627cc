"""UI theme definitions and selection helpers.

Themes are immutable ANSI palettes passed explicitly into the list renderer
and the preview renderers. Syntax highlighting style for file previews is a
separate pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    border: str
    prompt: str
    query: str
    placeholder: str
    row_text: str
    selected_row: str
    selected_marker: str
    match: str
    time_ago: str
    branch_current: str
    branch_remote: str
    label: str
    content: str
    context_header: str
    context_active: str
    context_inactive: str
    status: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;240m",
    prompt="\033[1;38;5;81m",
    query="\033[38;5;252m",
    placeholder="\033[2;38;5;250m",
    row_text="\033[38;5;252m",
    selected_row="\033[1;38;5;81;48;5;237m",
    selected_marker="\033[38;5;141;48;5;237m",
    match="\033[1;38;5;205m",
    time_ago="\033[38;5;244m",
    branch_current="\033[1;38;5;42m",
    branch_remote="\033[38;5;110m",
    label="\033[38;5;141m",
    content="\033[38;5;252m",
    context_header="\033[1;38;5;179m",
    context_active="\033[1;38;5;215m",
    context_inactive="\033[38;5;60m",
    status="\033[38;5;214m",
)

# Tokyo Night palette in truecolor.
TOKYONIGHT_THEME = UITheme(
    name="tokyonight",
    reset="\033[0m",
    border="\033[38;2;86;95;137m",
    prompt="\033[1;38;2;122;162;247m",
    query="\033[38;2;192;202;245m",
    placeholder="\033[2;38;2;86;95;137m",
    row_text="\033[38;2;192;202;245m",
    selected_row="\033[1;38;2;125;207;255;48;2;84;57;112m",
    selected_marker="\033[38;2;187;154;247;48;2;84;57;112m",
    match="\033[1;38;2;255;0;127m",
    time_ago="\033[38;2;86;95;137m",
    branch_current="\033[1;38;2;158;206;106m",
    branch_remote="\033[38;2;125;207;255m",
    label="\033[38;2;187;154;247m",
    content="\033[38;2;192;202;245m",
    context_header="\033[1;38;2;224;175;104m",
    context_active="\033[1;38;2;255;158;100m",
    context_inactive="\033[38;2;86;95;137m",
    status="\033[38;2;224;175;104m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    border="",
    prompt="",
    query="",
    placeholder="",
    row_text="",
    selected_row="\033[7m",
    selected_marker="\033[7m",
    match="",
    time_ago="",
    branch_current="",
    branch_remote="",
    label="",
    content="",
    context_header="",
    context_active="",
    context_inactive="",
    status="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    TOKYONIGHT_THEME.name: TOKYONIGHT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def paint(theme_code: str, text: str, theme: UITheme) -> str:
    """Wrap ``text`` in ``theme_code`` when the theme carries color."""
    if not theme_code:
        return text
    return f"{theme_code}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "TOKYONIGHT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "paint",
    "resolve_theme",
]
