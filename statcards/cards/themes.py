from pydantic import BaseModel
from pydantic import ConfigDict


class Theme(BaseModel):
    """Color palette shared by all cards."""

    model_config = ConfigDict(frozen=True)

    background: str
    border: str
    title: str
    text: str
    icon: str
    ring: str
    rank_circle: str
    rank_text: str
    progress_bar: str
    progress_bar_bg: str


DEFAULT_THEME = "dark"

THEMES: dict[str, Theme] = {
    "dark": Theme(
        background="#0d1117",
        border="#30363d",
        title="#58a6ff",
        text="#c9d1d9",
        icon="#8b949e",
        ring="#58a6ff",
        rank_circle="#58a6ff",
        rank_text="#c9d1d9",
        progress_bar="#58a6ff",
        progress_bar_bg="#21262d",
    ),
    "light": Theme(
        background="#ffffff",
        border="#e4e2e2",
        title="#0366d6",
        text="#24292e",
        icon="#586069",
        ring="#0366d6",
        rank_circle="#0366d6",
        rank_text="#24292e",
        progress_bar="#0366d6",
        progress_bar_bg="#e1e4e8",
    ),
    "dracula": Theme(
        background="#282a36",
        border="#44475a",
        title="#ff79c6",
        text="#f8f8f2",
        icon="#bd93f9",
        ring="#ff79c6",
        rank_circle="#bd93f9",
        rank_text="#f8f8f2",
        progress_bar="#ff79c6",
        progress_bar_bg="#44475a",
    ),
    "nord": Theme(
        background="#2e3440",
        border="#4c566a",
        title="#88c0d0",
        text="#eceff4",
        icon="#81a1c1",
        ring="#88c0d0",
        rank_circle="#88c0d0",
        rank_text="#eceff4",
        progress_bar="#88c0d0",
        progress_bar_bg="#3b4252",
    ),
    "tokyonight": Theme(
        background="#1a1b26",
        border="#414868",
        title="#70a5fd",
        text="#a9b1d6",
        icon="#9ece6a",
        ring="#70a5fd",
        rank_circle="#bb9af7",
        rank_text="#a9b1d6",
        progress_bar="#70a5fd",
        progress_bar_bg="#24283b",
    ),
}


def get_theme(name: str = DEFAULT_THEME) -> Theme:
    """Look up a theme by name, falling back to the dark theme."""

    return THEMES.get(name.lower(), THEMES[DEFAULT_THEME])
