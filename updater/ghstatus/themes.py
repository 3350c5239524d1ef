"""
Color themes and language colors used by the cards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_THEME: str = "default"
DEFAULT_LANGUAGE_COLOR: str = "#ededed"


@dataclass(frozen=True)
class Theme:
    """
    Card colors, as hex strings without the leading `#`.
    """

    title_color: str
    icon_color: str
    text_color: str
    bg_color: str
    border_color: str | None = None

    @property
    def border(self) -> str:
        return self.border_color or self.bg_color


THEMES: dict[str, Theme] = {
    "default": Theme("2f80ed", "4c71f2", "434d58", "fffefe", "e4e2e2"),
    "default_repocard": Theme("2f80ed", "586069", "434d58", "fffefe"),
    "transparent": Theme("006AFF", "0579C3", "417E87", "ffffff00"),
    "shadow_red": Theme("9A0000", "4F0000", "444", "ffffff00", "4F0000"),
    "shadow_green": Theme("007A00", "003D00", "444", "ffffff00", "003D00"),
    "shadow_blue": Theme("00779A", "004450", "444", "ffffff00", "004490"),
    "dark": Theme("fff", "79ff97", "9f9f9f", "151515"),
    "radical": Theme("fe428e", "f8d847", "a9fef7", "141321"),
    "merko": Theme("abd200", "b7d364", "68b587", "0a0f0b"),
    "gruvbox": Theme("fabd2f", "fe8019", "8ec07c", "282828"),
    "gruvbox_light": Theme("b57614", "af3a03", "427b58", "fbf1c7"),
    "tokyonight": Theme("70a5fd", "bf91f3", "38bdae", "1a1b27"),
    "onedark": Theme("e4bf7a", "8eb573", "df6d74", "282c34"),
    "cobalt": Theme("e683d9", "0480ef", "75eeb2", "193549"),
    "synthwave": Theme("e2e9ec", "ef8539", "e5289e", "2b213a"),
    "highcontrast": Theme("e7f216", "00ffff", "fff", "000"),
    "dracula": Theme("ff6e96", "79dafa", "f8f8f2", "282a36"),
    "prussian": Theme("bddfff", "38a0ff", "6e93b5", "172f45"),
    "monokai": Theme("eb1f6a", "e28905", "f1f1eb", "272822"),
    "vue": Theme("41b883", "41b883", "273849", "fffefe"),
    "vue-dark": Theme("41b883", "41b883", "fffefe", "273849"),
    "nord": Theme("81a1c1", "88c0d0", "d8dee9", "2e3440"),
    "github_dark": Theme("58A6FF", "1F6FEB", "C3D1D9", "0D1117"),
    "catppuccin_latte": Theme("137980", "8839ef", "4c4f69", "eff1f5"),
    "catppuccin_mocha": Theme("94e2d5", "cba6f7", "cdd6f4", "1e1e2e"),
}

LANGUAGE_COLORS: dict[str, str] = {
    "C": "#555555",
    "C#": "#178600",
    "C++": "#f34b7d",
    "CSS": "#563d7c",
    "Clojure": "#db5855",
    "Dart": "#00B4AB",
    "Dockerfile": "#384d54",
    "Elixir": "#6e4a7e",
    "Go": "#00ADD8",
    "HTML": "#e34c26",
    "Haskell": "#5e5086",
    "Java": "#b07219",
    "JavaScript": "#f1e05a",
    "Jupyter Notebook": "#DA5B0B",
    "Kotlin": "#A97BFF",
    "Lua": "#000080",
    "Makefile": "#427819",
    "Nix": "#7e7eff",
    "Objective-C": "#438eff",
    "PHP": "#4F5D95",
    "Perl": "#0298c3",
    "PowerShell": "#012456",
    "Python": "#3572A5",
    "R": "#198CE7",
    "Ruby": "#701516",
    "Rust": "#dea584",
    "SCSS": "#c6538c",
    "Scala": "#c22d40",
    "Shell": "#89e051",
    "Svelte": "#ff3e00",
    "Swift": "#F05138",
    "TeX": "#3D6117",
    "TypeScript": "#3178c6",
    "Vim Script": "#199f4b",
    "Vue": "#41b883",
    "Zig": "#ec915c",
}


def get_theme(name: str) -> Theme:
    """
    Look up a theme by name.

    Args:
        name: Theme name.

    Return:
        Theme: Named theme, or the default one if `name` is unknown.

    """

    theme = THEMES.get(name)
    if theme is None:
        logger.warning("Unknown theme %r, using %r", name, DEFAULT_THEME)
        return THEMES[DEFAULT_THEME]

    return theme


def language_color(name: str) -> str:
    return LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR)
