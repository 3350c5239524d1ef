"""
Functions for rendering the status cards as SVG.
"""

from __future__ import annotations

import logging
from math import cos, pi, sin
from typing import TYPE_CHECKING

from lxml.builder import ElementMaker
from lxml.etree import ElementTree

from .consts import ENCODING, OUT_DIR
from .errors import RenderError
from .themes import get_theme, language_color

if TYPE_CHECKING:
    from pathlib import Path

    from lxml.etree import _Element as LxmlElem

    from .config import Config
    from .languages import LanguageUsage, LanguageUsages
    from .status import ActivityStatus, GitHubStatus
    from .themes import Theme

logger = logging.getLogger(__name__)

SVG_NS: str = "http://www.w3.org/2000/svg"
E = ElementMaker(namespace=SVG_NS, nsmap={None: SVG_NS})

CARD_WIDTH: int = 300
PADDING_X: int = 15
PADDING_Y: int = 20
TITLE_HEIGHT: int = 20
TOP_LANGUAGES: int = 5
PIE_LABEL_MIN_PERCENT: float = 3.0

LANGUAGE_CARD: str = "github-language-status.svg"
ACTIVITY_CARD: str = "github-activity-stats.svg"
COMMIT_CARD: str = "github-commit-stats.svg"

CARD_STYLE: str = """
@keyframes fadeInAnimation { from { opacity: 0; } to { opacity: 1; } }
@keyframes expandWidth { from { transform: scaleX(0); } to { transform: scaleX(1); } }
.card-bg { animation: fadeInAnimation 0.5s ease-out forwards; }
.card-text { animation: fadeInAnimation 0.8s ease-out forwards; }
.bar-rect { transform-origin: left center; animation: expandWidth 0.8s ease-out forwards; }
"""


def build_cards(status: GitHubStatus, config: Config, out_dir: Path = OUT_DIR) -> list[Path]:
    """
    Render every card for a status and write them out.

    Args:
        status:  Assembled GitHub status.
        config:  Configuration providing the theme and chart type.
        out_dir: Directory the cards are written to.

    Return:
        list[Path]: Written files.

    """

    theme: Theme = get_theme(config.theme)

    cards: dict[str, LxmlElem] = {
        LANGUAGE_CARD: render_language_card(
            status.languages_by_repo, theme, config.language_chart_type
        ),
        ACTIVITY_CARD: render_activity_card(status.activity, theme),
        COMMIT_CARD: render_commit_card(status.activity, theme),
    }

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as o:
        msg = f"Could not create output directory {out_dir}: {o!s}"
        raise RenderError(msg) from o

    return [_write_svg(root, out_dir / name) for name, root in cards.items()]


def render_language_card(
    usages: LanguageUsages, theme: Theme, chart_type: str = "bar"
) -> LxmlElem:
    """
    Render the top-languages card.

    Args:
        usages:     Aggregated language usage.
        theme:      Card colors.
        chart_type: `bar` or `pie`.

    Return:
        LxmlElem: Root `<svg>` element.

    """

    height = 150
    root = _card(theme, height, "Top Languages")
    total: int = usages.total()
    languages = usages.top(TOP_LANGUAGES)

    if chart_type == "pie":
        _pie_chart(root, theme, languages, total, height)
    else:
        _bar_chart(root, theme, languages, total)

    return root


def render_activity_card(activity: ActivityStatus, theme: Theme) -> LxmlElem:
    """
    Render the activity card.

    Args:
        activity: Profile activity snapshot.
        theme:    Card colors.

    Return:
        LxmlElem: Root `<svg>` element.

    """

    root = _card(theme, 150, "GitHub Activity")
    stats: list[tuple[str, str, int]] = [
        ("followers", "Followers", activity.followers),
        ("followings", "Following", activity.followings),
        ("public_repos", "Public Repos", activity.public_repos_count),
        ("contributions", "Contributions (Year)", activity.current_year_contributions),
    ]

    for i, (element_id, label, value) in enumerate(stats):
        y = PADDING_Y + 30 + i * 20
        root.append(
            E.text(f"{label}:", x=str(PADDING_X), y=str(y), fill=f"#{theme.text_color}")
        )
        root.append(
            E.text(
                _fmt_thousands(value),
                id=element_id,
                x=str(CARD_WIDTH - PADDING_X),
                y=str(y),
                fill=f"#{theme.icon_color}",
                **{"font-weight": "bold", "text-anchor": "end"},
            )
        )

    return root


def render_commit_card(activity: ActivityStatus, theme: Theme) -> LxmlElem:
    root = _card(theme, 100, "Contributions")
    root.append(
        E.text(
            _fmt_thousands(activity.current_year_contributions),
            id="contributions",
            x=str(PADDING_X),
            y=str(PADDING_Y + 40),
            fill=f"#{theme.icon_color}",
            **{"font-size": "28", "font-weight": "bold"},
        )
    )
    root.append(
        E.text(
            "this year",
            x=str(PADDING_X),
            y=str(PADDING_Y + 60),
            fill=f"#{theme.text_color}",
        )
    )
    return root


def _card(theme: Theme, height: int, title: str) -> LxmlElem:
    size = {"width": str(CARD_WIDTH), "height": str(height)}
    return E.svg(
        E.style(CARD_STYLE),
        E.rect(
            x="0",
            y="0",
            rx="4.5",
            fill=f"#{theme.bg_color}",
            stroke=f"#{theme.border}",
            **{"class": "card-bg", "stroke-opacity": "1"},
            **size,
        ),
        E.text(
            title,
            id="title",
            x=str(PADDING_X),
            y=str(PADDING_Y),
            fill=f"#{theme.title_color}",
            **{"class": "card-text", "font-size": "14"},
        ),
        viewBox=f"0 0 {CARD_WIDTH} {height}",
        fill="none",
        **size,
    )


def _bar_chart(root: LxmlElem, theme: Theme, languages: list[LanguageUsage], total: int) -> None:
    bar_height, spacing = 10, 5
    y = PADDING_Y + TITLE_HEIGHT + 10
    max_width = CARD_WIDTH - PADDING_X * 2

    for i, usage in enumerate(languages):
        percent = usage.bytes / total * 100 if total else 0.0
        root.append(
            E.rect(
                x=str(PADDING_X),
                y=str(y),
                width=f"{percent / 100 * max_width:.2f}",
                height=str(bar_height),
                rx="2",
                fill=language_color(usage.name),
                **{"class": "bar-rect"},
            )
        )
        root.append(
            E.text(
                f"{usage.name} ({percent:.1f}%)",
                id=f"lang-{i}",
                x=str(CARD_WIDTH - PADDING_X),
                y=str(y + bar_height // 2 + 3),
                fill=f"#{theme.text_color}",
                **{"class": "card-text", "font-size": "10", "text-anchor": "end"},
            )
        )
        y += bar_height + spacing


def _pie_chart(
    root: LxmlElem, theme: Theme, languages: list[LanguageUsage], total: int, height: int
) -> None:
    chart_height = height - PADDING_Y - TITLE_HEIGHT
    radius = min(chart_height, CARD_WIDTH - PADDING_X * 2) / 2 - 10
    cx = CARD_WIDTH / 2
    cy = PADDING_Y + TITLE_HEIGHT + chart_height / 2
    angle = 0.0

    for i, usage in enumerate(languages):
        share = usage.bytes / total if total else 0.0
        start, end = angle, angle + share * 360
        angle = end

        if share >= 1:
            # a full-circle arc has identical end points and draws nothing
            root.append(
                E.circle(
                    cx=f"{cx:.2f}",
                    cy=f"{cy:.2f}",
                    r=f"{radius:.2f}",
                    fill=language_color(usage.name),
                )
            )
        else:
            x1, y1 = _point(cx, cy, radius, start)
            x2, y2 = _point(cx, cy, radius, end)
            large_arc = 1 if share > 0.5 else 0

            root.append(
                E.path(
                    d=(
                        f"M {cx:.2f},{cy:.2f} L {x1:.2f},{y1:.2f} "
                        f"A {radius:.2f},{radius:.2f} 0 {large_arc} 1 {x2:.2f},{y2:.2f} Z"
                    ),
                    fill=language_color(usage.name),
                )
            )

        if share * 100 < PIE_LABEL_MIN_PERCENT:
            continue

        mid = start + (end - start) / 2
        tx, ty = _point(cx, cy, radius + 10, mid)
        anchor = "end" if 135 <= mid < 315 else "start"
        root.append(
            E.text(
                f"{usage.name} ({share * 100:.1f}%)",
                id=f"lang-{i}",
                x=f"{tx:.2f}",
                y=f"{ty:.2f}",
                fill=f"#{theme.text_color}",
                **{"class": "card-text", "font-size": "8", "text-anchor": anchor},
            )
        )


def _point(cx: float, cy: float, radius: float, degrees: float) -> tuple[float, float]:
    return cx + radius * cos(pi * degrees / 180), cy + radius * sin(pi * degrees / 180)


def _fmt_thousands(v: int) -> str:
    return f"{v:,}"


def _write_svg(root: LxmlElem, path: Path) -> Path:
    try:
        ElementTree(root).write(str(path), encoding=ENCODING, xml_declaration=True)
    except OSError as o:
        msg = f"SVG write failed: {o!s}"
        raise RenderError(msg) from o

    logger.info("Generated SVG: %s", path)
    return path
