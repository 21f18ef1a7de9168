"""Badge rendering — embeddable HTML, hosted image URLs, and inline SVG.

Badges are presentation only: they read a score, never influence one.
"""

from __future__ import annotations

from html import escape
from typing import Literal
from urllib.parse import quote, urlencode

from pydantic import BaseModel, Field

from nanda_reputation.config import (
    BADGE_API_BASE,
    BADGE_SCRIPT_URL,
    BADGE_THEMES,
    SCORE_COLORS,
    VERIFICATION_COLOR_DEFAULT,
    VERIFICATION_COLORS,
)
from nanda_reputation.models import ReputationScore

from .primitives import round_half_up

Theme = Literal["light", "dark"]


class BadgeOptions(BaseModel):
    show_score: bool = True
    show_verification: bool = True
    size: Literal["small", "medium", "large"] = "medium"
    theme: Theme = "light"
    show_categories: list[str] = Field(default_factory=list)


class BadgeStyle(BaseModel):
    format: Literal["svg", "png"] = "svg"
    show_score: bool = True
    show_verification: bool = True
    theme: Theme = "light"
    width: int | None = None
    height: int | None = None


def _flag(value: bool) -> str:
    return "true" if value else "false"


def score_color(score: float) -> str:
    """Colour for a 0-100 score via SCORE_COLORS bands."""
    for threshold, color in SCORE_COLORS:
        if score >= threshold:
            return color
    return SCORE_COLORS[-1][1]


def verification_color(level: str | None) -> str:
    return VERIFICATION_COLORS.get((level or "").lower(), VERIFICATION_COLOR_DEFAULT)


def generate_badge_html(subject_id: str, options: BadgeOptions | None = None) -> str:
    """HTML snippet that loads the hosted badge widget for a subject."""
    opts = options or BadgeOptions()
    attrs = {
        "data-server-id": subject_id,
        "data-show-score": _flag(opts.show_score),
        "data-show-verification": _flag(opts.show_verification),
        "data-size": opts.size,
        "data-theme": opts.theme,
        "data-categories": ",".join(opts.show_categories),
    }
    rendered = "\n    ".join(f'{k}="{escape(v)}"' for k, v in attrs.items())
    return (
        f'<div class="nanda-reputation-badge"\n    {rendered}>\n  </div>\n'
        f'  <script src="{BADGE_SCRIPT_URL}" async></script>'
    )


def get_badge_url(subject_id: str, style: BadgeStyle | None = None) -> str:
    """URL of the hosted badge image for a subject."""
    st = style or BadgeStyle()
    params: dict[str, str | int] = {
        "showScore": _flag(st.show_score),
        "showVerification": _flag(st.show_verification),
        "theme": st.theme,
    }
    if st.width:
        params["width"] = st.width
    if st.height:
        params["height"] = st.height
    return f"{BADGE_API_BASE}/{quote(subject_id, safe='')}.{st.format}?{urlencode(params)}"


def generate_inline_svg_badge(
    subject_id: str,
    score: float,
    verification_level: str = "none",
    width: int = 200,
    height: int = 60,
    theme: Theme = "light",
) -> str:
    """Self-contained SVG badge showing the score and verification level."""
    colors = BADGE_THEMES.get(theme, BADGE_THEMES["light"])
    level = escape(verification_level or "none")
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" data-server-id="{escape(subject_id)}">\n'
        f'    <rect width="100%" height="100%" fill="{colors["background"]}" rx="6" ry="6" '
        f'stroke="{colors["border"]}" stroke-width="1"/>\n'
        f'    <text x="10" y="20" font-family="Arial, sans-serif" font-size="12" '
        f'fill="{colors["text"]}">NANDA Reputation</text>\n'
        f'    <text x="10" y="40" font-family="Arial, sans-serif" font-size="18" '
        f'font-weight="bold" fill="{score_color(score)}">{round_half_up(score)}/100</text>\n'
        f'    <circle cx="{width - 20}" cy="20" r="8" '
        f'fill="{verification_color(verification_level)}"/>\n'
        f'    <text x="{width - 28}" y="{height - 12}" font-family="Arial, sans-serif" '
        f'font-size="10" fill="{colors["text"]}">{level}</text>\n'
        f"  </svg>"
    )


def badge_for_score(
    score: ReputationScore, verification_level: str = "none", **kwargs
) -> str:
    """Render an inline SVG badge from a stored ReputationScore."""
    return generate_inline_svg_badge(
        score.subject_id, score.overall_score, verification_level, **kwargs
    )
