"""Tests for badge rendering."""

from __future__ import annotations

from datetime import UTC, datetime

from nanda_reputation.models import CategoryScores, Confidence, ReputationScore
from nanda_reputation.scoring.badges import (
    BadgeOptions,
    BadgeStyle,
    badge_for_score,
    generate_badge_html,
    generate_inline_svg_badge,
    get_badge_url,
    score_color,
    verification_color,
)

# --- Colour Tests ---


def test_score_color_bands():
    assert score_color(95) == "#4CAF50"
    assert score_color(90) == "#4CAF50"
    assert score_color(75) == "#8BC34A"
    assert score_color(55) == "#FFC107"
    assert score_color(35) == "#FF9800"
    assert score_color(10) == "#F44336"


def test_verification_color():
    assert verification_color("gold") == "#FFD700"
    assert verification_color("Silver") == "#C0C0C0"
    assert verification_color("none") == "#E0E0E0"
    assert verification_color(None) == "#E0E0E0"


# --- HTML Tests ---


def test_badge_html_defaults():
    html = generate_badge_html("io.github.example/weather-mcp")
    assert 'data-server-id="io.github.example/weather-mcp"' in html
    assert 'data-show-score="true"' in html
    assert 'data-theme="light"' in html
    assert "badge.js" in html


def test_badge_html_options():
    options = BadgeOptions(show_score=False, theme="dark", show_categories=["performance", "usage"])
    html = generate_badge_html("srv", options)
    assert 'data-show-score="false"' in html
    assert 'data-theme="dark"' in html
    assert 'data-categories="performance,usage"' in html


def test_badge_html_escapes_subject():
    html = generate_badge_html('"><script>alert(1)</script>')
    assert "<script>alert" not in html
    assert "&lt;script&gt;" in html


# --- URL Tests ---


def test_badge_url_defaults():
    url = get_badge_url("io.github.user/slack")
    assert url == (
        "https://api.nanda.io/reputation/badge/io.github.user%2Fslack.svg"
        "?showScore=true&showVerification=true&theme=light"
    )


def test_badge_url_style():
    url = get_badge_url("srv", BadgeStyle(format="png", theme="dark", width=300, height=80))
    assert url.startswith("https://api.nanda.io/reputation/badge/srv.png?")
    assert "theme=dark" in url
    assert "width=300" in url
    assert "height=80" in url


# --- SVG Tests ---


def test_inline_svg_badge():
    svg = generate_inline_svg_badge("srv", 97.4, "gold")
    assert svg.startswith("<svg")
    assert "97/100" in svg
    assert "#4CAF50" in svg
    assert "#FFD700" in svg
    assert 'width="200"' in svg


def test_inline_svg_dark_theme():
    svg = generate_inline_svg_badge("srv", 40, theme="dark", width=240)
    assert 'fill="#333333"' in svg
    assert 'width="240"' in svg
    assert "40/100" in svg


def test_badge_for_score():
    score = ReputationScore(
        subject_id="srv",
        overall_score=72,
        categories=CategoryScores(performance=72, verification=75, feedback=70, usage=60),
        confidence=Confidence(level=44),
        last_updated=datetime(2026, 3, 1, tzinfo=UTC),
        algorithm_id="weighted-score-v1",
    )
    svg = badge_for_score(score, "silver")
    assert "72/100" in svg
    assert "#8BC34A" in svg
    assert "#C0C0C0" in svg
