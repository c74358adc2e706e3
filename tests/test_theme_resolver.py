from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the kontakt package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kontakt.domain.cards import ContactRecord  # noqa: E402
from kontakt.services.theme_resolver import auto_text_color, resolve_card_theme  # noqa: E402

DEFAULT_SETTINGS = {
    "default_primary_color": "#0F172A",
    "default_secondary_color": "#3B82F6",
    "default_bg_color": "#FFFFFF",
    "default_theme": "light",
    "default_avatar_shape": "circle",
    "allow_user_color_override": "true",
    "allow_user_background_image": "true",
}

NO_OVERRIDE_SETTINGS = {
    **DEFAULT_SETTINGS,
    "allow_user_color_override": "false",
    "allow_user_background_image": "false",
}

CARD_WITH_OVERRIDES = ContactRecord(
    name="Ana Souza",
    primary_color="#FF0000",
    bg_color="#000000",
    text_color="#FFFFFF",
    theme="DARK",
    avatar_shape="ROUNDED_SQUARE",
    bg_image_path="/uploads/cards/card-1/background.webp",
)

CARD_WITHOUT_OVERRIDES = ContactRecord(name="Ana Souza")


def test_card_values_win_when_overrides_allowed():
    result = resolve_card_theme(CARD_WITH_OVERRIDES, DEFAULT_SETTINGS)

    assert result.primary_color == "#FF0000"
    assert result.bg_color == "#000000"
    assert result.text_color == "#FFFFFF"
    assert result.theme == "DARK"
    assert result.avatar_shape == "ROUNDED_SQUARE"
    assert result.bg_image_path == "/uploads/cards/card-1/background.webp"


def test_instance_defaults_used_without_card_values():
    result = resolve_card_theme(CARD_WITHOUT_OVERRIDES, DEFAULT_SETTINGS)

    assert result.primary_color == "#0F172A"
    assert result.bg_color == "#FFFFFF"
    assert result.text_color == "#000000"
    assert result.theme == "light"
    assert result.avatar_shape == "circle"
    assert result.bg_image_path is None


def test_overrides_ignored_when_disallowed():
    result = resolve_card_theme(CARD_WITH_OVERRIDES, NO_OVERRIDE_SETTINGS)

    assert result.primary_color == "#0F172A"
    assert result.bg_color == "#FFFFFF"
    assert result.theme == "light"
    assert result.avatar_shape == "circle"
    # computed from the resolved white background, not the card's black one
    assert result.text_color == "#000000"
    assert result.bg_image_path is None


def test_dark_theme_background_beats_configured_default():
    settings = {**DEFAULT_SETTINGS, "default_bg_color": "#FAFAFA"}
    card = ContactRecord(name="Ana", theme="DARK")

    result = resolve_card_theme(card, settings)

    assert result.bg_color == "#1e1e1e"
    assert result.text_color == "#FFFFFF"


def test_dark_instance_theme_is_case_insensitive():
    settings = {**DEFAULT_SETTINGS, "default_theme": "dark"}

    result = resolve_card_theme(CARD_WITHOUT_OVERRIDES, settings)

    assert result.theme == "dark"
    assert result.bg_color == "#1e1e1e"


def test_explicit_bg_color_still_wins_over_dark_default():
    card = ContactRecord(name="Ana", theme="DARK", bg_color="#336699")

    result = resolve_card_theme(card, DEFAULT_SETTINGS)

    assert result.bg_color == "#336699"


def test_explicit_text_color_is_used_verbatim():
    card = ContactRecord(name="Ana", text_color="#ABCDEF")

    result = resolve_card_theme(card, DEFAULT_SETTINGS)

    assert result.text_color == "#ABCDEF"


def test_empty_settings_fall_back_to_hardcoded_defaults():
    result = resolve_card_theme(CARD_WITH_OVERRIDES, {})

    assert result.primary_color == "#0F172A"
    assert result.bg_color == "#FFFFFF"
    assert result.theme == "auto"
    assert result.avatar_shape == "circle"
    assert result.text_color == "#000000"
    assert result.bg_image_path is None


def test_blank_card_values_count_as_absent():
    card = ContactRecord(name="Ana", primary_color="", theme="  ")

    result = resolve_card_theme(card, DEFAULT_SETTINGS)

    assert result.primary_color == "#0F172A"
    assert result.theme == "light"


def test_bg_image_kept_only_when_allowed():
    card = ContactRecord(name="Ana", bg_image_path="/uploads/bg.webp")
    blocked = {**DEFAULT_SETTINGS, "allow_user_background_image": "false"}

    assert resolve_card_theme(card, DEFAULT_SETTINGS).bg_image_path == "/uploads/bg.webp"
    assert resolve_card_theme(card, blocked).bg_image_path is None


@pytest.mark.parametrize(
    "color, expected",
    [
        ("#000000", "#FFFFFF"),
        ("#FFFFFF", "#000000"),
        ("#fff", "#000000"),
        ("#000", "#FFFFFF"),
        ("1e1e1e", "#FFFFFF"),
        ("#FFFF00", "#000000"),
    ],
)
def test_auto_text_color(color, expected):
    assert auto_text_color(color) == expected


def test_auto_text_color_tolerates_malformed_input():
    assert auto_text_color("not-a-color") == "#000000"
    assert auto_text_color("") == "#000000"
