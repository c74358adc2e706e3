"""Resolve the effective appearance of a card from its overrides and instance defaults."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from kontakt.domain.cards import ContactRecord

FALLBACK_PRIMARY_COLOR = "#0F172A"
FALLBACK_BG_COLOR = "#FFFFFF"
DARK_BG_COLOR = "#1e1e1e"
FALLBACK_THEME = "auto"
FALLBACK_AVATAR_SHAPE = "circle"

HEX_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
CSS_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


@dataclass(frozen=True)
class ResolvedTheme:
    primary_color: str
    bg_color: str
    text_color: str
    theme: str
    avatar_shape: str
    bg_image_path: Optional[str]


def _setting(settings: Mapping[str, Optional[str]], key: str, fallback: str) -> str:
    value = settings.get(key)
    return fallback if value is None else value


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _resolve_value(card_value: Optional[str], default: str, allow_override: bool) -> str:
    if allow_override and _present(card_value):
        return card_value  # type: ignore[return-value]
    return default


def _hex_to_rgb_tuple(value: str) -> tuple[int, int, int] | None:
    match = HEX_RE.fullmatch((value or "").strip())
    if not match:
        return None
    v = match.group(1)
    if len(v) == 3:
        v = "".join(ch * 2 for ch in v)
    return int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16)


def is_hex_color(value: Optional[str]) -> bool:
    """True for `#rgb` / `#rrggbb`, the only color forms written into inline CSS."""
    return bool(value) and CSS_HEX_RE.fullmatch(value.strip()) is not None


def auto_text_color(bg_color: str) -> str:
    """
    Pick black or white text for a background color.

    Uses perceived luminance; exactly 0.5 counts as dark (white text).
    Colors that are not 3/6 digit hex get black text.
    """
    rgb = _hex_to_rgb_tuple(bg_color)
    if rgb is None:
        return "#000000"
    r, g, b = rgb
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#FFFFFF"


def resolve_card_theme(card: ContactRecord, settings: Mapping[str, Optional[str]]) -> ResolvedTheme:
    """Merge per-card style overrides with the instance settings snapshot."""
    allow_override = settings.get("allow_user_color_override") == "true"
    allow_bg_image = settings.get("allow_user_background_image") == "true"

    # theme first: a dark theme changes the background default
    theme = _resolve_value(
        card.theme,
        _setting(settings, "default_theme", FALLBACK_THEME),
        allow_override,
    )
    if theme.upper() == "DARK":
        default_bg = DARK_BG_COLOR
    else:
        default_bg = _setting(settings, "default_bg_color", FALLBACK_BG_COLOR)

    primary_color = _resolve_value(
        card.primary_color,
        _setting(settings, "default_primary_color", FALLBACK_PRIMARY_COLOR),
        allow_override,
    )
    bg_color = _resolve_value(card.bg_color, default_bg, allow_override)
    avatar_shape = _resolve_value(
        card.avatar_shape,
        _setting(settings, "default_avatar_shape", FALLBACK_AVATAR_SHAPE),
        allow_override,
    )

    if allow_override and _present(card.text_color):
        text_color = card.text_color
    else:
        text_color = auto_text_color(bg_color)

    bg_image_path = card.bg_image_path if allow_bg_image else None

    return ResolvedTheme(
        primary_color=primary_color,
        bg_color=bg_color,
        text_color=text_color,  # type: ignore[arg-type]
        theme=theme,
        avatar_shape=avatar_shape,
        bg_image_path=bg_image_path,
    )
