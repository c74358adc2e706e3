"""Instance-wide settings snapshot (appearance defaults and policy flags)."""

from __future__ import annotations

from typing import Optional

from kontakt.repositories.json_storage import db_defaults, load

SETTINGS_KEYS: dict[str, Optional[str]] = {
    "org_name": "Kontakt",
    "org_logo": None,
    "org_favicon": None,
    "default_primary_color": "#0F172A",
    "default_secondary_color": "#3B82F6",
    "default_bg_color": "#FFFFFF",
    "default_theme": "light",
    "default_avatar_shape": "circle",
    "allow_user_color_override": "true",
    "allow_user_background_image": "true",
    "default_visibility": "public",
    "footer_text": None,
    "footer_link": None,
}


def get_all() -> dict[str, Optional[str]]:
    """
    Return a fresh snapshot: stored values over the built-in defaults.

    Never cached, so a settings change is visible on the next render.
    """
    stored = db_defaults(load()).get("settings") or {}
    snapshot = dict(SETTINGS_KEYS)
    for key, value in stored.items():
        snapshot[key] = None if value is None else str(value)
    return snapshot
