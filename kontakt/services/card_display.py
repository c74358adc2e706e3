"""Helpers for the public profile page (view model, SEO metadata, theme classes)."""
from __future__ import annotations

import json
from typing import Optional

from kontakt.core.config import get_settings
from kontakt.core.utils import absolute_url
from kontakt.domain.cards import (
    AVATAR_ROUNDED_SQUARE,
    THEME_AUTO,
    THEME_DARK,
    VISIBILITY_DISABLED,
    VISIBILITY_UNLISTED,
    ContactRecord,
    first_or_none,
)
from kontakt.services import settings_service
from kontakt.services.card_service import CardNotFoundError, find_card_by_slug
from kontakt.services.theme_resolver import (
    FALLBACK_BG_COLOR,
    FALLBACK_PRIMARY_COLOR,
    ResolvedTheme,
    auto_text_color,
    is_hex_color,
    resolve_card_theme,
)


def card_url(slug: str, base: Optional[str] = None) -> str:
    return absolute_url(f"/c/{slug}", base)


def vcf_url(slug: str, base: Optional[str] = None) -> str:
    return absolute_url(f"/api/cards/{slug}/vcf", base)


def build_description(job_title: Optional[str], company: Optional[str]) -> str:
    if job_title and company:
        return f"{job_title} at {company}"
    return job_title or company or ""


def avatar_shape_class(resolved: ResolvedTheme) -> str:
    return "rounded-square" if resolved.avatar_shape.upper() == AVATAR_ROUNDED_SQUARE else "circle"


def theme_class(resolved: ResolvedTheme) -> str:
    theme = resolved.theme.upper()
    if theme == THEME_DARK:
        return "theme-dark"
    if theme == THEME_AUTO:
        return "theme-auto"
    return "theme-light"


def _css_color(value: Optional[str], fallback: str) -> str:
    return value.strip() if is_hex_color(value) else fallback


def build_css_vars(resolved: ResolvedTheme) -> str:
    """CSS custom properties for the page; anything but #rgb/#rrggbb falls back."""
    bg_color = _css_color(resolved.bg_color, FALLBACK_BG_COLOR)
    return "; ".join(
        [
            f"--bg-color: {bg_color}",
            f"--primary-color: {_css_color(resolved.primary_color, FALLBACK_PRIMARY_COLOR)}",
            f"--text-color: {_css_color(resolved.text_color, auto_text_color(bg_color))}",
        ]
    )


def build_json_ld(card: ContactRecord, url: str, image: Optional[str]) -> str:
    """schema.org Person markup for search engines."""
    data: dict = {
        "@context": "https://schema.org",
        "@type": "Person",
        "name": card.name,
        "url": url,
    }
    if card.job_title:
        data["jobTitle"] = card.job_title
    if card.company:
        data["worksFor"] = {"@type": "Organization", "name": card.company}
    if image:
        data["image"] = image
    email = first_or_none(card.emails)
    if email:
        data["email"] = email.email
    phone = first_or_none(card.phones)
    if phone:
        data["telephone"] = phone.number
    # keep "</script>" inside a value from closing the surrounding tag
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def get_card_view_data(slug: str, base_url: Optional[str] = None) -> dict:
    """
    Build everything the public card template needs.

    Raises CardNotFoundError for unknown or disabled cards.
    """
    card = find_card_by_slug(slug)
    if card.visibility == VISIBILITY_DISABLED:
        raise CardNotFoundError(f"Card {slug!r} not found")

    base = base_url if base_url is not None else get_settings().public_base_url
    url = card_url(card.slug, base)
    og_image = absolute_url(card.avatar_path, base) if card.avatar_path else None
    resolved = resolve_card_theme(card, settings_service.get_all())

    return {
        "card": card,
        "theme": resolved,
        "bg_image_url": absolute_url(resolved.bg_image_path, base) if resolved.bg_image_path else None,
        "avatar_url": og_image,
        "avatar_shape_class": avatar_shape_class(resolved),
        "name_initial": card.name[:1].upper(),
        "og": {
            "title": f"{card.name} - {card.company}" if card.company else card.name,
            "description": build_description(card.job_title, card.company),
            "url": url,
            "type": "profile",
            "image": og_image,
        },
        "no_index": card.no_index or card.visibility == VISIBILITY_UNLISTED,
        "card_url": url,
        "vcf_url": vcf_url(card.slug, base),
        "qr_url": absolute_url(f"/api/cards/{card.slug}/qr", base),
        "theme_class": theme_class(resolved),
        "css_vars": build_css_vars(resolved),
        "json_ld": build_json_ld(card, url, og_image),
    }
