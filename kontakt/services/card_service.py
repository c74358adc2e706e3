"""
Card-related lookups shared across routers/services.
"""

from __future__ import annotations

from kontakt.domain.cards import ContactRecord
from kontakt.repositories.json_storage import db_defaults, load


class CardError(Exception):
    """Base exception for card lookups."""


class CardNotFoundError(CardError):
    """Raised when no card answers to a slug (or it is disabled)."""


def find_card_by_slug(slug: str) -> ContactRecord:
    """Locate a card by slug and return its contact record."""
    slug_value = (slug or "").strip()
    cards = db_defaults(load())["cards"]
    data = cards.get(slug_value) if slug_value else None
    if not isinstance(data, dict):
        raise CardNotFoundError(f"Card {slug_value!r} not found")
    record = dict(data)
    record.setdefault("slug", slug_value)
    return ContactRecord.from_dict(record)
