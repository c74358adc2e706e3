"""
Signature use cases: render a saved signature or an unsaved preview.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from kontakt.domain.signatures import SignatureConfig, SignatureLayout
from kontakt.repositories.json_storage import db_defaults, load
from kontakt.services.card_service import find_card_by_slug
from kontakt.services.signature_html import SignatureOutput, render_signature


class SignatureNotFoundError(Exception):
    """Raised when a saved signature id is unknown."""


def _render(payload: Mapping[str, Any], base_url: Optional[str]) -> SignatureOutput:
    card = find_card_by_slug(str(payload.get("cardSlug") or ""))
    config = SignatureConfig.from_dict(payload.get("config"))
    layout = SignatureLayout.parse(payload.get("layout"))
    return render_signature(card, config, layout, base_url=base_url)


def render_stored_signature(signature_id: str, base_url: Optional[str] = None) -> SignatureOutput:
    signatures = db_defaults(load())["signatures"]
    stored = signatures.get(signature_id)
    if not isinstance(stored, dict):
        raise SignatureNotFoundError(f"Signature {signature_id!r} not found")
    return _render(stored, base_url)


def preview_signature(payload: Mapping[str, Any], base_url: Optional[str] = None) -> SignatureOutput:
    """Render an unsaved {cardSlug, layout, config} payload."""
    return _render(payload, base_url)
