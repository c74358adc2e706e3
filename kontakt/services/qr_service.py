"""QR codes pointing at a card's public page."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

import qrcode
import qrcode.constants
import qrcode.image.svg

from kontakt.core.config import get_settings
from kontakt.services.card_display import card_url
from kontakt.services.card_service import find_card_by_slug

QR_FORMATS = {"png": "image/png", "svg": "image/svg+xml"}
MIN_SIZE = 100
MAX_SIZE = 1000
BORDER = 1


class QrError(Exception):
    """Base exception for QR generation."""


class InvalidQrFormatError(QrError):
    """Raised when the requested format is neither png nor svg."""


class InvalidQrSizeError(QrError):
    """Raised when the requested size is outside the supported range."""


@dataclass
class QrResult:
    data: bytes
    content_type: str


def _make_qr(payload: str, size: int) -> qrcode.QRCode:
    qr = qrcode.QRCode(version=None, error_correction=qrcode.constants.ERROR_CORRECT_M, box_size=1, border=BORDER)
    qr.add_data(payload)
    qr.make(fit=True)
    # scale the modules so the whole image is close to the requested width
    modules = qr.modules_count + 2 * BORDER
    qr.box_size = max(1, size // modules)
    return qr


def generate_qr(slug: str, fmt: str = "png", size: int = 300, base_url: Optional[str] = None) -> QrResult:
    fmt = (fmt or "").lower()
    if fmt not in QR_FORMATS:
        raise InvalidQrFormatError(f"Invalid format: {fmt}. Must be png or svg.")
    if size < MIN_SIZE or size > MAX_SIZE:
        raise InvalidQrSizeError(f"Size must be between {MIN_SIZE} and {MAX_SIZE}")

    card = find_card_by_slug(slug)
    base = base_url if base_url is not None else get_settings().public_base_url
    qr = _make_qr(card_url(card.slug, base), size)

    buf = io.BytesIO()
    if fmt == "svg":
        qr.make_image(image_factory=qrcode.image.svg.SvgImage).save(buf)
    else:
        qr.make_image(fill_color="black", back_color="white").save(buf)
    return QrResult(data=buf.getvalue(), content_type=QR_FORMATS[fmt])
