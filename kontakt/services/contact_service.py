"""
vCard download use case: load the card, embed its avatar, serialize.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from kontakt.core.config import get_settings
from kontakt.core.utils import is_absolute_url
from kontakt.services.card_service import find_card_by_slug
from kontakt.services.vcard_builder import VCardBuilder

logger = logging.getLogger(__name__)

UPLOADS_PREFIX = "uploads/"


def _avatar_file(avatar_path: str, upload_dir: str) -> Optional[Path]:
    """Map a stored avatar path to a file inside the upload directory."""
    if is_absolute_url(avatar_path):
        return None
    rel = avatar_path.split("?", 1)[0].lstrip("/")
    if rel.startswith(UPLOADS_PREFIX):
        rel = rel[len(UPLOADS_PREFIX):]
    root = Path(upload_dir).resolve()
    candidate = (root / rel).resolve()
    if root != candidate and root not in candidate.parents:
        logger.warning("Avatar path escapes upload dir: %s", avatar_path)
        return None
    return candidate


def encode_avatar(data: bytes, max_size: int) -> str:
    """Re-encode image bytes as a WEBP thumbnail and return it base64-encoded."""
    image = Image.open(io.BytesIO(data))
    try:
        image = ImageOps.exif_transpose(image)
    except Exception:
        pass
    image = image.convert("RGB")
    image.thumbnail((max_size, max_size), Image.LANCZOS)
    buffer = io.BytesIO()
    image.save(buffer, format="WEBP", quality=80)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def load_avatar_base64(avatar_path: Optional[str]) -> Optional[str]:
    """Best effort: a missing or unreadable avatar only drops the PHOTO line."""
    if not avatar_path:
        return None
    settings = get_settings()
    path = _avatar_file(avatar_path, settings.upload_dir)
    if path is None or not path.is_file():
        return None
    try:
        return encode_avatar(path.read_bytes(), settings.avatar_max_size)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        logger.warning("Could not embed avatar %s: %s", path, exc)
        return None


def generate_vcard(slug: str) -> Tuple[str, str]:
    """Return (vcf text, download filename) for a card."""
    card = find_card_by_slug(slug)
    avatar = load_avatar_base64(card.avatar_path)
    vcf = VCardBuilder.build(card, avatar)
    filename = f"{card.name or card.slug}.vcf"
    return vcf, filename
