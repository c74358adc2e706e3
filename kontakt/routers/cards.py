from __future__ import annotations

import re
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from kontakt.services import qr_service
from kontakt.services.card_display import get_card_view_data
from kontakt.services.card_service import CardNotFoundError
from kontakt.services.contact_service import generate_vcard
from kontakt.services.qr_service import InvalidQrFormatError, InvalidQrSizeError

router = APIRouter(prefix="", tags=["cards"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def _content_disposition(filename: str) -> str:
    ascii_name = re.sub(r"[^\x20-\x7E]", "", filename).replace('"', "").replace("\\", "")
    return f"attachment; filename=\"{ascii_name or 'contact.vcf'}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/c/{slug}", response_class=HTMLResponse)
def public_card(slug: str, request: Request):
    try:
        view = get_card_view_data(slug)
    except CardNotFoundError:
        raise HTTPException(404, "Card not found")
    return _templates(request).TemplateResponse(request, "card.html", view)


@router.get("/api/cards/{slug}/vcf")
def vcard(slug: str):
    try:
        vcf, filename = generate_vcard(slug)
    except CardNotFoundError:
        raise HTTPException(404, "Card not found")
    return Response(
        vcf,
        media_type="text/vcard; charset=utf-8",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.get("/api/cards/{slug}/qr")
def qr(slug: str, format: str = "png", size: int = 300):
    try:
        result = qr_service.generate_qr(slug, format, size)
    except (InvalidQrFormatError, InvalidQrSizeError) as exc:
        raise HTTPException(400, str(exc))
    except CardNotFoundError:
        raise HTTPException(404, "Card not found")
    return Response(
        result.data,
        media_type=result.content_type,
        headers={"Cache-Control": "public, max-age=86400, immutable"},
    )
