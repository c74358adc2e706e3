from __future__ import annotations

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse

from kontakt.domain.signatures import InvalidSignatureConfigError
from kontakt.services.card_service import CardNotFoundError
from kontakt.services.signature_service import (
    SignatureNotFoundError,
    preview_signature,
    render_stored_signature,
)

router = APIRouter(prefix="/api/signatures", tags=["signatures"])


@router.get("/{signature_id}/render")
def render(signature_id: str, format: str = "html"):
    try:
        output = render_stored_signature(signature_id)
    except (SignatureNotFoundError, CardNotFoundError):
        raise HTTPException(404, "Signature not found")
    if format == "text":
        return PlainTextResponse(output.plain_text)
    return HTMLResponse(output.html)


@router.post("/preview")
def preview(payload: dict = Body(...)):
    try:
        output = preview_signature(payload)
    except InvalidSignatureConfigError as exc:
        raise HTTPException(400, str(exc))
    except CardNotFoundError:
        raise HTTPException(404, "Card not found")
    return {"html": output.html, "plainText": output.plain_text}
