"""vCard 4.0 (RFC 6350) serialization of a card."""
from __future__ import annotations

from typing import Optional

from kontakt.domain.cards import ContactRecord

CRLF = "\r\n"


def escape_vcard_value(value: Optional[str]) -> str:
    """Escape a text value; backslash must go first so later escapes are not doubled."""
    if not value:
        return ""
    v = value.replace("\r\n", "\n").replace("\r", "\n")
    v = v.replace("\\", "\\\\")
    v = v.replace(",", "\\,")
    v = v.replace(";", "\\;")
    v = v.replace("\n", "\\n")
    return v


def structured_name(full_name: str) -> str:
    """
    Build the N property value from a full name.

    "Ana" -> "Ana;;;;", "Ana Maria Souza" -> "Souza;Ana;Maria;;".
    Each component is escaped on its own before the separators are added.
    """
    parts = (full_name or "").split()
    if len(parts) <= 1:
        single = parts[0] if parts else ""
        return f"{escape_vcard_value(single)};;;;"
    last = escape_vcard_value(parts[-1])
    first = escape_vcard_value(parts[0])
    middle = escape_vcard_value(" ".join(parts[1:-1]))
    return f"{last};{first};{middle};;"


def _typed(prop: str, label: Optional[str], value: str) -> str:
    if label:
        return f"{prop};TYPE={label}:{value}"
    return f"{prop}:{value}"


class VCardBuilder:
    """Builds one vCard record with CRLF line endings."""

    @staticmethod
    def build(card: ContactRecord, avatar_base64: Optional[str] = None) -> str:
        lines = [
            "BEGIN:VCARD",
            "VERSION:4.0",
            f"FN:{escape_vcard_value(card.name)}",
            f"N:{structured_name(card.name)}",
        ]

        if card.job_title:
            lines.append(f"TITLE:{escape_vcard_value(card.job_title)}")
        if card.company:
            lines.append(f"ORG:{escape_vcard_value(card.company)}")

        # phone numbers, e-mails and URLs go in raw; only free text is escaped
        for phone in card.phones or ():
            lines.append(_typed("TEL", phone.label, phone.number))
        for email in card.emails or ():
            lines.append(_typed("EMAIL", email.label, email.email))

        if card.address is not None:
            addr = card.address
            # PO Box;Extended;Street;City;Region;Postal Code;Country
            lines.append(
                "ADR;TYPE=work:;;"
                f"{escape_vcard_value(addr.street)};{escape_vcard_value(addr.city)};;"
                f"{escape_vcard_value(addr.zip)};{escape_vcard_value(addr.country)}"
            )

        for site in card.websites or ():
            lines.append(f"URL:{site.url}")
        for link in card.social_links or ():
            lines.append(f"X-SOCIALPROFILE;TYPE={link.platform}:{link.url}")

        if card.bio:
            lines.append(f"NOTE:{escape_vcard_value(card.bio)}")

        if avatar_base64 and card.avatar_path:
            lines.append(f"PHOTO:data:image/webp;base64,{avatar_base64}")

        lines.append("END:VCARD")
        return CRLF.join(lines) + CRLF
