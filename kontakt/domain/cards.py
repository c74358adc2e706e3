"""Card (contact record) value objects built from the stored JSON."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

THEME_LIGHT = "LIGHT"
THEME_DARK = "DARK"
THEME_AUTO = "AUTO"

AVATAR_CIRCLE = "CIRCLE"
AVATAR_ROUNDED_SQUARE = "ROUNDED_SQUARE"

VISIBILITY_PUBLIC = "PUBLIC"
VISIBILITY_UNLISTED = "UNLISTED"
VISIBILITY_DISABLED = "DISABLED"


def clean_text(value: Any) -> Optional[str]:
    """Return the value as a string, or None when it is missing or blank."""
    if value is None:
        return None
    text = str(value)
    if not text.strip():
        return None
    return text


@dataclass(frozen=True)
class Phone:
    number: str
    label: Optional[str] = None


@dataclass(frozen=True)
class Email:
    email: str
    label: Optional[str] = None


@dataclass(frozen=True)
class Website:
    url: str
    label: Optional[str] = None


@dataclass(frozen=True)
class SocialLink:
    platform: str
    url: str


@dataclass(frozen=True)
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None


def _phones(raw: Any) -> Optional[tuple[Phone, ...]]:
    items = []
    for entry in raw or []:
        if isinstance(entry, Phone):
            items.append(entry)
        elif isinstance(entry, Mapping) and clean_text(entry.get("number")):
            items.append(Phone(str(entry["number"]), clean_text(entry.get("label"))))
    return tuple(items) or None


def _emails(raw: Any) -> Optional[tuple[Email, ...]]:
    items = []
    for entry in raw or []:
        if isinstance(entry, Email):
            items.append(entry)
        elif isinstance(entry, Mapping) and clean_text(entry.get("email")):
            items.append(Email(str(entry["email"]), clean_text(entry.get("label"))))
    return tuple(items) or None


def _websites(raw: Any) -> Optional[tuple[Website, ...]]:
    items = []
    for entry in raw or []:
        if isinstance(entry, Website):
            items.append(entry)
        elif isinstance(entry, str) and clean_text(entry):
            # older cards store websites as bare URLs
            items.append(Website(entry))
        elif isinstance(entry, Mapping) and clean_text(entry.get("url")):
            items.append(Website(str(entry["url"]), clean_text(entry.get("label"))))
    return tuple(items) or None


def _social_links(raw: Any) -> Optional[tuple[SocialLink, ...]]:
    items = []
    for entry in raw or []:
        if isinstance(entry, SocialLink):
            items.append(entry)
        elif isinstance(entry, Mapping) and clean_text(entry.get("platform")) and clean_text(entry.get("url")):
            items.append(SocialLink(str(entry["platform"]), str(entry["url"])))
    return tuple(items) or None


def _address(raw: Any) -> Optional[Address]:
    if raw is None:
        return None
    if isinstance(raw, Address):
        return raw
    if not isinstance(raw, Mapping):
        return None
    return Address(
        street=clean_text(raw.get("street")),
        city=clean_text(raw.get("city")),
        country=clean_text(raw.get("country")),
        zip=clean_text(raw.get("zip")),
    )


def _enum(value: Any) -> Optional[str]:
    text = clean_text(value)
    return text.strip().upper() if text else None


@dataclass(frozen=True)
class ContactRecord:
    """Read-only projection of a card used by the renderers."""

    name: str
    slug: str = ""
    job_title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    pronouns: Optional[str] = None
    calendar_url: Optional[str] = None
    phones: Optional[tuple[Phone, ...]] = None
    emails: Optional[tuple[Email, ...]] = None
    websites: Optional[tuple[Website, ...]] = None
    social_links: Optional[tuple[SocialLink, ...]] = None
    address: Optional[Address] = None
    avatar_path: Optional[str] = None
    bg_image_path: Optional[str] = None
    primary_color: Optional[str] = None
    bg_color: Optional[str] = None
    text_color: Optional[str] = None
    theme: Optional[str] = None
    avatar_shape: Optional[str] = None
    visibility: str = VISIBILITY_PUBLIC
    no_index: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContactRecord":
        """Build a record from the camelCase JSON shape used by the store and API."""
        return cls(
            name=str(data.get("name") or ""),
            slug=str(data.get("slug") or ""),
            job_title=clean_text(data.get("jobTitle")),
            company=clean_text(data.get("company")),
            bio=clean_text(data.get("bio")),
            pronouns=clean_text(data.get("pronouns")),
            calendar_url=clean_text(data.get("calendarUrl")),
            phones=_phones(data.get("phones")),
            emails=_emails(data.get("emails")),
            websites=_websites(data.get("websites")),
            social_links=_social_links(data.get("socialLinks")),
            address=_address(data.get("address")),
            avatar_path=clean_text(data.get("avatarPath")),
            bg_image_path=clean_text(data.get("bgImagePath")),
            primary_color=clean_text(data.get("primaryColor")),
            bg_color=clean_text(data.get("bgColor")),
            text_color=clean_text(data.get("textColor")),
            theme=_enum(data.get("theme")),
            avatar_shape=_enum(data.get("avatarShape")),
            visibility=_enum(data.get("visibility")) or VISIBILITY_PUBLIC,
            no_index=bool(data.get("noIndex")),
        )


def first_or_none(items: Optional[Iterable[Any]]) -> Any:
    for item in items or ():
        return item
    return None
