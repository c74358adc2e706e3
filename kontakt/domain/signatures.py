"""Signature configuration value objects."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from .cards import clean_text


class InvalidSignatureConfigError(ValueError):
    """Raised when a signature config (or one of its parts) has the wrong shape."""


def _mapping(raw: Any, name: str) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise InvalidSignatureConfigError(f"{name} must be an object")
    return raw


class SignatureLayout(str, Enum):
    COMPACT = "COMPACT"
    CLASSIC = "CLASSIC"
    MINIMAL = "MINIMAL"

    @classmethod
    def parse(cls, value: Any) -> "SignatureLayout":
        """Map a stored/requested layout name to a layout, defaulting to CLASSIC."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().upper())
        except ValueError:
            return cls.CLASSIC


@dataclass(frozen=True)
class SignatureFields:
    """Per-block inclusion toggles."""

    phone: bool = True
    email: bool = True
    website: bool = True
    socials: bool = True
    pronouns: bool = True
    calendar: bool = True
    disclaimer: bool = True
    card_link: bool = True
    avatar: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "SignatureFields":
        data = _mapping(data, "fields")

        def _flag(key: str) -> bool:
            return bool(data.get(key, True))

        return cls(
            phone=_flag("phone"),
            email=_flag("email"),
            website=_flag("website"),
            socials=_flag("socials"),
            pronouns=_flag("pronouns"),
            calendar=_flag("calendar"),
            disclaimer=_flag("disclaimer"),
            card_link=_flag("cardLink"),
            avatar=_flag("avatar"),
        )

    @classmethod
    def none(cls) -> "SignatureFields":
        return cls(**{name: False for name in cls.__dataclass_fields__})


def _indices(raw: Any, name: str) -> tuple[int, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise InvalidSignatureConfigError(f"{name} must be a list of indices")
    out = []
    for value in raw:
        try:
            out.append(int(value))
        except (TypeError, ValueError):
            continue
    return tuple(out)


@dataclass(frozen=True)
class SignatureConfig:
    """User configuration for one rendered signature."""

    fields: SignatureFields = field(default_factory=SignatureFields)
    selected_emails: tuple[int, ...] = ()
    selected_phones: tuple[int, ...] = ()
    selected_websites: tuple[int, ...] = ()
    disclaimer: Optional[str] = None
    accent_color: Optional[str] = None
    contact_columns: int = 1
    card_link_text: Optional[str] = None
    avatar_shape: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "SignatureConfig":
        data = _mapping(data, "config")
        try:
            columns = int(data.get("contactColumns") or 1)
        except (TypeError, ValueError):
            columns = 1
        shape = clean_text(data.get("avatarShape"))
        return cls(
            fields=SignatureFields.from_dict(data.get("fields")),
            selected_emails=_indices(data.get("selectedEmails"), "selectedEmails"),
            selected_phones=_indices(data.get("selectedPhones"), "selectedPhones"),
            selected_websites=_indices(data.get("selectedWebsites"), "selectedWebsites"),
            disclaimer=clean_text(data.get("disclaimer")),
            accent_color=clean_text(data.get("accentColor")),
            contact_columns=2 if columns == 2 else 1,
            card_link_text=clean_text(data.get("cardLinkText")),
            avatar_shape=shape.strip().upper() if shape else None,
        )
