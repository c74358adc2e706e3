"""Domain value objects (cards, signatures)."""

from .cards import Address, ContactRecord, Email, Phone, SocialLink, Website
from .signatures import InvalidSignatureConfigError, SignatureConfig, SignatureFields, SignatureLayout

__all__ = [
    "Address",
    "ContactRecord",
    "Email",
    "Phone",
    "SocialLink",
    "Website",
    "InvalidSignatureConfigError",
    "SignatureConfig",
    "SignatureFields",
    "SignatureLayout",
]
