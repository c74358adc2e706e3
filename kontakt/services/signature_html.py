"""
E-mail signature rendering.

Signatures are pasted into mail clients, so the markup sticks to tables,
divs, links and images with inline styles only (no <style> blocks, no
relative URLs). Every value coming from the card goes through escape_html.
The plain-text form is derived from the finished HTML so both outputs always
carry the same content.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from kontakt.core.config import get_settings
from kontakt.core.utils import absolute_url
from kontakt.domain.cards import AVATAR_CIRCLE, AVATAR_ROUNDED_SQUARE, ContactRecord, Email, Phone, Website
from kontakt.domain.signatures import SignatureConfig, SignatureLayout
from kontakt.services.theme_resolver import is_hex_color

DEFAULT_ACCENT_COLOR = "#2563eb"
SOCIAL_ICON_PATH = "/public/assets/social/{platform}.png"
MIDDOT = " &middot; "

PLATFORM_NAMES = {
    "linkedin": "LinkedIn",
    "twitter": "Twitter",
    "github": "GitHub",
    "instagram": "Instagram",
    "facebook": "Facebook",
    "youtube": "YouTube",
    "tiktok": "TikTok",
    "mastodon": "Mastodon",
    "bluesky": "Bluesky",
}

T = TypeVar("T")


@dataclass(frozen=True)
class SignatureOutput:
    html: str
    plain_text: str


def escape_html(text: Optional[str]) -> str:
    """Escape & < > " ' for both text and attribute contexts."""
    return html.escape(text or "", quote=True).replace("&#x27;", "&#39;")


def platform_name(platform: str) -> str:
    name = PLATFORM_NAMES.get(platform.lower())
    if name:
        return name
    return platform[:1].upper() + platform[1:]


def resolve_accent_color(config: SignatureConfig, card: ContactRecord) -> str:
    """The configured accent, else the card primary color, else the default. Non-hex values are skipped."""
    for candidate in (config.accent_color, card.primary_color):
        if is_hex_color(candidate):
            return candidate.strip()
    return DEFAULT_ACCENT_COLOR


def select_items(items: Optional[Sequence[T]], indices: Sequence[int]) -> list[T]:
    """
    Pick entries by index, in the order given.

    No selection means every entry in the original order; indices that do not
    exist on the card are skipped.
    """
    pool = list(items or ())
    if not indices:
        return pool
    return [pool[i] for i in indices if 0 <= i < len(pool)]


@dataclass(frozen=True)
class _Context:
    """Values shared by every layout after selection and gating."""

    card: ContactRecord
    config: SignatureConfig
    accent: str
    base: str
    emails: list[Email]
    phones: list[Phone]
    websites: list[Website]

    @property
    def fields(self):
        return self.config.fields

    def link(self, href: str, text: str, extra_style: str = "") -> str:
        """href and text must already be escaped."""
        return (
            f'<a href="{href}" style="color:{escape_html(self.accent)};'
            f'text-decoration:none;{extra_style}">{text}</a>'
        )

    def contact_items(self) -> list[str]:
        items = []
        for e in self.emails:
            items.append(self.link(f"mailto:{escape_html(e.email)}", escape_html(e.email)))
        for p in self.phones:
            items.append(self.link(f"tel:{escape_html(p.number)}", escape_html(p.number)))
        for w in self.websites:
            items.append(self.link(escape_html(w.url), escape_html(w.label or w.url)))
        return items

    def avatar_src(self) -> str:
        return escape_html(absolute_url(self.card.avatar_path or "", self.base))

    def avatar_radius(self, layout_default: str) -> str:
        shape = (self.config.avatar_shape or self.card.avatar_shape or "").upper()
        if shape == AVATAR_CIRCLE:
            return "border-radius:50%;"
        if shape == AVATAR_ROUNDED_SQUARE:
            return "border-radius:8px;"
        return layout_default

    def show_avatar(self) -> bool:
        return bool(self.fields.avatar and self.card.avatar_path)

    def social_icons(self, extra_style: str = "") -> list[str]:
        icons = []
        for link in self.card.social_links or ():
            src = absolute_url(SOCIAL_ICON_PATH.format(platform=link.platform.lower()), self.base)
            icons.append(
                f'<a href="{escape_html(link.url)}" style="text-decoration:none;">'
                f'<img src="{escape_html(src)}" width="20" height="20" '
                f'alt="{escape_html(platform_name(link.platform))}" '
                f'style="display:inline-block;vertical-align:middle;{extra_style}" /></a>'
            )
        return icons

    def show_socials(self) -> bool:
        return bool(self.fields.socials and self.card.social_links)

    def card_link(self, default_text: str, extra_style: str = "") -> Optional[str]:
        if not (self.fields.card_link and self.card.slug):
            return None
        href = absolute_url(f"/c/{self.card.slug}", self.base)
        text = self.config.card_link_text or default_text
        return self.link(escape_html(href), escape_html(text), extra_style)

    def calendar_link(self, extra_style: str = "") -> Optional[str]:
        if not (self.fields.calendar and self.card.calendar_url):
            return None
        return self.link(escape_html(self.card.calendar_url), "Book a meeting", extra_style)

    def pronouns(self) -> Optional[str]:
        if self.fields.pronouns and self.card.pronouns:
            return escape_html(self.card.pronouns)
        return None

    def disclaimer(self) -> Optional[str]:
        if self.fields.disclaimer and self.config.disclaimer:
            return escape_html(self.config.disclaimer)
        return None


def _prepare(card: ContactRecord, config: SignatureConfig, base_url: str) -> _Context:
    fields = config.fields
    return _Context(
        card=card,
        config=config,
        accent=resolve_accent_color(config, card),
        base=base_url,
        emails=select_items(card.emails, config.selected_emails) if fields.email else [],
        phones=select_items(card.phones, config.selected_phones) if fields.phone else [],
        websites=select_items(card.websites, config.selected_websites) if fields.website else [],
    )


def _two_column_table(items: list[str], font_size: str) -> str:
    rows = []
    for i in range(0, len(items), 2):
        left = items[i]
        right = items[i + 1] if i + 1 < len(items) else ""
        rows.append(f'<tr><td style="padding-right:12px;">{left}</td><td>{right}</td></tr>')
    return (
        f'<table cellpadding="0" cellspacing="0" border="0" style="font-size:{font_size};">'
        + "".join(rows)
        + "</table>"
    )


def build_compact_html(card: ContactRecord, config: SignatureConfig, base_url: str) -> str:
    ctx = _prepare(card, config, base_url)
    accent = escape_html(ctx.accent)
    lines = [
        '<table cellpadding="0" cellspacing="0" border="0" '
        'style="max-width:500px;font-family:Arial,Helvetica,sans-serif;font-size:13px;color:#333333;">',
        "<tr>",
    ]

    if ctx.show_avatar():
        lines.append('<td style="vertical-align:top;padding-right:12px;">')
        lines.append(
            f'<img src="{ctx.avatar_src()}" width="48" height="48" alt="{escape_html(card.name)}" '
            f'style="display:block;{ctx.avatar_radius("border-radius:4px;")}" />'
        )
        lines.append("</td>")

    lines.append('<td style="vertical-align:top;">')

    # Name | Title, Company
    name_parts = [f'<strong style="color:{accent};">{escape_html(card.name)}</strong>']
    title_parts = [escape_html(v) for v in (card.job_title, card.company) if v]
    if title_parts:
        name_parts.append(", ".join(title_parts))
    lines.append(f"<div>{' | '.join(name_parts)}</div>")

    pronouns = ctx.pronouns()
    if pronouns:
        lines.append(f'<div style="font-size:12px;color:#666666;">{pronouns}</div>')

    contacts = ctx.contact_items()
    if contacts:
        if config.contact_columns == 2:
            lines.append(_two_column_table(contacts, "12px"))
        else:
            lines.append(f'<div style="font-size:12px;">{MIDDOT.join(contacts)}</div>')

    actions = ctx.social_icons() if ctx.show_socials() else []
    for extra in (ctx.card_link("Card", "font-size:12px;"), ctx.calendar_link("font-size:12px;")):
        if extra:
            actions.append(extra)
    if actions:
        lines.append(f'<div style="margin-top:4px;">{" ".join(actions)}</div>')

    disclaimer = ctx.disclaimer()
    if disclaimer:
        lines.append(f'<div style="margin-top:4px;font-size:10px;color:#999999;">{disclaimer}</div>')

    lines.extend(["</td>", "</tr>", "</table>"])
    return "".join(lines)


def build_classic_html(card: ContactRecord, config: SignatureConfig, base_url: str) -> str:
    ctx = _prepare(card, config, base_url)
    accent = escape_html(ctx.accent)
    lines = [
        '<table cellpadding="0" cellspacing="0" border="0" '
        'style="max-width:500px;font-family:Georgia,\'Times New Roman\',serif;font-size:14px;color:#333333;">',
        "<tr>",
    ]

    if ctx.show_avatar():
        lines.append('<td style="vertical-align:top;padding-right:16px;">')
        lines.append(
            f'<img src="{ctx.avatar_src()}" width="80" height="80" alt="{escape_html(card.name)}" '
            f'style="display:block;{ctx.avatar_radius("")}" />'
        )
        lines.append("</td>")

    lines.append('<td style="vertical-align:top;">')
    lines.append(f'<div style="font-size:18px;font-weight:bold;color:{accent};">{escape_html(card.name)}</div>')

    title_parts = [escape_html(v) for v in (card.job_title, card.company) if v]
    if title_parts:
        lines.append(f'<div style="font-size:13px;color:#555555;">{" at ".join(title_parts)}</div>')

    pronouns = ctx.pronouns()
    if pronouns:
        lines.append(f'<div style="font-size:12px;color:#777777;">{pronouns}</div>')

    # rule: a bordered cell renders consistently where <hr> does not
    lines.append(
        '<table cellpadding="0" cellspacing="0" border="0" width="100%" style="margin:8px 0;"><tr>'
        f'<td style="border-top:1px solid {accent};font-size:1px;line-height:1px;">&nbsp;</td>'
        "</tr></table>"
    )

    contacts = ctx.contact_items()
    if contacts:
        if config.contact_columns == 2:
            lines.append(_two_column_table(contacts, "13px"))
        else:
            lines.extend(f'<div style="font-size:13px;">{item}</div>' for item in contacts)

    if ctx.show_socials():
        icons = ctx.social_icons("margin-right:4px;")
        lines.append(f'<div style="margin-top:8px;">{"".join(icons)}</div>')

    links = [link for link in (ctx.card_link("View my card", "font-size:12px;"), ctx.calendar_link("font-size:12px;")) if link]
    if links:
        lines.append(f'<div style="margin-top:4px;">{MIDDOT.join(links)}</div>')

    disclaimer = ctx.disclaimer()
    if disclaimer:
        lines.append(f'<div style="margin-top:8px;font-size:10px;color:#999999;">{disclaimer}</div>')

    lines.extend(["</td>", "</tr>", "</table>"])
    return "".join(lines)


def build_minimal_html(card: ContactRecord, config: SignatureConfig, base_url: str) -> str:
    ctx = _prepare(card, config, base_url)
    lines = [
        '<table cellpadding="0" cellspacing="0" border="0" '
        'style="max-width:500px;font-family:Arial,Helvetica,sans-serif;font-size:13px;color:#333333;">',
    ]

    # Name · Title at Company · (pronouns)
    parts = [f"<strong>{escape_html(card.name)}</strong>"]
    title_parts = []
    if card.job_title:
        title_parts.append(escape_html(card.job_title))
    if card.company:
        title_parts.append(f"at {escape_html(card.company)}")
    if title_parts:
        parts.append(" ".join(title_parts))
    pronouns = ctx.pronouns()
    if pronouns:
        parts.append(f"({pronouns})")
    lines.append(f"<tr><td>{MIDDOT.join(parts)}</td></tr>")

    contacts = ctx.contact_items()
    if contacts:
        lines.append(f'<tr><td style="font-size:12px;">{MIDDOT.join(contacts)}</td></tr>')

    if ctx.show_socials():
        socials = [
            ctx.link(escape_html(link.url), escape_html(platform_name(link.platform)))
            for link in card.social_links or ()
        ]
        lines.append(f'<tr><td style="font-size:12px;">{MIDDOT.join(socials)}</td></tr>')

    links = [link for link in (ctx.card_link("View my card"), ctx.calendar_link()) if link]
    if links:
        lines.append(f'<tr><td style="font-size:12px;">{MIDDOT.join(links)}</td></tr>')

    disclaimer = ctx.disclaimer()
    if disclaimer:
        lines.append(f'<tr><td style="font-size:10px;color:#999999;padding-top:4px;">{disclaimer}</td></tr>')

    lines.append("</table>")
    return "".join(lines)


LayoutBuilder = Callable[[ContactRecord, SignatureConfig, str], str]

LAYOUT_BUILDERS: dict[SignatureLayout, LayoutBuilder] = {
    SignatureLayout.COMPACT: build_compact_html,
    SignatureLayout.CLASSIC: build_classic_html,
    SignatureLayout.MINIMAL: build_minimal_html,
}

_LINK_RE = re.compile(r'<a[^>]+href="([^"]*)"[^>]*>[^<]*</a>')
_IMG_RE = re.compile(r'<img[^>]+alt="([^"]*)"[^>]*/?>')
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_END_RE = re.compile(r"</(?:div|tr|td|table)>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

# &amp; last so "&amp;lt;" becomes "&lt;" and not "<"
_ENTITIES = (
    ("&middot;", "·"),
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def html_to_plain_text(markup: str) -> str:
    """Derive the plain-text signature from its HTML."""
    text = _LINK_RE.sub(lambda m: m.group(1), markup)
    text = _IMG_RE.sub(lambda m: f"[{m.group(1)}]", text)
    text = _BR_RE.sub("\n", text)
    text = _BLOCK_END_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def render_signature(
    card: ContactRecord,
    config: SignatureConfig,
    layout: SignatureLayout | str | None,
    base_url: Optional[str] = None,
) -> SignatureOutput:
    """Render a card as an HTML e-mail signature plus its plain-text form."""
    base = base_url if base_url is not None else get_settings().public_base_url
    builder = LAYOUT_BUILDERS.get(SignatureLayout.parse(layout), build_classic_html)
    markup = builder(card, config, base)
    return SignatureOutput(html=markup, plain_text=html_to_plain_text(markup))
