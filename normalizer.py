"""
Normalization of raw listing records into display values.

Every function here is total: malformed or missing input degrades to a
safe default (0, an empty list, placeholder text) instead of raising,
because field shapes vary from record to record in the source export.
"""

import html
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from config import DisplaySettings

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Listing"
NO_DESCRIPTION = "No description available"
ANONYMOUS_HOST = "Anonymous Host"
ELLIPSIS = "..."

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")
_UNICODE_ESCAPE = re.compile(r"\\u[0-9a-fA-F]{4}")
_AMENITY_SEPARATOR = '", "'


# ── Field Cleaners ─────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def clean_price(raw: Any) -> int:
    """Parse a currency string like "$1,234.50" into a whole number (1235).

    Returns 0 when the value is absent or has no leading number.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0
    else:
        match = _LEADING_NUMBER.match(str(raw).replace("$", "").replace(",", ""))
        if not match:
            return 0
        value = float(match.group(0))

    if math.isnan(value) or math.isinf(value):
        return 0
    return round_half_up(value)


def parse_amenities(raw: Any) -> list[str]:
    """Split the bracketed, double-quoted amenities text into labels.

    The source writes amenities as '["Wifi", "Kitchen"]', which is not
    always valid JSON (stray \\u escapes, unbalanced quotes), so the text is
    split on '", "' rather than decoded. A label that itself contains '", "'
    is split in two.
    """
    if not raw:
        return []
    try:
        if isinstance(raw, (list, tuple)):
            return [label for label in (str(a).strip() for a in raw) if label]

        text = raw.strip()
        if text.startswith("["):
            text = text[1:]
        if text.endswith("]"):
            text = text[:-1]
        text = _UNICODE_ESCAPE.sub("", text)

        labels = []
        for piece in text.split(_AMENITY_SEPARATOR):
            if piece.startswith('"'):
                piece = piece[1:]
            if piece.endswith('"'):
                piece = piece[:-1]
            piece = piece.strip()
            if piece:
                labels.append(piece)
        return labels
    except (AttributeError, TypeError) as e:
        logger.debug(f"Unparseable amenities {raw!r}: {e}")
        return []


def escape_html(text: Any) -> str:
    """Escape text for use as HTML content or a quoted attribute value."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def clean_description(raw: Any, max_length: int = 150) -> str:
    """Strip markup, collapse whitespace and truncate; the result is HTML-escaped."""
    if not raw:
        return escape_html(NO_DESCRIPTION)

    text = _TAG.sub("", str(raw))
    text = _WHITESPACE.sub(" ", text).strip()
    if len(text) > max_length:
        text = text[:max_length] + ELLIPSIS
    return escape_html(text)


def clean_rating(raw: Any) -> float:
    """Review score as a float; 0 means unrated."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return value


# ── Record Projection ──────────────────────────────────────────────────────

def first_text(listing: dict, *keys: str) -> str:
    """First non-empty value among ``keys`` as text, else ''.

    A dotted key like "host.host_name" looks inside a nested object.
    """
    for key in keys:
        value: Any = listing
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None
        if value is not None and value != "":
            return str(value)
    return ""


def listing_title(listing: dict) -> str:
    return first_text(listing, "name", "title")


def listing_neighbourhood(listing: dict) -> str:
    return first_text(listing, "neighbourhood_cleansed")


def listing_host_id(listing: dict) -> str:
    return first_text(listing, "host_id", "host.host_id")


@dataclass
class NormalizedListing:
    """Display-ready projection of one raw listing."""
    title: str
    description: str                      # Already HTML-escaped
    price: int
    amenities: list = field(default_factory=list)
    neighbourhood: str = ""
    rating: float = 0.0                   # 0 = unrated, badge suppressed
    image_url: str = ""
    host_name: str = ANONYMOUS_HOST
    host_photo_url: str = ""
    host_id: str = ""


def normalize_listing(listing: dict, display: Optional[DisplaySettings] = None) -> NormalizedListing:
    display = display or DisplaySettings()
    return NormalizedListing(
        title=listing_title(listing) or UNTITLED,
        description=clean_description(
            first_text(listing, "description", "summary"),
            max_length=display.description_max_length,
        ),
        price=clean_price(listing.get("price")),
        amenities=parse_amenities(listing.get("amenities")),
        neighbourhood=listing_neighbourhood(listing),
        rating=clean_rating(listing.get("review_scores_rating")),
        image_url=first_text(listing, "picture_url", "thumbnail_url", "medium_url")
                  or display.listing_placeholder,
        host_name=first_text(listing, "host.host_name", "host_name") or ANONYMOUS_HOST,
        host_photo_url=first_text(listing, "host.host_picture_url", "host_picture_url", "host_thumbnail_url")
                       or display.host_placeholder,
        host_id=listing_host_id(listing),
    )
