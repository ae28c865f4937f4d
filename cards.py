"""
Listing cards.

A card is built as a small model first (``Card``) and serialized to HTML
separately, so the display rules (featured badge, rating badge, amenity
overflow, image fallback) can be checked without parsing markup.
"""

from dataclasses import dataclass, field
from typing import Optional

from config import DisplaySettings
from normalizer import NormalizedListing, escape_html, normalize_listing

NO_AMENITIES = "No amenities listed"


@dataclass
class Image:
    """An image that switches to ``fallback`` when its source fails to load."""
    src: str
    fallback: str
    alt: str = ""
    failed: bool = False

    def on_error(self) -> None:
        if self.failed:
            return
        self.failed = True
        self.src = self.fallback

    def to_html(self, css_class: str) -> str:
        return (
            f'<img src="{escape_html(self.src)}" class="{css_class}" '
            f'alt="{escape_html(self.alt)}" data-fallback="{escape_html(self.fallback)}" loading="lazy">'
        )


@dataclass
class AmenitiesBlock:
    badges: list = field(default_factory=list)
    overflow: Optional[str] = None        # "+N more"
    placeholder: Optional[str] = None     # Set only when there are no amenities

    def to_html(self) -> str:
        if self.placeholder:
            return f'<div class="amenities"><small class="text-muted">{escape_html(self.placeholder)}</small></div>'
        spans = [f'<span class="amenity-badge">{escape_html(b)}</span>' for b in self.badges]
        if self.overflow:
            spans.append(f'<span class="amenity-badge more">{escape_html(self.overflow)}</span>')
        return f'<div class="amenities">{"".join(spans)}</div>'


def build_amenities(labels: list[str], limit: int = 5) -> AmenitiesBlock:
    if not labels:
        return AmenitiesBlock(placeholder=NO_AMENITIES)
    remaining = len(labels) - limit
    return AmenitiesBlock(
        badges=list(labels[:limit]),
        overflow=f"+{remaining} more" if remaining > 0 else None,
    )


@dataclass
class Card:
    listing: NormalizedListing
    image: Image
    host_photo: Image
    amenities: AmenitiesBlock
    featured: bool = False

    @property
    def price_label(self) -> str:
        return f"${self.listing.price}/night"

    @property
    def rating_label(self) -> Optional[str]:
        if self.listing.rating <= 0:
            return None
        return f"{self.listing.rating:g}"

    def to_html(self) -> str:
        l = self.listing
        featured = '<span class="featured-badge">⭐ Featured</span>' if self.featured else ""
        neighbourhood = (
            f'<span class="badge neighbourhood-badge">{escape_html(l.neighbourhood)}</span>'
            if l.neighbourhood else ""
        )
        rating = (
            f'<span class="badge rating-badge">★ {escape_html(self.rating_label)}</span>'
            if self.rating_label else ""
        )
        # l.description is escaped by the normalizer
        return f"""
      <div class="col-md-6 col-lg-4">
        <div class="listing-card">
          <div class="listing-media">
            {self.image.to_html("listing-image")}
            {featured}
          </div>
          <div class="listing-body">
            <h5 class="listing-title">{escape_html(l.title)}</h5>
            <p class="listing-description">{l.description}</p>
            <div class="listing-badges">{neighbourhood}{rating}</div>
            <div class="host-section">
              {self.host_photo.to_html("host-photo")}
              <div>
                <div class="host-name">{escape_html(l.host_name)}</div>
                <small class="text-muted">Host</small>
              </div>
            </div>
            <div class="price-tag">{escape_html(self.price_label)}</div>
            {self.amenities.to_html()}
          </div>
        </div>
      </div>"""


def build_card(listing: dict, index: int, display: Optional[DisplaySettings] = None) -> Card:
    """Build the card for ``listing`` at position ``index`` of the rendered sequence."""
    display = display or DisplaySettings()
    normalized = normalize_listing(listing, display)
    return Card(
        listing=normalized,
        image=Image(src=normalized.image_url, fallback=display.listing_placeholder, alt=normalized.title),
        host_photo=Image(src=normalized.host_photo_url, fallback=display.host_placeholder, alt=normalized.host_name),
        amenities=build_amenities(normalized.amenities, display.amenities_limit),
        featured=index < display.featured_count,
    )
