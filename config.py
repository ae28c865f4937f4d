"""
Configuration for the listing board.

The dataset is a static JSON export of short-term rental listings
(e.g. the Inside Airbnb San Francisco dump). Point LISTINGS_SOURCE at
a local path or an http(s) URL.
"""

import os
from dataclasses import dataclass, field


@dataclass
class DisplaySettings:
    """How listings are presented on the page."""
    featured_count: int = 10              # First N rendered cards get the badge
    description_max_length: int = 150
    amenities_limit: int = 5              # Badges shown before "+N more"
    listing_placeholder: str = "https://via.placeholder.com/400x300?text=No+Image"
    host_placeholder: str = "https://via.placeholder.com/50?text=Host"


@dataclass
class ServerSettings:
    """Local event server."""
    host: str = field(default_factory=lambda: os.getenv("LISTINGS_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("LISTINGS_PORT", "8080")))


@dataclass
class AppConfig:
    """Top-level configuration."""
    display: DisplaySettings = field(default_factory=DisplaySettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    # Input
    source: str = os.getenv("LISTINGS_SOURCE", "airbnb_sf_listings_500.json")
    request_timeout: int = 30

    # Only the head of the file is ever shown
    max_listings: int = 50

    # Output
    output_dir: str = os.getenv("LISTINGS_OUTPUT_DIR", os.path.expanduser("~/listing-board/output"))
    page_filename: str = "index.html"
    data_filename: str = "listings.json"
