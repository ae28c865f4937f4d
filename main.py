#!/usr/bin/env python3
"""
Listing Board — Main Entry Point

Loads the listings export, renders the board, and either writes it as a
static page or serves it locally with live search and sort.

Usage:
    python main.py                          # Write index.html from the dataset
    python main.py --demo                   # Generate with sample data (no dataset needed)
    python main.py --search wifi --sort price-low
    python main.py --serve --port 8080      # Live search/sort in the browser
    python main.py --open                   # Open the page in a browser after generating

Environment Variables:
    LISTINGS_SOURCE       — dataset path or URL
    LISTINGS_OUTPUT_DIR   — where index.html and listings.json go
    LISTINGS_HOST         — interface for --serve (default 127.0.0.1)
    LISTINGS_PORT         — port for --serve
"""

import argparse
import logging
import os
import random
import sys
import webbrowser
from typing import Optional

from app import ListingsApp, load_from_source
from config import AppConfig
from dashboard import generate_dashboard
from server import serve

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def generate_demo_data(count: int = 50) -> list[dict]:
    """Sample records shaped like the Inside Airbnb export, quirks included."""
    neighbourhoods = [
        ("Mission", 120, 260),
        ("Haight Ashbury", 110, 240),
        ("Nob Hill", 150, 340),
        ("Pacific Heights", 180, 420),
        ("South of Market", 130, 300),
        ("Inner Sunset", 95, 210),
        ("Noe Valley", 140, 320),
        ("Castro/Upper Market", 115, 280),
        ("Marina", 160, 380),
        ("Outer Richmond", 85, 190),
        ("Potrero Hill", 120, 270),
        ("North Beach", 130, 310),
    ]
    kinds = ["Sunny studio", "Cozy room", "Victorian flat", "Modern loft", "Garden suite", "Charming apartment"]
    amenities_pool = [
        "Wifi", "Kitchen", "Heating", "Washer", "Dryer", "Essentials",
        "Hair dryer", "Dedicated workspace", "Free street parking",
        "Coffee maker", "Smoke alarm", "Hot water", "Self check-in",
        "Patio or balcony", "Dishes and silverware",
    ]
    hosts = [(1000 + i, name) for i, name in enumerate(
        ["Alex", "Sam", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Jamie", "Avery", "Quinn"]
    )]

    listings = []
    for i in range(count):
        hood, low, high = random.choice(neighbourhoods)
        host_id, host_name = random.choice(hosts)
        price = random.randint(low, high)
        picked = random.sample(amenities_pool, random.randint(0, 10))
        name = f"{random.choice(kinds)} in {hood}"

        listings.append({
            "id": 5000 + i,
            "name": name,
            "description": (
                f"<b>{name}</b><br />Walk to cafes and transit.<br /><br />"
                f"The space: {random.randint(1, 3)} bedroom(s), sleeps {random.randint(1, 6)}. "
                "Quiet street, fast wifi and a fully stocked kitchen for longer stays."
            ),
            "price": f"${price:,}.00",
            "picture_url": f"https://picsum.photos/seed/listing{i}/400/300",
            "host_id": host_id,
            "host_name": host_name,
            "host_picture_url": f"https://picsum.photos/seed/host{host_id}/50/50",
            "amenities": "[" + ", ".join(f'"{a}"' for a in picked) + "]",
            "neighbourhood_cleansed": hood,
            "review_scores_rating": round(random.uniform(3.5, 5.0), 2) if random.random() > 0.2 else None,
        })

    return listings


def main(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser(description="Listing Board")
    parser.add_argument("--source", help="Dataset path or URL (default: $LISTINGS_SOURCE)")
    parser.add_argument("--demo", action="store_true", help="Use sample data (no dataset needed)")
    parser.add_argument("--search", default="", help="Search term to apply before writing the page")
    parser.add_argument("--sort", default="", help="Sort order: price-low, price-high or name")
    parser.add_argument("--output-dir", help="Where to write index.html and listings.json")
    parser.add_argument("--open", action="store_true", help="Open the page in a browser after generating")
    parser.add_argument("--serve", action="store_true", help="Serve the board with live search and sort")
    parser.add_argument("--port", type=int, help="Port for --serve")
    args = parser.parse_args(argv)

    config = AppConfig()
    if args.source:
        config.source = args.source
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.port is not None:
        config.server.port = args.port

    if args.demo:
        logger.info("Running in DEMO mode with sample data...")
        app = ListingsApp(config, loader=lambda cfg: generate_demo_data(cfg.max_listings))
    else:
        logger.info(f"Loading listings from {config.source}")
        app = ListingsApp(config, loader=load_from_source)

    loaded = app.start()

    if args.serve:
        # A failed load is shown on the page itself
        serve(app, config.server.host, config.server.port)
        return None

    if not loaded:
        logger.error(app.page.error_message)
        sys.exit(1)

    if args.search:
        app.on_search_input(args.search)
    if args.sort:
        app.on_sort_change(args.sort)

    stats = app.page.stats
    logger.info(f"{stats.total} listings | avg ${stats.avg_price}/night | {stats.hosts} hosts")

    source = "demo" if args.demo else config.source
    html_path = generate_dashboard(app.page, app.view, config, source=source)
    logger.info(f"Page saved to: {html_path}")

    if args.open:
        webbrowser.open(f"file://{os.path.abspath(html_path)}")

    print(f"\n✅ Listing board ready: {html_path}")
    return html_path


if __name__ == "__main__":
    main()
