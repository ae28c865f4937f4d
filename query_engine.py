"""
In-memory search and sort over the loaded listings.

The engine owns two sequences: ``full``, fixed when the engine is built,
and ``view``, the subset currently on screen. Every search starts again
from ``full`` (dropping any earlier sort order); every sort reorders the
current ``view``.
"""

import logging
import unicodedata
from typing import Iterable

from normalizer import clean_price, first_text, listing_neighbourhood, listing_title

logger = logging.getLogger(__name__)

PRICE_LOW = "price-low"
PRICE_HIGH = "price-high"
NAME = "name"
SORT_MODES = (PRICE_LOW, PRICE_HIGH, NAME)


class QueryEngine:

    def __init__(self, listings: Iterable[dict] = ()):
        self._full: tuple[dict, ...] = tuple(listings)
        self.view: list[dict] = list(self._full)

    @property
    def full(self) -> list[dict]:
        return list(self._full)

    def search(self, term: str) -> list[dict]:
        """Keep listings whose title, description or neighbourhood contains ``term``."""
        query = (term or "").strip().lower()
        if not query:
            self.view = list(self._full)
        else:
            self.view = [l for l in self._full if _matches(l, query)]
        logger.debug(f"search {query!r}: {len(self.view)}/{len(self._full)} listings")
        return self.view

    def sort(self, mode: str) -> list[dict]:
        """Reorder the current view. Unknown modes keep the current order."""
        ordered = list(self.view)
        if mode == PRICE_LOW:
            ordered.sort(key=lambda l: clean_price(l.get("price")))
        elif mode == PRICE_HIGH:
            ordered.sort(key=lambda l: clean_price(l.get("price")), reverse=True)
        elif mode == NAME:
            ordered.sort(key=_title_key)
        self.view = ordered
        return self.view


def _matches(listing: dict, query: str) -> bool:
    fields = (
        listing_title(listing),
        first_text(listing, "description"),
        listing_neighbourhood(listing),
    )
    return any(query in f.lower() for f in fields)


def _title_key(listing: dict) -> tuple[str, str, str]:
    """Accents and case only break ties, so "Éclair" sorts between "apple" and "Zen"."""
    title = listing_title(listing)
    base = "".join(c for c in unicodedata.normalize("NFKD", title) if not unicodedata.combining(c))
    return base.casefold(), title.casefold(), title
