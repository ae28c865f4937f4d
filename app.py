"""
Application bootstrap: loads the dataset once and routes input events.

``ListingsApp`` owns the query engine and the page. The two event
handlers run synchronously to completion, so the page always reflects
exactly one engine state.
"""

import logging
from typing import Callable, Optional

from config import AppConfig
from dashboard import Page, render_listings, update_stats
from loader import LoadError, fetch_listings
from query_engine import QueryEngine

logger = logging.getLogger(__name__)

Loader = Callable[[AppConfig], list]


def load_from_source(config: AppConfig) -> list:
    return fetch_listings(config.source, limit=config.max_listings, timeout=config.request_timeout)


class ListingsApp:

    def __init__(self, config: Optional[AppConfig] = None, loader: Loader = load_from_source):
        self.config = config or AppConfig()
        self.loader = loader
        self.engine = QueryEngine()
        self.page = Page()

    @property
    def view(self) -> list[dict]:
        return self.engine.view

    def start(self) -> bool:
        """Load the dataset and render it. Returns False if loading failed."""
        self.page.show_loading(True)
        self.page.hide_error()

        try:
            listings = self.loader(self.config)
        except LoadError as e:
            logger.error(f"Error loading listings: {e}")
            self.page.show_error(f"Failed to load listings: {e}")
            self.page.show_loading(False)
            return False

        self.engine = QueryEngine(listings[: self.config.max_listings])
        logger.info(f"Showing {len(self.engine.view)} listings")

        render_listings(self.page, self.engine.view, self.config.display)
        update_stats(self.page, self.engine.view)
        self.page.show_loading(False)
        return True

    def on_search_input(self, value: str) -> list[dict]:
        self.page.search_value = value or ""
        # A new search drops the previous sort order
        self.page.sort_value = ""
        view = self.engine.search(value)
        render_listings(self.page, view, self.config.display)
        update_stats(self.page, view)
        return view

    def on_sort_change(self, value: str) -> list[dict]:
        self.page.sort_value = value or ""
        view = self.engine.sort(value)
        # Stats do not depend on order
        render_listings(self.page, view, self.config.display)
        return view
