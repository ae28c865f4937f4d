"""Tests for list rendering, stats and page output."""
from __future__ import annotations

import json

from config import AppConfig
from dashboard import (
    SORT_OPTIONS,
    Page,
    Stats,
    compute_stats,
    generate_dashboard,
    render_listings,
    render_page,
    update_stats,
)
from query_engine import SORT_MODES


def test_render_listings_replaces_cards(listings):
    page = Page()
    render_listings(page, listings)
    assert len(page.cards) == 4
    assert not page.empty_state_visible

    render_listings(page, listings[:1])
    assert [c.listing.title for c in page.cards] == ["Sunny Loft"]


def test_render_listings_empty_shows_empty_state(listings):
    page = Page()
    render_listings(page, listings)
    render_listings(page, [])

    assert page.cards == []
    assert page.empty_state_visible


def test_render_listings_recomputes_featured_by_position(make_listing):
    many = [make_listing(name=f"L{i}") for i in range(12)]
    page = Page()

    render_listings(page, many)
    assert [c.featured for c in page.cards] == [True] * 10 + [False] * 2

    render_listings(page, list(reversed(many)))
    assert page.cards[0].listing.title == "L11"
    assert page.cards[0].featured


def test_compute_stats(listings):
    stats = compute_stats(listings)

    assert stats.total == 4
    # (150 + 80 + 1200 + 80) / 4 = 377.5
    assert stats.avg_price == 378
    # host 1 twice, host 2 once, one absent
    assert stats.hosts == 2


def test_compute_stats_empty_view():
    assert compute_stats([]) == Stats(total=0, avg_price=0, hosts=0)


def test_host_count_ignores_empty_ids(make_listing):
    view = [make_listing(host_id=""), make_listing(host_id=None), make_listing(host_id="42"),
            make_listing(host_id=42)]
    assert compute_stats(view).hosts == 1


def test_update_stats_sets_page(listings):
    page = Page()
    update_stats(page, listings[:2])
    assert page.stats == Stats(total=2, avg_price=115, hosts=2)


def test_render_page_static_and_live(listings):
    page = Page()
    render_listings(page, listings)
    update_stats(page, listings)
    page.search_value = 'a "quoted" term'
    page.sort_value = "price-high"

    static = render_page(page, generated_at="now")
    assert 'id="listingsContainer"' in static
    assert static.count('class="listing-card"') == 4
    assert 'value="a &quot;quoted&quot; term"' in static
    assert '<option value="price-high" selected>' in static
    assert "disabled" in static
    assert "/api/search" not in static

    live = render_page(page, live=True, generated_at="now")
    assert "/api/search" in live
    assert "/api/sort" in live


def test_render_page_shows_error_and_hides_loading():
    page = Page()
    page.show_error("Failed to load listings: <boom>")

    html = render_page(page, generated_at="now")
    assert '<div id="errorMessage" class="status error">Failed to load listings: &lt;boom&gt;</div>' in html
    assert '<div id="loading" class="status d-none">' in html


def test_generate_dashboard_writes_page_and_data(tmp_path, listings):
    config = AppConfig(output_dir=str(tmp_path))
    page = Page()
    render_listings(page, listings)
    update_stats(page, listings)

    html_path = generate_dashboard(page, listings, config, source="test.json")

    assert html_path == str(tmp_path / "index.html")
    assert "Sunny Loft" in (tmp_path / "index.html").read_text()

    data = json.loads((tmp_path / "listings.json").read_text())
    assert data["source"] == "test.json"
    assert data["stats"]["total"] == 4
    assert [l["price"] for l in data["listings"]] == [150, 80, 1200, 80]


def test_sort_options_cover_every_mode():
    assert [value for value, _ in SORT_OPTIONS] == ["", *SORT_MODES]

    html = render_page(Page(), generated_at="now")
    for mode in SORT_MODES:
        assert f'<option value="{mode}">' in html


def test_live_page_syncs_sort_select_from_search_response():
    live = render_page(Page(), live=True, generated_at="now")
    assert "document.getElementById('sortSelect').value = data.sort" in live
