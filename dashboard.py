"""
Page model and HTML generation for the listing board.

``Page`` is the display surface: the card container, empty state, stats
panel, loading indicator and error message. The renderers below mutate a
Page; ``render_page`` turns it into a self-contained HTML document with
all CSS/JS inline.
"""

import json
import logging
import os
import statistics
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

from cards import Card, build_card
from config import AppConfig, DisplaySettings
from normalizer import clean_price, escape_html, listing_host_id, normalize_listing, round_half_up
from query_engine import NAME, PRICE_HIGH, PRICE_LOW, SORT_MODES

logger = logging.getLogger(__name__)

SORT_LABELS = {
    PRICE_LOW: "Price: low to high",
    PRICE_HIGH: "Price: high to low",
    NAME: "Name",
}
SORT_OPTIONS = [("", "Default order")] + [(mode, SORT_LABELS[mode]) for mode in SORT_MODES]


@dataclass
class Stats:
    total: int = 0
    avg_price: int = 0
    hosts: int = 0


@dataclass
class Page:
    cards: list = field(default_factory=list)
    empty_state_visible: bool = False
    stats: Stats = field(default_factory=Stats)
    loading: bool = False
    error_message: Optional[str] = None
    search_value: str = ""
    sort_value: str = ""

    def show_loading(self, on: bool) -> None:
        self.loading = on

    def show_error(self, message: str) -> None:
        self.error_message = message

    def hide_error(self) -> None:
        self.error_message = None


# ── Renderers ──────────────────────────────────────────────────────────────

def render_listings(page: Page, listings: list[dict], display: Optional[DisplaySettings] = None) -> list[Card]:
    """Replace the page's cards with one card per listing, in order."""
    page.cards = []
    if not listings:
        page.empty_state_visible = True
        return page.cards

    page.empty_state_visible = False
    page.cards = [build_card(listing, i, display) for i, listing in enumerate(listings)]
    return page.cards


def compute_stats(listings: list[dict]) -> Stats:
    """Count, rounded mean price, and number of distinct host ids."""
    if not listings:
        return Stats()
    avg = statistics.mean(clean_price(l.get("price")) for l in listings)
    hosts = {listing_host_id(l) for l in listings} - {""}
    return Stats(total=len(listings), avg_price=round_half_up(avg), hosts=len(hosts))


def update_stats(page: Page, listings: list[dict]) -> Stats:
    page.stats = compute_stats(listings)
    return page.stats


# ── HTML ───────────────────────────────────────────────────────────────────

def render_grid(page: Page) -> str:
    return "".join(card.to_html() for card in page.cards)


def stats_payload(stats: Stats) -> dict:
    return {
        "total": stats.total,
        "avg_price": f"${stats.avg_price:,}",
        "hosts": stats.hosts,
    }


def render_page(page: Page, live: bool = False, generated_at: Optional[str] = None) -> str:
    generated_at = generated_at or datetime.now().strftime("%B %d, %Y at %I:%M %p")
    return _build_html(page, live, generated_at)


def generate_dashboard(page: Page, view: list[dict], config: AppConfig, source: str = "") -> str:
    """Write the page and the normalized view to the output directory."""
    os.makedirs(config.output_dir, exist_ok=True)

    json_path = os.path.join(config.output_dir, config.data_filename)
    with open(json_path, "w") as f:
        json.dump({
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "search": page.search_value,
            "sort": page.sort_value,
            "stats": asdict(page.stats),
            "listings": [asdict(normalize_listing(l, config.display)) for l in view],
        }, f, indent=2)

    html_path = os.path.join(config.output_dir, config.page_filename)
    with open(html_path, "w") as f:
        f.write(render_page(page))

    logger.info(f"Wrote {len(view)} listings to {json_path}")
    return html_path


def _sort_options(selected: str) -> str:
    options = []
    for value, label in SORT_OPTIONS:
        sel = " selected" if value == selected else ""
        options.append(f'<option value="{escape_html(value)}"{sel}>{escape_html(label)}</option>')
    return "\n      ".join(options)


def _hidden(visible: bool) -> str:
    return "" if visible else " d-none"


def _build_html(page: Page, live: bool, generated_at: str) -> str:
    stats = stats_payload(page.stats)
    disabled = "" if live else " disabled"
    error = escape_html(page.error_message or "")
    live_script = _LIVE_SCRIPT if live else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Listing Board</title>
<style>
  :root {{
    --bg: #0f0f11;
    --surface: #1a1a1f;
    --border: #2a2a31;
    --text: #ececef;
    --text2: #9a9a9f;
    --accent: #ff6b35;
    --green: #4caf50;
    --gold: #ffc107;
  }}
  * {{ margin:0; padding:0; box-sizing:border-box; }}
  body {{
    font-family: system-ui, -apple-system, sans-serif;
    background: var(--bg);
    color: var(--text);
    line-height: 1.5;
  }}
  .d-none {{ display: none !important; }}
  .text-muted {{ color: var(--text2); }}
  .header {{ padding: 2rem; border-bottom: 1px solid var(--border); }}
  .header h1 {{ font-size: 1.8rem; }}
  .header .meta {{ color: var(--text2); font-size: 0.85rem; }}
  .controls {{ display: flex; gap: 0.8rem; padding: 1rem 2rem; flex-wrap: wrap; }}
  .controls input, .controls select {{
    padding: 0.5rem 0.9rem;
    border: 1px solid var(--border);
    border-radius: 999px;
    background: var(--surface);
    color: var(--text);
    outline: none;
  }}
  .controls input {{ flex: 1; min-width: 220px; }}
  .controls input:focus, .controls select:focus {{ border-color: var(--accent); }}
  .stats {{ display: flex; gap: 2rem; padding: 0.5rem 2rem 1rem; color: var(--text2); font-size: 0.85rem; }}
  .stat strong {{ color: var(--text); font-size: 1.1rem; display: block; }}
  .grid {{
    display: grid;
    grid-template-columns: repeat(auto-fill, minmax(320px, 1fr));
    gap: 1.2rem;
    padding: 0 2rem 2rem;
  }}
  .listing-card {{
    background: var(--surface);
    border: 1px solid var(--border);
    border-radius: 12px;
    overflow: hidden;
    height: 100%;
    display: flex;
    flex-direction: column;
  }}
  .listing-media {{ position: relative; }}
  .listing-image {{ width: 100%; height: 200px; object-fit: cover; display: block; }}
  .featured-badge {{
    position: absolute; top: 0.6rem; left: 0.6rem;
    background: var(--gold); color: #000;
    font-size: 0.75rem; font-weight: 700;
    padding: 0.2rem 0.6rem; border-radius: 999px;
  }}
  .listing-body {{ padding: 1rem; display: flex; flex-direction: column; gap: 0.6rem; flex: 1; }}
  .listing-title {{ font-size: 1.05rem; }}
  .listing-description {{ color: var(--text2); font-size: 0.85rem; }}
  .badge {{ font-size: 0.72rem; padding: 0.15rem 0.55rem; border-radius: 999px; margin-right: 0.3rem; }}
  .neighbourhood-badge {{ background: #1e3a5f; color: #90caf9; }}
  .rating-badge {{ background: #3e2f00; color: var(--gold); }}
  .host-section {{ display: flex; gap: 0.6rem; align-items: center; }}
  .host-photo {{ width: 40px; height: 40px; border-radius: 50%; object-fit: cover; }}
  .host-name {{ font-weight: 600; font-size: 0.9rem; }}
  .price-tag {{ color: var(--green); font-weight: 700; font-size: 1.1rem; }}
  .amenities {{ display: flex; flex-wrap: wrap; gap: 0.3rem; margin-top: auto; }}
  .amenity-badge {{
    font-size: 0.72rem; padding: 0.15rem 0.5rem;
    border: 1px solid var(--border); border-radius: 999px; color: var(--text2);
  }}
  .amenity-badge.more {{ color: var(--accent); border-color: var(--accent); }}
  .status {{ padding: 1rem 2rem; }}
  .error {{ color: #ef9a9a; }}
  .empty-state {{ text-align: center; padding: 4rem 2rem; color: var(--text2); }}
  .empty-state h2 {{ font-size: 1.5rem; color: var(--text); margin-bottom: 0.5rem; }}

  @media (max-width: 768px) {{
    .header, .controls, .stats, .grid {{ padding-left: 1rem; padding-right: 1rem; }}
    .grid {{ grid-template-columns: 1fr; }}
  }}
</style>
</head>
<body>

<div class="header">
  <h1>Listing Board</h1>
  <div class="meta">Updated {generated_at}</div>
</div>

<div class="controls">
  <input type="text" id="searchInput" placeholder="Search by name, description or neighbourhood..." value="{escape_html(page.search_value)}"{disabled}>
  <select id="sortSelect"{disabled}>
      {_sort_options(page.sort_value)}
  </select>
</div>

<div class="stats">
  <div class="stat"><strong id="totalListings">{stats["total"]}</strong>listings</div>
  <div class="stat"><strong id="avgPrice">{stats["avg_price"]}</strong>avg / night</div>
  <div class="stat"><strong id="totalHosts">{stats["hosts"]}</strong>hosts</div>
</div>

<div id="loading" class="status{_hidden(page.loading)}">Loading listings...</div>
<div id="errorMessage" class="status error{_hidden(bool(page.error_message))}">{error}</div>

<div class="grid" id="listingsContainer">{render_grid(page)}
</div>
<div id="noResults" class="empty-state{_hidden(page.empty_state_visible)}">
  <h2>No listings match</h2>
  <p>Try a different search.</p>
</div>

<script>
// ── Image Fallbacks ─────────────────────────────
function bindFallbacks(root) {{
  root.querySelectorAll('img[data-fallback]').forEach(img => {{
    const useFallback = () => {{
      if (img.getAttribute('src') !== img.dataset.fallback) img.src = img.dataset.fallback;
    }};
    if (img.complete && img.naturalWidth === 0) {{
      useFallback();
    }} else {{
      img.addEventListener('error', useFallback, {{ once: true }});
    }}
  }});
}}
bindFallbacks(document);
{live_script}
</script>
</body>
</html>"""


_LIVE_SCRIPT = """
// ── Events ──────────────────────────────────────
const grid = document.getElementById('listingsContainer');
const noResults = document.getElementById('noResults');
let latest = 0;

async function apply(url) {
  const seq = ++latest;
  const resp = await fetch(url);
  if (!resp.ok || seq !== latest) return;
  const data = await resp.json();
  if (seq !== latest) return;
  grid.innerHTML = data.html;
  noResults.classList.toggle('d-none', !data.empty);
  if ('sort' in data) document.getElementById('sortSelect').value = data.sort;
  if (data.stats) {
    document.getElementById('totalListings').textContent = data.stats.total;
    document.getElementById('avgPrice').textContent = data.stats.avg_price;
    document.getElementById('totalHosts').textContent = data.stats.hosts;
  }
  bindFallbacks(grid);
}

document.getElementById('searchInput').addEventListener('input', e => {
  apply('/api/search?q=' + encodeURIComponent(e.target.value));
});

document.getElementById('sortSelect').addEventListener('change', e => {
  apply('/api/sort?mode=' + encodeURIComponent(e.target.value));
});
"""
