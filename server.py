"""
Local server for the listing board.

Serves the page and turns the page's input events into calls on the
app:
  GET /                      → the full page
  GET /api/search?q=<term>   → re-rendered cards, sort selection, stats (JSON)
  GET /api/sort?mode=<mode>  → re-rendered cards (JSON)
  GET /health                → ok

The server is single-threaded: each event is handled to completion
before the next request is read.
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlsplit

from app import ListingsApp
from dashboard import render_grid, render_page, stats_payload

logger = logging.getLogger(__name__)


class ListingsHandler(BaseHTTPRequestHandler):
    app: ListingsApp = None  # set by create_server

    def do_GET(self):
        url = urlsplit(self.path)
        params = parse_qs(url.query)

        if url.path == "/":
            self._send(200, "text/html; charset=utf-8", render_page(self.app.page, live=True).encode("utf-8"))
        elif url.path == "/health":
            self._send(200, "text/plain", b"ok")
        elif url.path == "/api/search":
            self.app.on_search_input(_param(params, "q"))
            self._send_json({
                "html": render_grid(self.app.page),
                "empty": self.app.page.empty_state_visible,
                "sort": self.app.page.sort_value,
                "stats": stats_payload(self.app.page.stats),
            })
        elif url.path == "/api/sort":
            self.app.on_sort_change(_param(params, "mode"))
            self._send_json({
                "html": render_grid(self.app.page),
                "empty": self.app.page.empty_state_visible,
            })
        else:
            self.send_error(404, "Not Found")

    def _send_json(self, payload: dict) -> None:
        self._send(200, "application/json", json.dumps(payload).encode("utf-8"))

    def _send(self, status: int, content_type: str, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def _param(params: dict, name: str) -> str:
    values = params.get(name)
    return values[0] if values else ""


def create_server(app: ListingsApp, host: str = "127.0.0.1", port: int = 8080) -> HTTPServer:
    handler = type("BoundListingsHandler", (ListingsHandler,), {"app": app})
    return HTTPServer((host, port), handler)


def serve(app: ListingsApp, host: str, port: int) -> None:
    server = create_server(app, host, port)
    logger.info(f"Listing board: http://{host}:{server.server_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    finally:
        server.server_close()
