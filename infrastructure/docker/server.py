"""
Container HTTP server for the page audit API.

Endpoints:
    POST /audit     Audit a page: body {"url": "..."} or {"html": "...", "url": "..."}
    GET  /health    Liveness check

Environment variables:
    PORT                        - Listen port (default: 8000)
    RATE_LIMIT_MAX_REQUESTS     - Requests per client per window (default: 30)
    RATE_LIMIT_WINDOW_SECONDS   - Window length in seconds (default: 60)
    PAGELENS_*                  - Audit options, see pagelens.audit.config
"""

import os
import json
import asyncio
import logging
import threading
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler

from pagelens import __version__
from pagelens.audit import AuditOptions
from pagelens.ratelimit import FixedWindowRateLimiter
from pagelens.service import AuditService

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger("pagelens-server")

# ─── Shared State ─────────────────────────────────────────────────────

limiter = FixedWindowRateLimiter(
    max_requests=int(os.environ.get("RATE_LIMIT_MAX_REQUESTS", "30")),
    window_seconds=float(os.environ.get("RATE_LIMIT_WINDOW_SECONDS", "60")),
)
service = AuditService(options=AuditOptions.from_env(), limiter=limiter)

EVICT_INTERVAL_SECONDS = 300


def evict_loop(stop: threading.Event):
    """Periodically drop closed rate-limit windows."""
    while not stop.wait(EVICT_INTERVAL_SECONDS):
        removed = limiter.evict_expired()
        if removed:
            logger.debug(f"Evicted {removed} rate-limit windows")


# ─── HTTP Request Handler ─────────────────────────────────────────────

class Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/health":
            self._respond(200, {"status": "ok", "version": __version__})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self):
        if self.path != "/audit":
            self._respond(404, {"error": "not found"})
            return

        content_length = int(self.headers.get("Content-Length", 0))
        try:
            body = json.loads(self.rfile.read(content_length)) if content_length else {}
        except (ValueError, RecursionError):
            self._respond(400, {"error": "Request body must be JSON"})
            return

        # One event loop per request; handler threads come from ThreadingHTTPServer
        status, data = asyncio.run(service.handle(body, self._client_id()))
        self._respond(status, data)

    def _client_id(self) -> str:
        forwarded = self.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return self.client_address[0] if self.client_address else "unknown"

    def _respond(self, code: int, data: dict):
        payload = json.dumps(data, ensure_ascii=False).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        # Suppress default access logs, use our logger instead
        logger.debug(f"{self.address_string()} {format % args}")


# ─── Main ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "8000"))
    stop = threading.Event()
    threading.Thread(target=evict_loop, args=(stop,), daemon=True).start()
    server = ThreadingHTTPServer(("0.0.0.0", port), Handler)
    logger.info(f"Page audit server listening on port {port}")
    try:
        server.serve_forever()
    finally:
        stop.set()
