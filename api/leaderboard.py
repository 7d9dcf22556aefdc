"""Vercel Serverless Function serving the league standings."""

import json
import os
import sys
from http.server import BaseHTTPRequestHandler
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cricleague.standings import ranked_standings, standings_from_documents  # noqa: E402
from cricleague.store import DocumentStore  # noqa: E402

DATA_DIR = os.environ.get('LEAGUE_DATA_DIR', 'data')


def build_leaderboard(data_dir: str | Path) -> dict:
    """Standings payload: {mode, standings: [...]} with 1-based ranks."""
    store = DocumentStore(data_dir)
    mode, rows = standings_from_documents(store.all('teams'), store.all('matches'))
    return {'mode': mode, 'standings': ranked_standings(rows)}


class handler(BaseHTTPRequestHandler):  # noqa: N801
    def do_OPTIONS(self):
        """Handle CORS preflight."""
        self.send_response(200)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.send_header('Access-Control-Max-Age', '86400')
        self.send_header('Content-Length', '0')
        self.end_headers()

    def do_GET(self):
        """Return the current standings."""
        try:
            return self._send_json(200, build_leaderboard(DATA_DIR))
        except (OSError, ValueError) as e:
            return self._send_json(500, {'error': f'Failed to load leaderboard: {e}'})

    def _send_json(self, status_code: int, data: dict):
        """Send JSON response with CORS headers."""
        self.send_response(status_code)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass
