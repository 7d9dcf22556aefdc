"""QR-code check-in.

Player QR codes encode the bare player id. Scanned text may also be a JSON
object carrying the id under ``id``, ``playerId`` or ``uid``.
"""

import json
import logging
from datetime import datetime
from typing import Optional

from .models import Player
from .store import DocumentNotFoundError, DocumentStore
from .utils import utc_now_iso

logger = logging.getLogger('cricleague.checkin')

PAYLOAD_ID_FIELDS = ('id', 'playerId', 'uid')


def qr_payload(player_id: str) -> str:
    """Text to encode in a player's QR code."""
    return player_id


def parse_qr_payload(text: str) -> str:
    """Extract the player id from scanned QR text."""
    text = text.strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text

    if isinstance(parsed, dict):
        for field in PAYLOAD_ID_FIELDS:
            if parsed.get(field):
                return str(parsed[field])
    return text


def check_in(store: DocumentStore, scanned_text: str, now: Optional[datetime] = None) -> Player:
    """
    Mark the scanned player as checked in.

    Args:
        store: Document store
        scanned_text: Decoded QR text
        now: Check-in time (default: current UTC time)

    Returns:
        The updated Player

    Raises:
        DocumentNotFoundError: If no player has the scanned id
    """
    player_id = parse_qr_payload(scanned_text)
    if not store.exists('players', player_id):
        raise DocumentNotFoundError('players', player_id, f'Player not found for id: {player_id}')

    checked_in_at = now.isoformat() if now else utc_now_iso()
    doc = store.update('players', player_id, {'checkedIn': True, 'checkedInAt': checked_in_at})
    player = Player.from_document(player_id, doc)
    logger.info(f'Player checked in: {player.name or player_id}')
    return player


def checked_in_players(store: DocumentStore) -> list[Player]:
    """All players with team names resolved, checked-in players first then by name."""
    team_names = {
        team_id: doc.get('name') or 'Unnamed team' for team_id, doc in store.all('teams').items()
    }

    players = []
    for player_id, doc in store.all('players').items():
        player = Player.from_document(player_id, doc)
        if player.team_id:
            player.team_name = team_names.get(player.team_id, 'Unknown')
        players.append(player)

    return sorted(players, key=lambda p: (not p.checked_in, p.name.lower(), p.id))
