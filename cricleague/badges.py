"""QR badges: one PNG per player, bundled into a ZIP for printing."""

import io
import logging
import re
import zipfile
from pathlib import Path
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from .checkin import qr_payload
from .models import Player
from .store import DocumentStore

logger = logging.getLogger('cricleague.badges')

BADGE_FOLDER = 'qr-badges'


def qr_png(payload: str, box_size: int = 10, border: int = 1) -> bytes:
    """Encode text as a QR code PNG."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(payload)
    qr.make(fit=True)

    buffer = io.BytesIO()
    qr.make_image().save(buffer)
    return buffer.getvalue()


def badge_filename(player: Player) -> str:
    """``<name>_<id>.png`` with anything outside ``[A-Za-z0-9_-]`` replaced."""
    name_part = re.sub(r'[^a-z0-9\-_]', '_', player.name or 'player', flags=re.IGNORECASE)[:40]
    return f'{name_part}_{player.id}.png'


def badge_players(store: DocumentStore, team_id: Optional[str] = None) -> list[Player]:
    """Players to print badges for (optionally one team), sorted by name."""
    players = [
        Player.from_document(player_id, doc)
        for player_id, doc in store.all('players').items()
        if team_id is None or doc.get('teamId') == team_id
    ]
    return sorted(players, key=lambda p: (p.name.lower(), p.id))


def write_badges_zip(
    store: DocumentStore,
    path: str | Path,
    team_id: Optional[str] = None,
) -> tuple[Path, int]:
    """
    Write a ZIP with a ``qr-badges/`` folder holding one QR PNG per player.

    Returns:
        Tuple of (zip path, number of badges)

    Raises:
        ValueError: If there are no players to make badges for
    """
    players = badge_players(store, team_id)
    if not players:
        raise ValueError('No players to download')

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as z:
        for player in players:
            z.writestr(f'{BADGE_FOLDER}/{badge_filename(player)}', qr_png(qr_payload(player.id)))

    logger.info(f'Wrote {len(players)} QR badges to {path}')
    return path, len(players)
