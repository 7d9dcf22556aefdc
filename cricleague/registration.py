"""Team registration: a team document plus one player document per roster entry."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import ValidationError

from .models import Player
from .schemas import PlayerDocument, TeamDocument
from .store import DocumentStore
from .validators import canonical_zone, parse_age, validate_team_registration

logger = logging.getLogger('cricleague.registration')


class RegistrationError(ValueError):
    """Registration rejected; ``errors`` lists every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__('; '.join(errors))


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def build_player_document(entry: Mapping[str, Any], team_id: Optional[str]) -> dict[str, Any]:
    """Validated players-collection document for a form or CSV entry."""
    age = parse_age(entry.get('age'))
    doc = PlayerDocument(
        name=str(entry.get('name') or '').strip(),
        age=int(age) if age is not None else -1,
        aadhaar=_clean(entry.get('aadhaar')),
        phone=_clean(entry.get('phone')),
        preferredRole=_clean(entry.get('preferredRole')),
        teamId=team_id,
    )
    return doc.model_dump(exclude={'createdAt'})


def register_team(
    store: DocumentStore,
    team_name: str,
    zone: Optional[str],
    contact_email: str,
    players: Sequence[Mapping[str, Any]],
) -> tuple[str, list[str]]:
    """
    Register a team and its players.

    Nothing is written unless the whole form is valid.

    Args:
        store: Document store
        team_name: Team name
        zone: League zone (optional; must be a configured zone when given)
        contact_email: Contact email for the team
        players: Player entries (name, age, aadhaar, phone, preferredRole)

    Returns:
        Tuple of (team_id, player_ids)

    Raises:
        RegistrationError: If the form fails validation
    """
    errors = validate_team_registration(team_name, contact_email, players, zone=zone)
    if errors:
        raise RegistrationError(errors)

    try:
        team_doc = TeamDocument(
            name=team_name.strip(),
            zone=canonical_zone(zone) or '',
            contactEmail=contact_email.strip(),
        ).model_dump(exclude={'createdAt'})
        # Validate all players before the first write
        player_docs = [build_player_document(entry, team_id=None) for entry in players]
    except ValidationError as e:
        raise RegistrationError([str(e)]) from e

    team_id = store.add('teams', team_doc)
    player_ids = []
    for doc in player_docs:
        doc['teamId'] = team_id
        player_ids.append(store.add('players', doc))

    logger.info(f'Registered team {team_doc["name"]!r} ({team_id}) with {len(player_ids)} players')
    return team_id, player_ids


def list_team_players(store: DocumentStore, team_id: str) -> list[Player]:
    """Players registered to a team, sorted by name."""
    players = [
        Player.from_document(player_id, doc)
        for player_id, doc in store.where('players', 'teamId', team_id).items()
    ]
    return sorted(players, key=lambda p: p.name.lower())
