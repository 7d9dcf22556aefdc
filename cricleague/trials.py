"""Trial sessions: scheduling and player signup."""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from .config import get_min_player_age
from .constants import DEFAULT_SESSION_TYPE
from .models import TrialSession
from .schemas import RegistrationDocument, SessionDocument
from .store import DocumentNotFoundError, DocumentStore
from .validators import canonical_zone, is_valid_aadhaar_format, is_valid_age, parse_age, validate_session

logger = logging.getLogger('cricleague.trials')


class SessionError(ValueError):
    """Session could not be created or signed up for."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__('; '.join(errors))


def create_session(
    store: DocumentStore,
    zone: str,
    ground: str,
    date_iso: str,
    max_players: Optional[int] = None,
    type: str = DEFAULT_SESSION_TYPE,
    notes: Optional[str] = None,
) -> str:
    """
    Schedule a trial session.

    Args:
        store: Document store
        zone: League zone hosting the session (one of the configured zones)
        ground: Ground name
        date_iso: Start time as an ISO 8601 string
        max_players: Signup capacity (None = unlimited)
        type: Session type (default: Trial)
        notes: Free-text notes

    Returns:
        The new session id

    Raises:
        SessionError: If the session fails validation
    """
    errors = validate_session(zone, ground, date_iso, max_players)
    if errors:
        raise SessionError(errors)

    try:
        doc = SessionDocument(
            type=(type or DEFAULT_SESSION_TYPE).strip(),
            zone=canonical_zone(zone),
            ground=ground.strip(),
            dateISO=date_iso,
            maxPlayers=max_players,
            notes=(notes or '').strip() or None,
        )
    except ValidationError as e:
        raise SessionError([str(e)]) from e

    session_id = store.add('sessions', doc.model_dump(exclude={'createdAt'}))
    logger.info(f'Scheduled {doc.type} session {session_id} at {doc.ground} ({doc.zone})')
    return session_id


def get_session(store: DocumentStore, session_id: str) -> TrialSession:
    """Load a session. Raises DocumentNotFoundError('Session not found')."""
    try:
        doc = store.get('sessions', session_id)
    except DocumentNotFoundError as e:
        raise DocumentNotFoundError('sessions', session_id, 'Session not found') from e
    return TrialSession.from_document(session_id, doc)


def list_sessions(store: DocumentStore) -> list[TrialSession]:
    """All sessions, earliest first; sessions without a date sort last."""
    sessions = [
        TrialSession.from_document(session_id, doc)
        for session_id, doc in store.all('sessions').items()
    ]
    return sorted(sessions, key=lambda s: (s.date_iso is None, s.date_iso or '', s.id))


def session_registrations(store: DocumentStore, session_id: str) -> dict[str, dict[str, Any]]:
    """Signups for a session as {registration_id: document}."""
    return store.where('registrations', 'sessionId', session_id)


def signup(
    store: DocumentStore,
    session_id: str,
    name: str,
    age: Any,
    phone: Optional[str] = None,
    aadhaar: Optional[str] = None,
) -> str:
    """
    Sign a player up for a trial session.

    Returns:
        The new registration id

    Raises:
        DocumentNotFoundError: If the session doesn't exist
        SessionError: If the form is invalid or the session is full
    """
    session = get_session(store, session_id)

    name = (name or '').strip()
    if not name or age in (None, ''):
        raise SessionError(['Name and age are required'])
    if not is_valid_age(age):
        raise SessionError([f'Age must be a number >= {get_min_player_age()}'])
    aadhaar = (aadhaar or '').strip() or None
    if aadhaar and not is_valid_aadhaar_format(aadhaar):
        raise SessionError(['Aadhaar must be 12 digits'])

    if session.max_players and len(session_registrations(store, session_id)) >= session.max_players:
        raise SessionError(['Session is full'])

    try:
        doc = RegistrationDocument(
            sessionId=session_id,
            name=name,
            age=int(parse_age(age)),
            phone=(phone or '').strip() or None,
            aadhaar=aadhaar,
        )
    except ValidationError as e:
        raise SessionError([str(e)]) from e

    registration_id = store.add('registrations', doc.model_dump(exclude={'createdAt'}))
    logger.info(f'{name} signed up for session {session_id}')
    return registration_id
