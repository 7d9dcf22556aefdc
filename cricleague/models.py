"""Data models for the cricket league portal."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


@dataclass
class Team:
    """A team as stored, with optional season totals."""
    id: str
    name: str = ''
    zone: Optional[str] = None
    played: Optional[Number] = None
    won: Optional[Number] = None
    lost: Optional[Number] = None
    drawn: Optional[Number] = None
    points: Optional[Number] = None
    nrr: Optional[Number] = None


@dataclass
class Match:
    """Canonical match record, as produced by cricleague.normalize."""
    id: str
    team_a: str
    team_b: str
    score_a: Optional[Number] = None
    score_b: Optional[Number] = None
    winner: Optional[str] = None
    is_draw: bool = False
    played: Optional[bool] = None  # None when no explicit flag was stored
    reported_scores: int = 0  # score fields present in the stored doc (0-2)


@dataclass
class StandingsRow:
    """One line of the leaderboard."""
    team_id: str
    name: str
    played: Number = 0
    won: Number = 0
    lost: Number = 0
    drawn: Number = 0
    points: Number = 0
    nrr: Optional[Number] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'teamId': self.team_id,
            'name': self.name,
            'played': self.played,
            'won': self.won,
            'lost': self.lost,
            'drawn': self.drawn,
            'points': self.points,
            'nrr': self.nrr,
        }


@dataclass
class Player:
    """Registered player."""
    id: str
    name: str
    age: Optional[Number] = None
    aadhaar: Optional[str] = None
    phone: Optional[str] = None
    preferred_role: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    checked_in: bool = False
    checked_in_at: Optional[str] = None

    @classmethod
    def from_document(cls, player_id: str, doc: Dict[str, Any]) -> 'Player':
        return cls(
            id=player_id,
            name=doc.get('name') or '',
            age=doc.get('age'),
            aadhaar=doc.get('aadhaar'),
            phone=doc.get('phone'),
            preferred_role=doc.get('preferredRole'),
            team_id=doc.get('teamId'),
            checked_in=bool(doc.get('checkedIn', False)),
            checked_in_at=doc.get('checkedInAt'),
        )


@dataclass
class TrialSession:
    """Trial or camp session players can sign up for."""
    id: str
    zone: str
    ground: str
    date_iso: Optional[str] = None
    type: str = 'Trial'
    max_players: Optional[int] = None
    notes: Optional[str] = None

    @classmethod
    def from_document(cls, session_id: str, doc: Dict[str, Any]) -> 'TrialSession':
        return cls(
            id=session_id,
            zone=doc.get('zone') or '',
            ground=doc.get('ground') or '',
            date_iso=doc.get('dateISO'),
            type=doc.get('type') or 'Trial',
            max_players=doc.get('maxPlayers'),
            notes=doc.get('notes'),
        )


@dataclass
class ImportRowResult:
    """Outcome of importing one CSV row."""
    row_index: int  # line number in the CSV (header is line 1)
    raw: Dict[str, Any] = field(default_factory=dict)
    ok: bool = False
    error: Optional[str] = None
    created_id: Optional[str] = None
