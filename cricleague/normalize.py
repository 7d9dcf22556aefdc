"""Normalization of stored documents into canonical Team and Match records.

Team and match documents have been written by several versions of the
portal, so the same fact can live under different field names. Everything
that reads those documents goes through this module; the standings code
only ever sees the canonical dataclasses.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .constants import (
    DRAW_FIELDS,
    PLAYED_FIELD,
    SCORE_A_FIELD,
    SCORE_B_FIELD,
    TEAM_A_FIELDS,
    TEAM_B_FIELDS,
    WINNER_FIELD,
)
from .models import Match, Number, Team

logger = logging.getLogger('cricleague.normalize')


def as_number(value: Any) -> Optional[Number]:
    """Return value if it is a real number (bools excluded), else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def number_from_text(value: Any) -> Optional[Number]:
    """Like as_number, but numeric text such as ``'0.85'`` is parsed too.

    Non-finite values (``'nan'``, ``'inf'``) are treated as absent.
    """
    number = as_number(value)
    if number is not None or not isinstance(value, str):
        return number
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return int(parsed) if parsed.is_integer() and '.' not in value else parsed


def _first_present(doc: Mapping[str, Any], fields: Iterable[str]) -> Optional[str]:
    for name in fields:
        value = doc.get(name)
        if value:
            return str(value)
    return None


def normalize_team(team_id: str, doc: Mapping[str, Any]) -> Team:
    """
    Build a Team from a stored team document.

    ``points`` is kept only when stored as a real number, since that is
    what selects direct mode; a team without points is distinguishable
    from one with zero. The counts and NRR also accept numeric text such
    as ``'0.85'``.
    """
    zone = doc.get('zone')
    return Team(
        id=str(team_id),
        name=str(doc.get('name') or ''),
        zone=str(zone) if zone else None,
        played=number_from_text(doc.get('played')),
        won=number_from_text(doc.get('won')),
        lost=number_from_text(doc.get('lost')),
        drawn=number_from_text(doc.get('drawn')),
        points=as_number(doc.get('points')),
        nrr=number_from_text(doc.get('nrr')),
    )


def normalize_match(match_id: str, doc: Mapping[str, Any]) -> Optional[Match]:
    """
    Build a canonical Match from a stored match document.

    Args:
        match_id: Document id
        doc: Stored fields

    Returns:
        Match, or None when either side of the match can't be identified
    """
    team_a = _first_present(doc, TEAM_A_FIELDS)
    team_b = _first_present(doc, TEAM_B_FIELDS)
    if not team_a or not team_b:
        return None

    raw_played = doc.get(PLAYED_FIELD)
    winner = doc.get(WINNER_FIELD)
    reported = sum(1 for name in (SCORE_A_FIELD, SCORE_B_FIELD) if doc.get(name) is not None)

    return Match(
        id=str(match_id),
        team_a=team_a,
        team_b=team_b,
        score_a=as_number(doc.get(SCORE_A_FIELD)),
        score_b=as_number(doc.get(SCORE_B_FIELD)),
        winner=str(winner) if winner else None,
        is_draw=bool(doc.get(DRAW_FIELDS[0])) or doc.get(DRAW_FIELDS[1]) is True,
        played=None if raw_played is None else bool(raw_played),
        reported_scores=reported,
    )


def normalize_teams(docs: Mapping[str, Mapping[str, Any]]) -> list[Team]:
    """Normalize a {team_id: document} mapping."""
    return [normalize_team(team_id, doc or {}) for team_id, doc in docs.items()]


def normalize_matches(docs: Mapping[str, Mapping[str, Any]]) -> list[Match]:
    """Normalize a {match_id: document} mapping, dropping malformed matches."""
    matches = []
    skipped = 0
    for match_id, doc in docs.items():
        match = normalize_match(match_id, doc or {})
        if match is None:
            skipped += 1
            continue
        matches.append(match)

    if skipped:
        logger.debug(f'Skipped {skipped} match document(s) without both team references')

    return matches
