"""Leaderboard standings.

Standings come from one of two places:

- Direct mode: team documents carry season totals (at least one team has a
  numeric ``points``). The stored totals are used as-is.
- Computed mode: totals are replayed from the match records. Win = 3,
  draw = 1, loss = 0.

A season with no matches at all falls back to the direct-mode rows, which
gives an all-zero table instead of an empty one.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .constants import DRAW_POINTS, LOSS_POINTS, WIN_POINTS
from .models import Match, StandingsRow, Team
from .normalize import normalize_matches, normalize_teams
from .utils import utc_now_iso, write_json_atomic

DIRECT = 'direct'
COMPUTED = 'computed'


def standings_mode(teams: Sequence[Team], matches: Sequence[Match]) -> str:
    """Decide whether standings are read from team totals or computed from matches."""
    if teams and any(t.points is not None for t in teams):
        return DIRECT
    if not matches:
        return DIRECT
    return COMPUTED


def _display_name(team: Team) -> str:
    return team.name or f'Team {team.id}'


def _sort_key(row: StandingsRow) -> tuple:
    return (-row.points, -row.won, row.lost, row.name, row.team_id)


def _unique_teams(teams: Sequence[Team]) -> list[Team]:
    """One team per id; the first record for an id wins."""
    seen: dict[str, Team] = {}
    for team in teams:
        seen.setdefault(team.id, team)
    return list(seen.values())


def direct_standings(teams: Sequence[Team]) -> list[StandingsRow]:
    """Rows built straight from each team's stored totals (missing counts are 0)."""
    rows = [
        StandingsRow(
            team_id=team.id,
            name=_display_name(team),
            played=team.played or 0,
            won=team.won or 0,
            lost=team.lost or 0,
            drawn=team.drawn or 0,
            points=team.points or 0,
            nrr=team.nrr,
        )
        for team in _unique_teams(teams)
    ]
    return sorted(rows, key=_sort_key)


def is_played(match: Match) -> bool:
    """
    Whether a match counts towards the table.

    Resolution order:
        1. the explicit played flag, when one was stored
        2. both score fields reported -> played; only one -> not played
        3. no signal at all -> played
    """
    if match.played is not None:
        return match.played
    if match.reported_scores == 2:
        return True
    if match.reported_scores == 1:
        return False
    return True


def _record_win(winner: StandingsRow, loser: StandingsRow) -> None:
    winner.won += 1
    winner.points += WIN_POINTS
    loser.lost += 1
    loser.points += LOSS_POINTS


def _record_draw(a: StandingsRow, b: StandingsRow) -> None:
    for row in (a, b):
        row.drawn += 1
        row.points += DRAW_POINTS


def computed_standings(teams: Sequence[Team], matches: Sequence[Match]) -> list[StandingsRow]:
    """Replay every match into a fresh table. Match order does not matter."""
    names = {team.id: _display_name(team) for team in _unique_teams(teams)}
    table: dict[str, StandingsRow] = {
        team_id: StandingsRow(team_id=team_id, name=name) for team_id, name in names.items()
    }

    def row_for(team_id: str) -> StandingsRow:
        if team_id not in table:
            table[team_id] = StandingsRow(team_id=team_id, name=names.get(team_id, team_id))
        return table[team_id]

    for match in matches:
        if not match.team_a or not match.team_b:
            continue

        a = row_for(match.team_a)
        b = row_for(match.team_b)

        if not is_played(match):
            continue

        a.played += 1
        b.played += 1

        if match.winner in (match.team_a, match.team_b):
            if match.winner == match.team_a:
                _record_win(a, b)
            else:
                _record_win(b, a)
        elif match.score_a is not None and match.score_b is not None:
            if match.score_a > match.score_b:
                _record_win(a, b)
            elif match.score_b > match.score_a:
                _record_win(b, a)
            else:
                _record_draw(a, b)
        elif match.is_draw:
            _record_draw(a, b)
        # otherwise played with no result: no points either way

    return sorted(table.values(), key=_sort_key)


def compute_standings(teams: Sequence[Team], matches: Sequence[Match]) -> list[StandingsRow]:
    """
    Compute the leaderboard for a season.

    Args:
        teams: Canonical team records
        matches: Canonical match records

    Returns:
        Standings rows ordered by points (desc), wins (desc), losses (asc),
        one row per team
    """
    if standings_mode(teams, matches) == DIRECT:
        return direct_standings(teams)
    return computed_standings(teams, matches)


def standings_from_documents(
    team_docs: Mapping[str, Mapping[str, Any]],
    match_docs: Mapping[str, Mapping[str, Any]],
) -> tuple[str, list[StandingsRow]]:
    """Normalize raw team and match documents and compute standings.

    Returns:
        Tuple of (mode, rows)
    """
    teams = normalize_teams(team_docs)
    matches = normalize_matches(match_docs)
    return standings_mode(teams, matches), compute_standings(teams, matches)


def ranked_standings(rows: Sequence[StandingsRow]) -> list[dict]:
    """Rows serialized for JSON output, each with its 1-based rank."""
    standings = []
    for rank, row in enumerate(rows, 1):
        entry = row.to_dict()
        entry['rank'] = rank
        standings.append(entry)
    return standings


def save_standings_json(
    standings_path: str | Path,
    rows: Sequence[StandingsRow],
    mode: str,
) -> list[dict]:
    """Write standings to JSON with 1-based ranks.

    Returns:
        The serialized standings list
    """
    standings = ranked_standings(rows)
    write_json_atomic(
        standings_path,
        {
            'updated_at': utc_now_iso(),
            'mode': mode,
            'standings': standings,
        },
    )
    return standings
