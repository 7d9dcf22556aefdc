"""Unit tests for standings computation."""

import itertools
import json

import pytest

from cricleague.models import Match, Team
from cricleague.standings import (
    COMPUTED,
    DIRECT,
    compute_standings,
    direct_standings,
    is_played,
    save_standings_json,
    standings_from_documents,
    standings_mode,
)


def match(team_a='t1', team_b='t2', match_id='m1', **kwargs):
    return Match(id=match_id, team_a=team_a, team_b=team_b, **kwargs)


def by_id(rows):
    return {row.team_id: row for row in rows}


class TestModeSelection:
    """Tests for choosing between team totals and match replay."""

    def test_team_points_use_direct_mode(self):
        """Test that a numeric points field on any team selects direct mode."""
        teams = [Team(id='t1', name='A', points=5), Team(id='t2', name='B')]
        matches = [match(winner='t2', played=True)]
        assert standings_mode(teams, matches) == DIRECT

    def test_direct_mode_ignores_matches(self):
        """Test that matches are not consulted when teams carry points."""
        teams = [Team(id='t1', name='A', points=5)]
        matches = [
            match(winner='t2', played=True),
            match(match_id='m2', team_a='t3', team_b='t1', score_a=200, score_b=100),
        ]
        rows = compute_standings(teams, matches)

        assert len(rows) == 1
        row = rows[0]
        assert row.team_id == 't1'
        assert row.name == 'A'
        assert row.points == 5
        assert (row.played, row.won, row.lost, row.drawn) == (0, 0, 0, 0)
        assert row.nrr is None

    def test_no_matches_gives_zeroed_table(self):
        """Test that an empty season produces all-zero standings."""
        teams = [Team(id='t1', name='A'), Team(id='t2', name='B')]
        rows = compute_standings(teams, [])

        assert standings_mode(teams, []) == DIRECT
        assert {r.team_id for r in rows} == {'t1', 't2'}
        assert all(r.points == 0 and r.played == 0 for r in rows)

    def test_no_points_with_matches_uses_computed_mode(self):
        """Test that teams without points fall back to match replay."""
        teams = [Team(id='t1'), Team(id='t2')]
        assert standings_mode(teams, [match()]) == COMPUTED

    def test_no_teams_with_matches_uses_computed_mode(self):
        """Test that matches alone are enough to build a table."""
        assert standings_mode([], [match()]) == COMPUTED

    def test_empty_everything(self):
        """Test that no teams and no matches is an empty table, not an error."""
        assert compute_standings([], []) == []

    def test_direct_mode_carries_stored_totals(self):
        """Test that stored totals and NRR pass straight through."""
        teams = [
            Team(id='t1', name='A', played=4, won=3, lost=1, drawn=0, points=9, nrr=0.85),
            Team(id='t2', name='', points=6, won=2),
        ]
        rows = direct_standings(teams)

        assert rows[0].team_id == 't1'
        assert rows[0].nrr == 0.85
        assert rows[0].played == 4
        assert rows[1].name == 'Team t2'
        assert rows[1].played == 0

    def test_repeated_team_listed_once(self):
        """Test that a team id given twice yields a single row (first record wins)."""
        teams = [
            Team(id='t1', name='A', points=5),
            Team(id='t2', name='B', points=2),
            Team(id='t1', name='A (copy)', points=9),
        ]
        rows = compute_standings(teams, [])

        assert [r.team_id for r in rows] == ['t1', 't2']
        assert rows[0].name == 'A'
        assert rows[0].points == 5

    def test_repeated_team_listed_once_in_computed_mode(self):
        """Test duplicate team records don't duplicate rows when replaying matches."""
        teams = [Team(id='t1', name='A'), Team(id='t1', name='A (copy)'), Team(id='t2', name='B')]
        rows = compute_standings(teams, [match(winner='t1', played=True)])

        assert [r.team_id for r in rows] == ['t1', 't2']
        assert rows[0].name == 'A'
        assert rows[0].points == 3


class TestComputedMode:
    """Tests for replaying match records into standings."""

    def test_explicit_winner(self):
        """Test that winnerId awards 3 points to the winner and a loss to the other."""
        teams = [Team(id='t1'), Team(id='t2')]
        rows = by_id(compute_standings(teams, [match(winner='t1', played=True)]))

        assert (rows['t1'].played, rows['t1'].won, rows['t1'].points) == (1, 1, 3)
        assert (rows['t2'].played, rows['t2'].lost, rows['t2'].points) == (1, 1, 0)

    def test_score_based_draw(self):
        """Test that equal scores give both teams a draw and 1 point."""
        teams = [Team(id='t1'), Team(id='t2')]
        matches = [match(score_a=150, score_b=150, reported_scores=2)]
        rows = by_id(compute_standings(teams, matches))

        for team_id in ('t1', 't2'):
            assert rows[team_id].played == 1
            assert rows[team_id].drawn == 1
            assert rows[team_id].points == 1

    def test_higher_score_wins(self):
        """Test that the higher score wins when no winner is named."""
        matches = [match(score_a=140, score_b=171, reported_scores=2)]
        rows = by_id(compute_standings([], matches))

        assert rows['t2'].won == 1
        assert rows['t2'].points == 3
        assert rows['t1'].lost == 1

    def test_winner_takes_precedence_over_scores(self):
        """Test that an explicit winner overrides the score comparison."""
        matches = [match(winner='t1', score_a=100, score_b=180, reported_scores=2)]
        rows = by_id(compute_standings([], matches))

        assert rows['t1'].won == 1
        assert rows['t2'].lost == 1

    def test_draw_flag(self):
        """Test that the draw flag is used when there is no winner or scores."""
        rows = by_id(compute_standings([], [match(is_draw=True)]))

        assert rows['t1'].drawn == 1
        assert rows['t2'].points == 1

    def test_played_without_result(self):
        """Test that a played match with no resolvable result still counts as played."""
        rows = by_id(compute_standings([], [match(played=True)]))

        for team_id in ('t1', 't2'):
            assert rows[team_id].played == 1
            assert rows[team_id].points == 0
            assert rows[team_id].won == rows[team_id].lost == rows[team_id].drawn == 0

    def test_unplayed_match_is_skipped(self):
        """Test that played=False contributes nothing."""
        rows = by_id(compute_standings([], [match(winner='t1', played=False)]))

        assert rows['t1'].played == 0
        assert rows['t1'].points == 0

    def test_unknown_winner_falls_through_to_scores(self):
        """Test that a winner naming neither side is ignored."""
        matches = [match(winner='t9', score_a=200, score_b=100, reported_scores=2)]
        rows = by_id(compute_standings([], matches))

        assert 't9' not in rows
        assert rows['t1'].won == 1

    def test_repeat_fixtures_accumulate(self):
        """Test that conflicting results between the same pair both count."""
        matches = [
            match(match_id='m1', winner='t1', played=True),
            match(match_id='m2', winner='t2', played=True),
        ]
        rows = by_id(compute_standings([], matches))

        for team_id in ('t1', 't2'):
            assert rows[team_id].played == 2
            assert rows[team_id].won == 1
            assert rows[team_id].lost == 1
            assert rows[team_id].points == 3

    def test_names_from_team_collection(self):
        """Test that display names come from teams, falling back to the raw id."""
        teams = [Team(id='t1', name='Mumbai Strikers')]
        rows = by_id(compute_standings(teams, [match(winner='t1')]))

        assert rows['t1'].name == 'Mumbai Strikers'
        assert rows['t2'].name == 't2'

    def test_registered_team_without_matches_is_listed(self):
        """Test that teams with no fixtures yet appear with zero totals."""
        teams = [Team(id='t1'), Team(id='t2'), Team(id='t3', name='Late Entry')]
        rows = by_id(compute_standings(teams, [match(winner='t1')]))

        assert rows['t3'].played == 0
        assert rows['t3'].name == 'Late Entry'

    def test_no_nrr_in_computed_mode(self):
        """Test that computed rows have no net run rate."""
        rows = compute_standings([], [match(winner='t1')])
        assert all(r.nrr is None for r in rows)


class TestPlayedResolution:
    """Tests for the played flag fallback."""

    @pytest.mark.parametrize(
        'played,reported,expected',
        [
            (True, 0, True),
            (False, 2, False),
            (None, 2, True),
            (None, 1, False),
            (None, 0, True),
        ],
    )
    def test_fallback_order(self, played, reported, expected):
        """Test flag first, then reported scores, then default to played."""
        assert is_played(match(played=played, reported_scores=reported)) is expected


class TestOrdering:
    """Tests for standings sort order."""

    def test_points_then_wins(self):
        """Test that equal points are ordered by more wins first."""
        teams = [
            Team(id='draws', name='Draws', points=6, won=1, drawn=3),
            Team(id='wins', name='Wins', points=6, won=2),
            Team(id='top', name='Top', points=9, won=3),
        ]
        rows = compute_standings(teams, [])
        assert [r.team_id for r in rows] == ['top', 'wins', 'draws']

    def test_wins_then_losses(self):
        """Test that equal points and wins are ordered by fewer losses."""
        teams = [
            Team(id='more_losses', name='A', points=3, won=1, lost=2),
            Team(id='fewer_losses', name='B', points=3, won=1, lost=0),
        ]
        rows = compute_standings(teams, [])
        assert [r.team_id for r in rows] == ['fewer_losses', 'more_losses']

    def test_computed_ordering(self):
        """Test ordering of a small replayed season."""
        matches = [
            match(match_id='m1', team_a='a', team_b='b', winner='a'),
            match(match_id='m2', team_a='a', team_b='c', winner='a'),
            match(match_id='m3', team_a='b', team_b='c', is_draw=True),
        ]
        rows = compute_standings([], matches)
        assert [r.team_id for r in rows] == ['a', 'b', 'c']
        assert [r.points for r in rows] == [6, 1, 1]


class TestPurity:
    """Tests that standings depend only on the data."""

    @pytest.fixture
    def season(self):
        teams = [Team(id=f't{i}', name=f'Team {i}') for i in range(1, 5)]
        matches = [
            match(match_id='m1', team_a='t1', team_b='t2', winner='t1'),
            match(match_id='m2', team_a='t3', team_b='t4', score_a=120, score_b=120, reported_scores=2),
            match(match_id='m3', team_a='t1', team_b='t3', score_a=90, score_b=150, reported_scores=2),
            match(match_id='m4', team_a='t2', team_b='t4', is_draw=True),
            match(match_id='m5', team_a='t2', team_b='t3', played=True),
            match(match_id='m6', team_a='t4', team_b='t1', score_a=80, reported_scores=1),
        ]
        return teams, matches

    def test_idempotent(self, season):
        """Test that identical inputs give identical output."""
        teams, matches = season
        assert compute_standings(teams, matches) == compute_standings(teams, matches)

    def test_order_independent(self, season):
        """Test that permuting matches never changes the table."""
        teams, matches = season
        expected = compute_standings(teams, matches)
        for perm in itertools.permutations(matches):
            assert compute_standings(teams, list(perm)) == expected

    def test_inputs_not_mutated(self, season):
        """Test that computing standings leaves the inputs untouched."""
        teams, matches = season
        before = (list(teams), list(matches))
        compute_standings(teams, matches)
        assert (teams, matches) == before


class TestFromDocuments:
    """Tests for computing standings straight from stored documents."""

    def test_malformed_match_is_skipped(self):
        """Test that a match without team references changes nothing."""
        team_docs = {'t1': {'name': 'A'}, 't2': {'name': 'B'}}
        good = {'m1': {'teamAId': 't1', 'teamBId': 't2', 'winnerId': 't1', 'played': True}}
        bad = {'m2': {'scoreA': 100, 'scoreB': 90, 'winnerId': 'ghost'}}

        _, clean_rows = standings_from_documents(team_docs, good)
        mode, rows = standings_from_documents(team_docs, {**good, **bad})

        assert mode == COMPUTED
        assert rows == clean_rows
        assert 'ghost' not in {r.team_id for r in rows}

    def test_legacy_field_names(self):
        """Test that older team reference spellings are understood."""
        match_docs = {
            'm1': {'team1': 'x', 'team2': 'y', 'scoreA': 10, 'scoreB': 5},
            'm2': {'teamA': 'y', 'team2Id': 'x', 'draw': True},
        }
        _, rows = standings_from_documents({}, match_docs)
        rows = by_id(rows)

        assert rows['x'].won == 1
        assert rows['x'].drawn == 1
        assert rows['x'].points == 4

    def test_string_points_do_not_select_direct_mode(self):
        """Test that only numeric points count as stored totals."""
        team_docs = {'t1': {'name': 'A', 'points': '5'}}
        match_docs = {'m1': {'teamAId': 't1', 'teamBId': 't2', 'winnerId': 't2'}}
        mode, _ = standings_from_documents(team_docs, match_docs)
        assert mode == COMPUTED


class TestSaveStandings:
    """Tests for writing standings to disk."""

    def test_save_standings_json(self, tmp_path):
        """Test the standings file layout."""
        rows = compute_standings([], [match(winner='t2')])
        path = tmp_path / 'out' / 'standings.json'

        saved = save_standings_json(path, rows, COMPUTED)

        with open(path) as f:
            data = json.load(f)
        assert data['mode'] == COMPUTED
        assert 'updated_at' in data
        assert data['standings'] == saved
        assert [s['rank'] for s in saved] == [1, 2]
        assert saved[0]['teamId'] == 't2'
        assert saved[0]['points'] == 3
