"""Unit tests for validation functions."""

import pytest

from cricleague.validators import (
    canonical_zone,
    is_valid_aadhaar_format,
    is_valid_age,
    is_valid_email,
    parse_age,
    validate_aadhaar,
    validate_player_entry,
    validate_session,
    validate_team_registration,
    validate_zone,
    verhoeff_check_digit,
    verhoeff_checksum_valid,
)


def make_aadhaar(prefix: str = '23412341234') -> str:
    """Build a checksum-valid 12 digit number from an 11 digit prefix."""
    return prefix + str(verhoeff_check_digit(prefix))


class TestVerhoeff:
    """Tests for the Verhoeff checksum."""

    def test_known_valid_number(self):
        """Test the textbook example: 236 has check digit 3."""
        assert verhoeff_check_digit('236') == 3
        assert verhoeff_checksum_valid('2363')

    def test_known_invalid_number(self):
        """Test that a wrong check digit fails."""
        assert not verhoeff_checksum_valid('2364')

    def test_single_digit_errors_detected(self):
        """Test that changing any one digit breaks the checksum."""
        number = make_aadhaar()
        assert verhoeff_checksum_valid(number)
        for pos in range(len(number)):
            for digit in '0123456789':
                if digit == number[pos]:
                    continue
                mutated = number[:pos] + digit + number[pos + 1:]
                assert not verhoeff_checksum_valid(mutated), mutated

    def test_adjacent_transposition_detected(self):
        """Test that swapping two adjacent different digits breaks the checksum."""
        number = make_aadhaar('98765432109')
        for pos in range(len(number) - 1):
            if number[pos] == number[pos + 1]:
                continue
            swapped = number[:pos] + number[pos + 1] + number[pos] + number[pos + 2:]
            assert not verhoeff_checksum_valid(swapped), swapped

    @pytest.mark.parametrize('value', ['', '12ab', '12 34'])
    def test_non_digits_rejected(self, value):
        """Test that non-digit input is never valid."""
        assert not verhoeff_checksum_valid(value)


class TestAadhaar:
    """Tests for Aadhaar verification."""

    def test_valid_aadhaar(self):
        """Test a 12 digit number with a valid checksum."""
        valid, message = validate_aadhaar(make_aadhaar())
        assert valid
        assert message == 'Aadhaar verified successfully'

    def test_bad_checksum(self):
        """Test a well-formed number with a wrong check digit."""
        number = make_aadhaar()
        wrong = number[:-1] + str((int(number[-1]) + 1) % 10)
        valid, message = validate_aadhaar(wrong)
        assert not valid
        assert message == 'Invalid Aadhaar number'

    @pytest.mark.parametrize('value', [None, '', '12345', '1234567890123', '12345678901a', 123456789012])
    def test_wrong_format(self, value):
        """Test that anything but a 12 digit string is rejected on format."""
        valid, message = validate_aadhaar(value)
        assert not valid
        assert message == 'Aadhaar must be 12 digits'

    def test_format_check_only(self):
        """Test the shape-only check used by forms and imports."""
        assert is_valid_aadhaar_format('123456789012')
        assert not is_valid_aadhaar_format('12345678901')
        assert not is_valid_aadhaar_format(None)


class TestAge:
    """Tests for age parsing and range checks."""

    @pytest.mark.parametrize(
        'value,expected',
        [('23', 23.0), (' 17 ', 17.0), (19, 19.0), ('', None), ('abc', None), (None, None), ('inf', None), (True, None)],
    )
    def test_parse_age(self, value, expected):
        """Test numeric parsing of form and CSV input."""
        assert parse_age(value) == expected

    def test_minimum_age_from_config(self):
        """Test the default lower bound (12) comes from league config."""
        assert is_valid_age('12')
        assert not is_valid_age('11')

    def test_explicit_bounds(self):
        """Test caller-supplied age range."""
        assert is_valid_age(16, min_age=15, max_age=19)
        assert not is_valid_age(20, min_age=15, max_age=19)
        assert not is_valid_age(14, min_age=15, max_age=19)

    def test_non_numeric_age(self):
        """Test that non-numeric ages are invalid."""
        assert not is_valid_age('twenty')
        assert not is_valid_age(None)


class TestEmail:
    """Tests for the contact email check."""

    @pytest.mark.parametrize(
        'value,expected',
        [('captain@club.in', True), ('a@b.co', True), ('no-at-sign.com', False), ('a@b', False), ('', False), (None, False)],
    )
    def test_is_valid_email(self, value, expected):
        assert is_valid_email(value) is expected


class TestRegistrationValidation:
    """Tests for team registration form validation."""

    def test_valid_registration(self):
        """Test that a complete form passes."""
        players = [
            {'name': 'Rahul Sharma', 'age': '23', 'aadhaar': '', 'phone': '9876543210'},
            {'name': 'Vikram Rao', 'age': '19', 'aadhaar': '123456789012'},
        ]
        assert validate_team_registration('East Tigers', 'captain@tigers.in', players) == []

    def test_missing_team_fields(self):
        """Test team name and contact email are required."""
        errors = validate_team_registration('  ', 'not-an-email', [])
        assert errors == ['Team name required', 'Valid contact email required']

    def test_player_errors_numbered(self):
        """Test player messages carry the form position."""
        players = [
            {'name': 'Rahul Sharma', 'age': '23'},
            {'name': '', 'age': '10', 'aadhaar': '1234'},
        ]
        errors = validate_team_registration('East Tigers', 'captain@tigers.in', players)
        assert errors == [
            'Player #2 name required',
            'Player #2 valid age required',
            'Player #2 Aadhaar must be 12 digits',
        ]

    def test_single_player_entry(self):
        """Test validating a player outside of a form."""
        assert validate_player_entry({'name': 'A', 'age': 30}) == []
        assert validate_player_entry({'name': 'A'}) == ['Player valid age required']


class TestSessionValidation:
    """Tests for trial session validation."""

    def test_valid_session(self):
        """Test a complete session passes."""
        assert validate_session('East', 'Eden Gardens', '2025-11-02T09:00:00+05:30', 40) == []

    def test_required_fields(self):
        """Test zone, ground and date are required."""
        errors = validate_session('', ' ', None)
        assert errors == ['Please enter zone', 'Please enter ground name', 'Please set date/time']

    @pytest.mark.parametrize('max_players', [0, -5, 2.5, '30', True])
    def test_bad_capacity(self, max_players):
        """Test capacity must be a positive whole number."""
        errors = validate_session('East', 'Eden Gardens', '2025-11-02T09:00', max_players)
        assert len(errors) == 1
        assert 'Max players' in errors[0]

    def test_unknown_zone(self):
        """Test the session zone must be a configured league zone."""
        errors = validate_session('Atlantis', 'Eden Gardens', '2025-11-02T09:00')
        assert errors == ["Unknown zone 'Atlantis', expected one of: North, South, East, West, Central"]


class TestZones:
    """Tests for zone lookup against the league config."""

    @pytest.mark.parametrize(
        'value,expected',
        [('East', 'East'), ('east', 'East'), ('  CENTRAL ', 'Central'), ('Atlantis', None), ('', None), (None, None)],
    )
    def test_canonical_zone(self, value, expected):
        assert canonical_zone(value) == expected

    def test_explicit_zone_list(self):
        """Test a caller-supplied zone list."""
        assert validate_zone('Lakes', zones=['Hills', 'Lakes']) == []
        assert validate_zone('East', zones=['Hills', 'Lakes']) == [
            "Unknown zone 'East', expected one of: Hills, Lakes"
        ]

    def test_registration_zone(self):
        """Test a registration zone is checked only when given."""
        assert validate_team_registration('East Tigers', 'captain@tigers.in', [], zone='') == []
        assert validate_team_registration('East Tigers', 'captain@tigers.in', [], zone='Atlantis') == [
            "Unknown zone 'Atlantis', expected one of: North, South, East, West, Central"
        ]
