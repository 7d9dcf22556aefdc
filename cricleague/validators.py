"""Validation functions for registrations, imports, sessions and Aadhaar numbers."""

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .config import get_max_player_age, get_min_player_age, get_zones

# Verhoeff tables: multiplication in the dihedral group D5, the position
# permutation, and the multiplicative inverse.
VERHOEFF_D = [
    [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 2, 3, 4, 0, 6, 7, 8, 9, 5],
    [2, 3, 4, 0, 1, 7, 8, 9, 5, 6],
    [3, 4, 0, 1, 2, 8, 9, 5, 6, 7],
    [4, 0, 1, 2, 3, 9, 5, 6, 7, 8],
    [5, 9, 8, 7, 6, 0, 4, 3, 2, 1],
    [6, 5, 9, 8, 7, 1, 0, 4, 3, 2],
    [7, 6, 5, 9, 8, 2, 1, 0, 4, 3],
    [8, 7, 6, 5, 9, 3, 2, 1, 0, 4],
    [9, 8, 7, 6, 5, 4, 3, 2, 1, 0],
]
VERHOEFF_P = [
    [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 5, 7, 6, 2, 8, 3, 0, 9, 4],
    [5, 8, 0, 3, 7, 9, 6, 1, 4, 2],
    [8, 9, 1, 6, 0, 4, 3, 5, 2, 7],
    [9, 4, 5, 3, 1, 2, 6, 8, 7, 0],
    [4, 2, 8, 6, 5, 7, 3, 9, 0, 1],
    [2, 7, 9, 3, 8, 0, 6, 4, 1, 5],
    [7, 0, 4, 6, 9, 1, 3, 2, 5, 8],
]
VERHOEFF_INV = [0, 4, 3, 2, 1, 5, 6, 7, 8, 9]

AADHAAR_PATTERN = re.compile(r'^\d{12}$')
EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')


def verhoeff_checksum_valid(number: str) -> bool:
    """
    Check a digit string (check digit last) with the Verhoeff algorithm.

    Args:
        number: String of decimal digits

    Returns:
        True if the checksum is valid, False otherwise (including non-digits)
    """
    if not number or not number.isdigit():
        return False

    c = 0
    for i, digit in enumerate(reversed(number)):
        c = VERHOEFF_D[c][VERHOEFF_P[i % 8][int(digit)]]
    return c == 0


def verhoeff_check_digit(number: str) -> int:
    """Compute the Verhoeff check digit to append to a digit string."""
    c = 0
    for i, digit in enumerate(reversed(number)):
        c = VERHOEFF_D[c][VERHOEFF_P[(i + 1) % 8][int(digit)]]
    return VERHOEFF_INV[c]


def is_valid_aadhaar_format(value: Optional[str]) -> bool:
    """Aadhaar number shape check: exactly 12 digits."""
    return bool(value) and AADHAAR_PATTERN.match(str(value)) is not None


def validate_aadhaar(value: Any) -> tuple[bool, str]:
    """
    Full Aadhaar verification: format, then Verhoeff checksum.

    Returns:
        Tuple of (is_valid, message)
    """
    if not isinstance(value, str) or not is_valid_aadhaar_format(value):
        return False, 'Aadhaar must be 12 digits'

    if not verhoeff_checksum_valid(value):
        return False, 'Invalid Aadhaar number'

    return True, 'Aadhaar verified successfully'


def parse_age(value: Any) -> Optional[float]:
    """Parse an age from form or CSV input. Returns None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        age = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(age):
        return None
    return age


def is_valid_age(
    value: Any,
    min_age: Optional[int] = None,
    max_age: Optional[int] = None,
) -> bool:
    """
    Check that an age is numeric and inside the league's age range.

    Bounds default to the league config (min_player_age / max_player_age).
    """
    age = parse_age(value)
    if age is None:
        return False

    if min_age is None:
        min_age = get_min_player_age()
    if max_age is None:
        max_age = get_max_player_age()

    if age < min_age:
        return False
    if max_age is not None and age > max_age:
        return False
    return True


def is_valid_email(value: Optional[str]) -> bool:
    """Loose email shape check (something@something.something)."""
    return bool(value) and EMAIL_PATTERN.search(value) is not None


def validate_player_entry(player: Mapping[str, Any], index: Optional[int] = None) -> list[str]:
    """
    Validate one player from a registration form.

    Checks:
    - Name present
    - Age numeric and within league range
    - Aadhaar, when given, is 12 digits

    Args:
        player: Dict with name, age, aadhaar (optional), phone, preferredRole
        index: 1-based position on the form, used to label messages

    Returns:
        List of validation error messages (empty if valid)
    """
    label = f'Player #{index}' if index is not None else 'Player'
    errors = []

    name = str(player.get('name') or '').strip()
    if not name:
        errors.append(f'{label} name required')

    if not is_valid_age(player.get('age')):
        errors.append(f'{label} valid age required')

    aadhaar = player.get('aadhaar')
    if aadhaar and not is_valid_aadhaar_format(aadhaar):
        errors.append(f'{label} Aadhaar must be 12 digits')

    return errors


def canonical_zone(zone: Optional[str], zones: Optional[Sequence[str]] = None) -> Optional[str]:
    """Configured spelling of a zone (matched case-insensitively), or None if unknown."""
    if zones is None:
        zones = get_zones()
    wanted = (zone or '').strip().lower()
    for name in zones:
        if name.lower() == wanted:
            return name
    return None


def validate_zone(zone: Optional[str], zones: Optional[Sequence[str]] = None) -> list[str]:
    """Error for a zone that isn't one of the league's zones (empty list if known)."""
    if zones is None:
        zones = get_zones()
    if canonical_zone(zone, zones) is None:
        return [f'Unknown zone {(zone or "").strip()!r}, expected one of: {", ".join(zones)}']
    return []


def validate_team_registration(
    team_name: Optional[str],
    contact_email: Optional[str],
    players: Sequence[Mapping[str, Any]],
    zone: Optional[str] = None,
) -> list[str]:
    """
    Validate a team registration form. The zone is optional, but when given
    it must be one of the configured league zones.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not team_name or not team_name.strip():
        errors.append('Team name required')

    if not is_valid_email((contact_email or '').strip()):
        errors.append('Valid contact email required')

    if zone and zone.strip():
        errors.extend(validate_zone(zone))

    for i, player in enumerate(players, 1):
        errors.extend(validate_player_entry(player, index=i))

    return errors


def validate_session(
    zone: Optional[str],
    ground: Optional[str],
    date_iso: Optional[str],
    max_players: Any = None,
) -> list[str]:
    """
    Validate a trial session before it is scheduled.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not zone or not zone.strip():
        errors.append('Please enter zone')
    else:
        errors.extend(validate_zone(zone))
    if not ground or not ground.strip():
        errors.append('Please enter ground name')
    if not date_iso:
        errors.append('Please set date/time')

    if max_players is not None:
        if isinstance(max_players, bool) or not isinstance(max_players, int) or max_players < 1:
            errors.append(f'Max players must be a positive whole number, got {max_players!r}')

    return errors
