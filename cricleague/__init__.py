from .models import Team, Match, StandingsRow, Player, TrialSession, ImportRowResult
from .normalize import normalize_team, normalize_match, normalize_teams, normalize_matches
from .standings import (
    compute_standings,
    direct_standings,
    standings_mode,
    standings_from_documents,
    save_standings_json,
)
from .store import DocumentStore, DocumentNotFoundError
from .validators import (
    validate_aadhaar,
    verhoeff_checksum_valid,
    validate_team_registration,
)
from .registration import register_team, list_team_players, RegistrationError
from .player_import import import_errors_csv, import_players, import_players_from_csv, template_csv
from .trials import create_session, list_sessions, signup, SessionError
from .checkin import check_in, checked_in_players, parse_qr_payload, qr_payload
from .export import dashboard_counts, to_csv, standings_to_csv, write_pdf, write_xlsx
from .badges import qr_png, write_badges_zip

__all__ = [
    # Models
    'Team',
    'Match',
    'StandingsRow',
    'Player',
    'TrialSession',
    'ImportRowResult',
    # Ingestion
    'normalize_team',
    'normalize_match',
    'normalize_teams',
    'normalize_matches',
    # Standings
    'compute_standings',
    'direct_standings',
    'standings_mode',
    'standings_from_documents',
    'save_standings_json',
    # Storage
    'DocumentStore',
    'DocumentNotFoundError',
    # Validation
    'validate_aadhaar',
    'verhoeff_checksum_valid',
    'validate_team_registration',
    # Registration and import
    'register_team',
    'list_team_players',
    'RegistrationError',
    'import_players',
    'import_players_from_csv',
    'template_csv',
    'import_errors_csv',
    # Trials and check-in
    'create_session',
    'list_sessions',
    'signup',
    'SessionError',
    'check_in',
    'checked_in_players',
    'parse_qr_payload',
    'qr_payload',
    # Export
    'dashboard_counts',
    'to_csv',
    'standings_to_csv',
    'write_xlsx',
    'write_pdf',
    # Badges
    'qr_png',
    'write_badges_zip',
]
