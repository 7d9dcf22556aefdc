"""Constants and field mappings for the cricket league portal."""

# Points awarded per match result
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Stored match documents name the two sides in several ways (oldest last)
TEAM_A_FIELDS = ('teamAId', 'teamA', 'team1Id', 'team1')
TEAM_B_FIELDS = ('teamBId', 'teamB', 'team2Id', 'team2')

SCORE_A_FIELD = 'scoreA'
SCORE_B_FIELD = 'scoreB'
WINNER_FIELD = 'winnerId'
DRAW_FIELDS = ('isDraw', 'draw')
PLAYED_FIELD = 'played'

# Document store collections
COLLECTIONS = ('users', 'teams', 'players', 'matches', 'sessions', 'registrations')

# CSV import header -> canonical player field (keys compared lowercased)
IMPORT_HEADER_MAP = {
    'name': 'name',
    'age': 'age',
    'aadhaar': 'aadhaar',
    'phone': 'phone',
    'preferredrole': 'preferredRole',
    'preferred_role': 'preferredRole',
    'role': 'preferredRole',
    'teamname': 'teamName',
    'team_name': 'teamName',
    'team': 'teamName',
}

IMPORT_TEMPLATE_HEADERS = ['name', 'age', 'aadhaar', 'phone', 'preferredRole', 'teamName']
IMPORT_TEMPLATE_ROW = ['Rahul Sharma', '23', '123456789012', '9876543210', 'Batsman', 'East Zone']

# Columns of the import errors download
IMPORT_ERROR_FIELDS = ['rowIndex', 'error', *IMPORT_TEMPLATE_HEADERS]

STANDINGS_CSV_HEADERS = ['rank', 'teamId', 'team', 'played', 'won', 'drawn', 'lost', 'points', 'nrr']

DEFAULT_SESSION_TYPE = 'Trial'
