# Priority scoring
BASE_PRIORITY = 5
MIN_PRIORITY = 1
MAX_PRIORITY = 10
FAVORITE_TEAM_BONUS = 3
REGIONAL_BONUS = 2
PLAYOFF_BONUS = 2
STRONG_RECORD_PCT = 0.7
WEAK_RECORD_PCT = 0.3

# zip codes starting with 9 are treated as west coast
WEST_COAST_ZIP_PREFIX = "9"
WEST_COAST_TEAMS = frozenset({"LAL", "LAC", "GSW", "SAC"})
PLAYOFF_KEYWORDS = ("playoff", "finals")

# a broadcast including pre/post-game coverage
GAME_DURATION_MINUTES = 210
END_TIME_TBD = "End Time TBD"

PREFERENCES_STORAGE_KEY = "sports-scheduler-user-preferences"
