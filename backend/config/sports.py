# This module defines sport-related lookup data as module-level constants.
# The values mirror rows of the sports and leagues tables that the matcher and
# the email templates need to know about by id.

# Tennis events are matched by tour (league) instead of by team.
TENNIS_SPORT_ID = 20

# Competition name -> league id used by tennis alerts.
TENNIS_LEAGUE_CODES = {
    "ATP Tour": 1,
    "WTA Tour": 22,
}

# Shown when an event references a sport missing from the sports table.
DEFAULT_SPORT_NAME = "Sport"
DEFAULT_SPORT_EMOJI = "🏆"

# Broadcaster types rendered in the digest, in display order.
BROADCASTER_TYPES = ("tv", "streaming")

# French names for long-form dates ("mercredi 1 mai 2024").
# Indexed by date.weekday() and date.month - 1.
FRENCH_WEEKDAYS = [
    "lundi",
    "mardi",
    "mercredi",
    "jeudi",
    "vendredi",
    "samedi",
    "dimanche",
]

FRENCH_MONTHS = [
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
]
