"""Configuration constants for the Seefunk trainer."""

# Grading thresholds per answer language
PASS_THRESHOLD_DE = 0.55
PASS_THRESHOLD_EN = 0.58  # English recall is judged a bit more strictly

# Fuzzy matching only applies to tokens at least this long
FUZZY_MIN_TOKEN_LENGTH = 5
FUZZY_MAX_DISTANCE = 1

# Vocabulary drill
REVIEW_DELAY = 3               # Cards between a miss and its repeat
REVIEW_DELAY_REVIEW_FIRST = 2  # Same, when reviews take priority
DEFAULT_COMPLETION_TARGET = 20
TARGET_ALL = 'all'

DIRECTION_DE_EN = 'de2en'
DIRECTION_EN_DE = 'en2de'
DIRECTIONS = (DIRECTION_DE_EN, DIRECTION_EN_DE)

# Grading modes: dictation against the German text, translation into English
MODE_DE = 'de'
MODE_EN = 'en'
GRADE_MODES = (MODE_DE, MODE_EN)

# Chapters in the order of the exam catalogue
ALL_CHAPTERS = 'Alle'
CHAPTER_ORDER = [
    'Wetter',
    'Notfälle',
    'Navigation',
    'Schiffsmerkmale',
    'Wendungen',
    'Weitere nautische Begriffe',
    'Meldungsstruktur',
]

# Content files, relative to the data directory
TEXTS_FILE = 'seefunktexte.json'
VOCAB_FILE = 'vokabeln.json'
EXERCISES_FILE = 'uebungen.json'

# Messages shown to the learner
MSG_PASSED = 'BESTANDEN ✅'
MSG_FAILED = 'NICHT BESTANDEN ❌'
MSG_CORRECT = 'Richtig ✅'
MSG_WRONG = 'Falsch ❌ — richtig: {solution}'
MSG_EMPTY_DECK = 'Keine Vokabeln in diesem Kapitel gefunden.'
MSG_EMPTY_DECK_HINT = "Tipp: anderes Kapitel wählen oder 'Alle'."
MSG_SESSION_DONE = '✅ Kapitel abgeschlossen!'
MSG_NO_ERRORS = 'Keine Fehler 🎉'
