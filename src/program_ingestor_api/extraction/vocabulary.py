"""
Static keyword tables used by the extraction heuristics.

Kept apart from the control flow so they can be tested and extended on
their own.
"""

import re
from typing import Dict, FrozenSet, Pattern, Tuple

# Common exercise names for the dictionary fallback (lower-case, in priority order)
EXERCISE_DICTIONARY: Tuple[str, ...] = (
    "bench press",
    "squat",
    "deadlift",
    "overhead press",
    "pull up",
    "chin up",
    "barbell row",
    "dumbbell press",
    "incline press",
    "decline press",
    "shoulder press",
    "lat pulldown",
    "cable row",
    "bicep curl",
    "tricep extension",
    "leg press",
    "leg curl",
    "leg extension",
    "calf raise",
    "dips",
    "push up",
    "plank",
    "crunch",
    "lunge",
    "hip thrust",
)

# Equipment inferred from exercise names; first match order is output order
EQUIPMENT_KEYWORDS: Dict[str, Pattern[str]] = {
    "Barbell": re.compile(r"\b(?:barbell|deadlift|squat)", re.IGNORECASE),
    "Dumbbells": re.compile(r"\b(?:dumbbells?|db)\b", re.IGNORECASE),
    "Bench": re.compile(r"\b(?:bench|press)", re.IGNORECASE),
    "Pull-up Bar": re.compile(r"\b(?:pull|chin)", re.IGNORECASE),
    "Cable Machine": re.compile(r"\b(?:cables?|lat)\b", re.IGNORECASE),
}

DEFAULT_EQUIPMENT = "General Equipment"

# Filler words that are never reported as potential exercises
STOPLIST: FrozenSet[str] = frozenset({
    # Common English
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
    "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
    "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
    "did", "its", "let", "put", "say", "she", "too", "use", "this", "that",
    "with", "from", "your", "have", "will", "each", "then", "than", "into",
    "what", "when", "more", "some", "they", "them", "been", "were", "which",
    "there", "their", "about", "after", "before", "between", "should", "would",
    "could", "every", "other", "these", "those", "first", "last", "next",
    # Fitness filler
    "page", "workout", "workouts", "program", "training", "fitness", "exercise",
    "exercises", "muscle", "muscles", "weight", "weights", "body", "strength",
    "week", "weeks", "month", "year", "time", "minute", "minutes", "second",
    "seconds", "reps", "sets", "rest", "pounds", "kilos", "guide", "book",
    "chapter", "section", "note", "notes", "total", "phase", "plan", "daily",
})

# Ordered format groups: first match wins, "generic" otherwise
FORMAT_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("known_program", re.compile(r"stronglifts|starting\s*strength|\b5\s*x\s*5\b|\bworkout\s*[ab]\b", re.IGNORECASE)),
    ("push_pull_legs", re.compile(r"\bpush\b.*\bpull\b.*\blegs\b|\bppl\b", re.IGNORECASE | re.DOTALL)),
    ("upper_lower", re.compile(r"\bupper\b.*\blower\b|upper\s*body.*lower\s*body", re.IGNORECASE | re.DOTALL)),
    ("full_body", re.compile(r"full\s*body|total\s*body", re.IGNORECASE)),
    ("body_part", re.compile(r"\bchest\b.*\bback\b.*\blegs\b", re.IGNORECASE | re.DOTALL)),
    ("numbered_days", re.compile(r"\bday\s*\d+|\bweek\s*\d+", re.IGNORECASE)),
    ("named_weekdays", re.compile(r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", re.IGNORECASE)),
)

GENERIC_FORMAT = "generic"

WEEKDAYS: Tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)
