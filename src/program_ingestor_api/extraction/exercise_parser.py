"""
Exercise Line Parser

Extracts name/sets/reps/rest from a single line by trying an ordered
family of line grammars:

- "Name - N sets x R reps - Rest T"
- "Name NxR T[s]" (compact notation)
- "Name | N | R | T" (table row)
- "k. Name N sets of R" (numbered list)

A captured name must pass is_valid_exercise_name() before a match is
accepted, since upstream text can still carry noise that would otherwise
parse as an exercise.
"""

import logging
import re
from typing import List, Optional, Pattern

from .models import ExerciseEntry
from .strategies import Strategy, first_success
from .text_cleaner import LONG_TOKEN_LENGTH
from ..utils import to_int

logger = logging.getLogger(__name__)

DEFAULT_REST_SECONDS = 90
MIN_LINE_LENGTH = 5
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 50

# Bare rest values below this are minutes
REST_MINUTES_THRESHOLD = 10

_REPS = r"(?P<reps>\d+(?:\s*[-–]\s*\d+)?)"
_UNIT = r"(?:\s*(?P<unit>seconds?|secs?|minutes?|mins?|s|m)\b)?"
_REST_RANGE = r"(?:\s*[-–]\s*\d+)?"

# Name filter: metadata shapes that are never exercises
_METADATA_NAME = re.compile(
    r"https?://|www\.|@|\.com\b|\.org\b|\bendstream\b|\bendobj\b|\bstream\b|\bobj\b|\bxref\b",
    re.IGNORECASE,
)
_NO_LETTERS = re.compile(r"^[^a-zA-Z]*$")
_SYMBOL_RUN = re.compile(r"[^a-zA-Z\s]{3,}")
_CAPS_WITH_DIGITS = re.compile(r"^(?=.*\d)[A-Z0-9\s]+$")
_LETTER_PAIR = re.compile(r"[a-zA-Z]{2,}")

# Leading list markers and day headers stripped from captured names
_NAME_PREFIX = re.compile(
    r"^(?:(?:day|week)\s*\d+\s*[:\-–]?\s*|\d+\s*[.)]\s*|[-•*→>]+\s*)+",
    re.IGNORECASE,
)


def is_valid_exercise_name(name: str) -> bool:
    """Check if a string looks like a valid exercise name"""
    if not name or len(name) < MIN_NAME_LENGTH or len(name) > MAX_NAME_LENGTH:
        return False

    # Reject URLs, emails and document-object keywords
    if _METADATA_NAME.search(name):
        return False

    # Reject if it's only numbers or special characters
    if _NO_LETTERS.match(name):
        return False

    # Reject runs of three or more non-letters
    if _SYMBOL_RUN.search(name):
        return False

    # All caps with digits beyond 10 chars is metadata
    if _CAPS_WITH_DIGITS.match(name) and len(name) > 10:
        return False

    if not _LETTER_PAIR.search(name):
        return False

    # Encoded data tokens
    if any(len(token) >= LONG_TOKEN_LENGTH for token in name.split()):
        return False

    return True


def clean_exercise_name(name: str) -> str:
    """Strip list markers, day headers and trailing separators from a name"""
    name = _NAME_PREFIX.sub("", name.strip())
    return " ".join(name.strip(" :-–|").split())


def normalize_reps(reps: str) -> str:
    """'8 – 10' -> '8-10'"""
    return re.sub(r"\s*[-–]\s*", "-", reps.strip())


def parse_rest_time(value: Optional[str], unit: Optional[str] = None) -> int:
    """
    Parse rest to seconds.

    Explicit minute/second units are honored; bare values below 10 are
    minutes and larger ones seconds. Missing or unparseable values give 90.
    """
    if not value:
        return DEFAULT_REST_SECONDS

    # Ranges like "3-5" use the lower bound
    match = re.search(r"\d+", value)
    num = to_int(match.group(0)) if match else None
    if not num:
        return DEFAULT_REST_SECONDS

    unit = (unit or "").lower()
    if unit.startswith("m"):
        return num * 60
    if unit.startswith("s"):
        return num

    return num * 60 if num < REST_MINUTES_THRESHOLD else num


class LineGrammar(Strategy[str, ExerciseEntry]):
    """One regex line grammar; named groups name/sets/reps and optional rest/unit"""

    def __init__(self, name: str, pattern: Pattern[str]):
        self.name = name
        self.pattern = pattern

    def attempt(self, line: str) -> Optional[ExerciseEntry]:
        match = self.pattern.match(line)
        if not match:
            return None

        groups = match.groupdict()
        name = clean_exercise_name(groups["name"])
        if not is_valid_exercise_name(name):
            logger.debug(f"{self.name}: rejected name {name!r}")
            return None

        sets = to_int(groups["sets"])
        if not sets:
            return None

        return ExerciseEntry(
            name=name,
            sets=sets,
            reps=normalize_reps(groups["reps"]),
            rest_seconds=parse_rest_time(groups.get("rest"), groups.get("unit")),
        )


LINE_GRAMMARS: List[Strategy[str, ExerciseEntry]] = [
    # "Bench Press - 3 sets x 8-10 reps - Rest 90 seconds"
    LineGrammar("sets_reps_rest", re.compile(
        r"^(?P<name>.+?)\s*[-–—]\s*(?P<sets>\d+)\s*sets?\s*[xX×]\s*" + _REPS + r"\s*reps?\b"
        r"(?:\s*[-–—,]?\s*(?:rest\s*:?\s*)?(?P<rest>\d+)" + _REST_RANGE + _UNIT + r")?",
        re.IGNORECASE,
    )),
    # "Bench Press 3x8-10 90s"
    LineGrammar("compact", re.compile(
        r"^(?P<name>.+?)\s+(?P<sets>\d+)\s*[xX×]\s*" + _REPS +
        r"(?:\s+(?:rest\s*:?\s*)?(?P<rest>\d+)(?!\d)(?!\s*(?:kg|lbs?|%|reps?))" + _UNIT + r")?",
        re.IGNORECASE,
    )),
    # "Bench Press | 3 | 8-10 | 90s"
    LineGrammar("table_row", re.compile(
        r"^\|?\s*(?P<name>[^|]+?)\s*\|\s*(?P<sets>\d+)\s*\|\s*" + _REPS +
        r"\s*(?:\|\s*(?:(?P<rest>\d+)" + _REST_RANGE + _UNIT + r")?)?",
        re.IGNORECASE,
    )),
    # "1. Bench Press 3 sets of 8-10"
    LineGrammar("numbered_list", re.compile(
        r"^\d+\s*[.)]\s*(?P<name>.+?)\s+(?P<sets>\d+)\s*sets?\s*(?:of|[xX×])\s*" + _REPS,
        re.IGNORECASE,
    )),
]


def parse_line(line: str) -> Optional[ExerciseEntry]:
    """Parse one line into an ExerciseEntry using the first grammar that matches"""
    trimmed = (line or "").strip()
    if len(trimmed) < MIN_LINE_LENGTH:
        return None

    winner = first_success(LINE_GRAMMARS, trimmed)
    if winner is None:
        return None

    _grammar, exercise = winner
    return exercise


def parse_section(text: str) -> List[ExerciseEntry]:
    """Parse every line of a section, keeping the lines that yield exercises"""
    exercises = []
    for line in text.split("\n"):
        exercise = parse_line(line)
        if exercise:
            exercises.append(exercise)
    return exercises
