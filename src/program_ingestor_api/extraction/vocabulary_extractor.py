"""
Fallback Vocabulary Extractor

Last-resort extraction used only when no line grammar matched anywhere in
the document. Tier 1 scans for known exercise names; tier 2 reports any
remaining standalone words as unverified candidates.
"""

import logging
import re
from typing import Dict, List, Pattern

from .models import ExerciseEntry
from .text_cleaner import is_garbage
from .vocabulary import EXERCISE_DICTIONARY, STOPLIST
from ..utils import title_case

logger = logging.getLogger(__name__)

MAX_DICTIONARY_EXERCISES = 15
MAX_TOKEN_EXERCISES = 10
MIN_TOKEN_LENGTH = 4
MAX_TOKEN_LENGTH = 20

DEFAULT_SETS = 3
DEFAULT_REPS = "8-10"
DEFAULT_REST_SECONDS = 90

DICTIONARY_NOTE = "Detected from document content"
TOKEN_NOTE = "Potential exercise (please verify)"

_ALPHA_TOKEN = re.compile(r"^[A-Za-z]+$")


def _dictionary_pattern(name: str) -> Pattern[str]:
    # "pull up" also matches "Pull-ups" and "pullup"
    body = r"[\s\-]?".join(re.escape(word) for word in name.split())
    return re.compile(rf"\b{body}(?:e?s)?\b", re.IGNORECASE)


DICTIONARY_PATTERNS: Dict[str, Pattern[str]] = {
    name: _dictionary_pattern(name) for name in EXERCISE_DICTIONARY
}


def _default_entry(name: str, note: str, detected_by: str) -> ExerciseEntry:
    return ExerciseEntry(
        name=title_case(name),
        sets=DEFAULT_SETS,
        reps=DEFAULT_REPS,
        rest_seconds=DEFAULT_REST_SECONDS,
        notes=note,
        detected_by=detected_by,
    )


def scan_dictionary(text: str) -> List[ExerciseEntry]:
    """Tier 1: known exercise names found in the text, deduplicated and capped"""
    found: List[ExerciseEntry] = []
    seen = set()

    for name, pattern in DICTIONARY_PATTERNS.items():
        if name in seen or not pattern.search(text):
            continue
        seen.add(name)
        found.append(_default_entry(name, DICTIONARY_NOTE, "dictionary"))
        if len(found) >= MAX_DICTIONARY_EXERCISES:
            break

    return found


def scan_tokens(text: str) -> List[ExerciseEntry]:
    """Tier 2: standalone alphabetic words that are not filler"""
    found: List[ExerciseEntry] = []
    seen = set()

    for word in text.split():
        lowered = word.lower()
        if not (MIN_TOKEN_LENGTH <= len(word) <= MAX_TOKEN_LENGTH):
            continue
        if not _ALPHA_TOKEN.match(word) or lowered in STOPLIST or lowered in seen:
            continue
        seen.add(lowered)
        found.append(_default_entry(word, TOKEN_NOTE, "token"))
        if len(found) >= MAX_TOKEN_EXERCISES:
            break

    return found


def extract_by_vocabulary(text: str) -> List[ExerciseEntry]:
    """
    Extract exercises from text no line grammar could parse.

    Args:
        text: Cleaned document text

    Returns:
        Dictionary hits if any, otherwise unverified word candidates.
        Empty when the text is garbage.
    """
    if is_garbage(text):
        logger.info("Text appears to be corrupted or binary, skipping vocabulary scan")
        return []

    exercises = scan_dictionary(text)
    if exercises:
        logger.info(f"Found {len(exercises)} exercises from common names")
        return exercises

    exercises = scan_tokens(text)
    if exercises:
        logger.warning(f"Using potential exercise words: {', '.join(e.name for e in exercises)}")
    return exercises
