"""
Program metadata extraction.

Infers program-level details (name, difficulty, goals, duration) from the
document text and filename, and picks up per-day coaching notes. None of
this affects confidence or the extraction method.
"""

import logging
import re
from typing import List, Optional

from .exercise_parser import is_valid_exercise_name
from .models import ProgramMetadata
from ..utils import program_name_from_filename, title_case, to_int

logger = logging.getLogger(__name__)

MIN_DURATION_WEEKS = 1
MAX_DURATION_WEEKS = 52
DEFAULT_DURATION_WEEKS = 4

_TITLE = re.compile(r"^\s*(?:program|workout|plan)\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
_DURATION = re.compile(r"(\d+)\s*[\s_\-]?\s*(?:weeks?|wks?)\b", re.IGNORECASE)
_DAY_NOTE = re.compile(r"^\s*(?:note|tip|focus)\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)

_DIFFICULTY_KEYWORDS = (
    ("beginner", re.compile(r"\bbeginners?\b|\bnovice\b", re.IGNORECASE)),
    ("advanced", re.compile(r"\badvanced\b", re.IGNORECASE)),
    ("intermediate", re.compile(r"\bintermediate\b", re.IGNORECASE)),
)

_GOAL_KEYWORDS = (
    ("Strength", re.compile(r"\bstrength\b", re.IGNORECASE)),
    ("Muscle Gain", re.compile(r"\bmuscle\b|\bhypertrophy\b", re.IGNORECASE)),
    ("Weight Loss", re.compile(r"\bweight\s*loss\b|\bfat\s*loss\b", re.IGNORECASE)),
    ("Endurance", re.compile(r"\bendurance\b", re.IGNORECASE)),
)


def extract_program_name(text: str, filename: str) -> str:
    """Explicit 'Program:' title when it looks like a name, else the filename"""
    match = _TITLE.search(text or "")
    if match and is_valid_exercise_name(match.group(1)):
        return match.group(1)

    return title_case(program_name_from_filename(filename))


def detect_difficulty(text: str) -> str:
    for level, pattern in _DIFFICULTY_KEYWORDS:
        if pattern.search(text or ""):
            return level
    return "intermediate"


def detect_goals(text: str) -> List[str]:
    goals = [goal for goal, pattern in _GOAL_KEYWORDS if pattern.search(text or "")]
    return goals or ["General Fitness"]


def detect_duration_weeks(text: str, filename: str) -> int:
    """First in-range 'N weeks' / 'Nwk' in the text, then the filename"""
    for source in (text or "", filename or ""):
        for match in _DURATION.finditer(source):
            weeks = to_int(match.group(1))
            if weeks is not None and MIN_DURATION_WEEKS <= weeks <= MAX_DURATION_WEEKS:
                return weeks

    return DEFAULT_DURATION_WEEKS


def extract_day_notes(section_text: str) -> Optional[str]:
    """The first Note/Tip/Focus line of a day section"""
    match = _DAY_NOTE.search(section_text or "")
    return match.group(1) if match else None


def extract_program_metadata(text: str, filename: str) -> ProgramMetadata:
    """
    Infer program-level metadata.

    Args:
        text: Cleaned document text (or skeleton text)
        filename: Source filename

    Returns:
        ProgramMetadata with defaults for anything not detected
    """
    metadata = ProgramMetadata(
        name=extract_program_name(text, filename),
        difficulty=detect_difficulty(text),
        goals=detect_goals(text),
        duration_weeks=detect_duration_weeks(text, filename),
    )

    logger.debug(
        f"Program metadata: {metadata.name!r}, {metadata.difficulty}, "
        f"{metadata.duration_weeks} weeks, goals={metadata.goals}"
    )
    return metadata
