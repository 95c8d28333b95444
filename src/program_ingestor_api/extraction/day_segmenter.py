"""
Day Segmenter

Splits cleaned program text into per-day sections. Strategies run in
priority order and the first one yielding more than one section, every
section longer than MIN_SECTION_LENGTH, wins. A relaxed pass then accepts
explicit day numbers alone; failing that the whole text is one section.
"""

import logging
import re
from typing import Dict, List, Optional, Pattern

from .models import DaySection, StrategyTraceEntry
from .strategies import FunctionStrategy, Strategy, first_success
from .vocabulary import WEEKDAYS

logger = logging.getLogger(__name__)

STAGE = "day_segmentation"

# Every accepted section must be longer than this
MIN_SECTION_LENGTH = 100

# Sections this short are dropped before the acceptance check
MIN_SPLIT_LENGTH = 50

# Number of leading lines scanned for a day label
LABEL_SCAN_LINES = 5

_WEEKDAY_ALTERNATION = "|".join(WEEKDAYS)

DAY_NUMBER_PATTERN = re.compile(r"\bday\s*\d+", re.IGNORECASE)
WEEKDAY_PATTERN = re.compile(rf"\b(?:{_WEEKDAY_ALTERNATION})\b", re.IGNORECASE)
WORKOUT_TYPE_PATTERN = re.compile(
    r"^[ \t]*(?:workout\s*[ab]\b|upper\s*body\b|lower\s*body\b|(?:push|pull|legs)(?![-\w])(?!\s*-?\s*ups?\b))",
    re.IGNORECASE | re.MULTILINE,
)
WEEK_DAY_PATTERN = re.compile(r"\bweek\s*\d+\b[^\n]*?\bday\s*\d+", re.IGNORECASE)
QUANTITY_CUE_PATTERN = re.compile(r"\bsets?\b|\breps?\b|\d+\s*[xX×]\s*\d+", re.IGNORECASE)
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

# Day label patterns, tried per line
_DAY_LABEL = re.compile(r"\bday\s*(\d+)\s*[:\-–]?\s*(.*)$", re.IGNORECASE)
_WEEKDAY_LABEL = re.compile(rf"\b({_WEEKDAY_ALTERNATION})\b", re.IGNORECASE)
_WORKOUT_LETTER_LABEL = re.compile(r"\bworkout\s*([ab])\b", re.IGNORECASE)
_BODY_PART_LABEL = re.compile(r"\b(upper|lower|push|pull|legs|chest|back|arms|shoulders)\b", re.IGNORECASE)
_DESCRIPTION_NOISE = re.compile(r"\d+\s*(?:sets?|[xX×])", re.IGNORECASE)
MAX_DESCRIPTION_LENGTH = 40


def split_by_pattern(text: str, pattern: Pattern[str], min_length: int = MIN_SPLIT_LENGTH) -> Optional[List[str]]:
    """
    Split text at every marker match; the preamble before the first marker is dropped.

    Returns:
        Sections longer than min_length, or None if fewer than two markers exist
    """
    matches = list(pattern.finditer(text))
    if len(matches) < 2:
        return None

    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        section = text[match.start():end].strip()
        if len(section) > min_length:
            sections.append(section)

    return sections


def split_by_exercise_blocks(text: str) -> Optional[List[str]]:
    """Split on paragraph breaks, keeping paragraphs with sets/reps cues"""
    blocks = [
        block.strip()
        for block in PARAGRAPH_BREAK.split(text)
        if QUANTITY_CUE_PATTERN.search(block)
    ]
    return blocks if len(blocks) > 1 else None


SEGMENTATION_STRATEGIES: List[Strategy[str, List[str]]] = [
    FunctionStrategy("day_numbers", lambda text: split_by_pattern(text, DAY_NUMBER_PATTERN)),
    FunctionStrategy("weekdays", lambda text: split_by_pattern(text, WEEKDAY_PATTERN)),
    FunctionStrategy("workout_types", lambda text: split_by_pattern(text, WORKOUT_TYPE_PATTERN)),
    FunctionStrategy("week_day_markers", lambda text: split_by_pattern(text, WEEK_DAY_PATTERN)),
    FunctionStrategy("exercise_blocks", split_by_exercise_blocks),
]

# Marker patterns behind the strict split strategies
SPLIT_PATTERNS: Dict[str, Pattern[str]] = {
    "day_numbers": DAY_NUMBER_PATTERN,
    "weekdays": WEEKDAY_PATTERN,
    "workout_types": WORKOUT_TYPE_PATTERN,
    "week_day_markers": WEEK_DAY_PATTERN,
}


def _accept_sections(sections: List[str]) -> bool:
    return len(sections) > 1 and all(len(section) > MIN_SECTION_LENGTH for section in sections)


def _relaxed_day_numbers(text: str) -> Optional[List[str]]:
    sections = split_by_pattern(text, DAY_NUMBER_PATTERN, min_length=0)
    if not sections:
        return None

    # Each section needs content beyond its own "Day N" marker
    if all(DAY_NUMBER_PATTERN.sub("", section, count=1).strip(" :-–\n") for section in sections):
        return sections
    return None


RELAXED_STRATEGIES: List[Strategy[str, List[str]]] = [
    FunctionStrategy("day_numbers_relaxed", _relaxed_day_numbers),
]


def derive_label(section: str, index: int) -> str:
    """
    Label a section from its first few lines.

    Looks for "Day N[: description]", a weekday, "Workout A/B" or a body
    part keyword; falls back to "Day {index}".
    """
    for line in section.split("\n")[:LABEL_SCAN_LINES]:
        line = line.strip()

        day_match = _DAY_LABEL.search(line)
        if day_match:
            description = day_match.group(2).strip(" :-–")
            if description and len(description) <= MAX_DESCRIPTION_LENGTH and not _DESCRIPTION_NOISE.search(description):
                return f"Day {day_match.group(1)}: {description}"
            return f"Day {day_match.group(1)}"

        weekday_match = _WEEKDAY_LABEL.search(line)
        if weekday_match:
            return weekday_match.group(1).capitalize()

        letter_match = _WORKOUT_LETTER_LABEL.search(line)
        if letter_match:
            return f"Workout {letter_match.group(1).upper()}"

        part_match = _BODY_PART_LABEL.search(line)
        if part_match:
            return f"Day {index}: {part_match.group(1).capitalize()}"

    return f"Day {index}"


def _record_dropped_sections(
    text: str,
    strategy: str,
    kept: int,
    trace: Optional[List[StrategyTraceEntry]],
) -> None:
    """Log and trace markers whose sections were too short to keep"""
    pattern = SPLIT_PATTERNS.get(strategy)
    if pattern is None:
        return

    dropped = len(pattern.findall(text)) - kept
    if dropped <= 0:
        return

    detail = f"{dropped} section(s) of {MIN_SPLIT_LENGTH} chars or fewer"
    logger.warning(f"{strategy}: dropped {detail}")
    if trace is not None:
        trace.append(StrategyTraceEntry(stage=STAGE, strategy=strategy, outcome="dropped", detail=detail))


def segment(text: str, trace: Optional[List[StrategyTraceEntry]] = None) -> List[DaySection]:
    """
    Split cleaned text into DaySections.

    Args:
        text: Cleaned document text
        trace: Optional list receiving the strategy trace

    Returns:
        One DaySection per detected day, or a single section for the whole text
    """
    winner = first_success(SEGMENTATION_STRATEGIES, text, accept=_accept_sections, trace=trace, stage=STAGE)

    if winner is None:
        winner = first_success(RELAXED_STRATEGIES, text, trace=trace, stage=STAGE)

    if winner is not None:
        strategy, sections = winner
        logger.info(f"Split into {len(sections)} day sections using {strategy.name}")
        _record_dropped_sections(text, strategy.name, len(sections), trace)
    else:
        logger.info("No day structure found, treating document as a single workout")
        if trace is not None:
            trace.append(StrategyTraceEntry(stage=STAGE, strategy="single_section", outcome="accepted"))
        sections = [text.strip()]

    return [
        DaySection(index=i, label=derive_label(section, i), text=section)
        for i, section in enumerate(sections, start=1)
    ]
