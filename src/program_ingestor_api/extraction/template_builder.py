"""
Template Builder & Confidence Scorer

Assembles the StructuredTemplate handed to the template store and scores
how much a caller should trust it.

Confidence is additive: base 0.5, up to +0.3 for days (0.1 each), up to
+0.2 for exercises (0.02 each), and +0.1 each for sets/reps keywords,
rest/seconds keywords and "Day N" markers in the raw text, capped at 1.0.
"""

import logging
import re
from typing import List, Optional

from .models import (
    ConfidenceSignals,
    ProgramMetadata,
    StructuredTemplate,
    TemplateDay,
    TemplateExercise,
    WorkoutDay,
)
from .vocabulary import DEFAULT_EQUIPMENT, EQUIPMENT_KEYWORDS
from ..utils import program_name_from_filename, title_case

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5
PER_DAY = 0.1
MAX_DAYS_BONUS = 0.3
PER_EXERCISE = 0.02
MAX_EXERCISES_BONUS = 0.2
KEYWORD_BONUS = 0.1

MANUAL_DAY_NAME = "Manual Entry Required"
MANUAL_DAY_NOTE = "Document processing failed. Please add your exercises manually."

_DAY_NUMBER = re.compile(r"day\s*\d+", re.IGNORECASE)


def total_exercises(days: List[WorkoutDay]) -> int:
    return sum(len(day.exercises) for day in days)


def infer_equipment(days: List[WorkoutDay]) -> List[str]:
    """Equipment implied by exercise names, or the generic tag"""
    names = [exercise.name for day in days for exercise in day.exercises]

    equipment = [
        label
        for label, pattern in EQUIPMENT_KEYWORDS.items()
        if any(pattern.search(name) for name in names)
    ]

    return equipment or [DEFAULT_EQUIPMENT]


def confidence_signals(days: List[WorkoutDay], raw_text: str, ceiling: Optional[float] = None) -> ConfidenceSignals:
    """Individual contributions to the confidence score"""
    lowered = (raw_text or "").lower()

    return ConfidenceSignals(
        base=BASE_CONFIDENCE,
        days=min(len(days) * PER_DAY, MAX_DAYS_BONUS),
        exercises=min(total_exercises(days) * PER_EXERCISE, MAX_EXERCISES_BONUS),
        sets_reps=KEYWORD_BONUS if "sets" in lowered and "reps" in lowered else 0.0,
        rest=KEYWORD_BONUS if "rest" in lowered or "seconds" in lowered else 0.0,
        day_numbers=KEYWORD_BONUS if _DAY_NUMBER.search(lowered) else 0.0,
        ceiling=ceiling,
    )


def score(days: List[WorkoutDay], raw_text: str) -> float:
    """Confidence in [0, 1] for an extracted schedule"""
    return confidence_signals(days, raw_text).total


def build(filename: str, days: List[WorkoutDay], metadata: Optional[ProgramMetadata] = None) -> StructuredTemplate:
    """
    Build the StructuredTemplate for a list of non-empty days.

    Args:
        filename: Source filename, used for naming and the description
        days: Extracted workout days
        metadata: Program metadata; derived from the filename if omitted

    Returns:
        StructuredTemplate with fresh identifiers
    """
    metadata = metadata or ProgramMetadata(name=title_case(program_name_from_filename(filename)))

    schedule = [
        TemplateDay(
            day=day.name,
            name=day.name,
            exercises=[
                TemplateExercise(
                    name=exercise.name,
                    sets=exercise.sets,
                    reps=exercise.reps,
                    rest_seconds=exercise.rest_seconds,
                    notes=exercise.notes,
                )
                for exercise in day.exercises
            ],
            notes=day.notes or "",
        )
        for day in days
    ]

    template = StructuredTemplate(
        name=metadata.name,
        description=f"Imported from {filename} - {len(days)} day program",
        difficulty=metadata.difficulty,
        goals=metadata.goals,
        equipment=infer_equipment(days),
        days_per_week=len(days),
        duration_weeks=metadata.duration_weeks,
        schedule=schedule,
    )

    logger.info(f"Built template {template.id} ({len(days)} days, {total_exercises(days)} exercises)")
    return template


def build_manual_template(filename: str) -> StructuredTemplate:
    """Placeholder template with one empty day asking for manual entry"""
    program_name = program_name_from_filename(filename)

    return StructuredTemplate(
        name=f"{program_name} ({MANUAL_DAY_NAME})",
        description="Document processing failed - please add exercises manually",
        goals=["General Fitness"],
        equipment=[DEFAULT_EQUIPMENT],
        days_per_week=1,
        schedule=[
            TemplateDay(
                day="Day 1",
                name=MANUAL_DAY_NAME,
                exercises=[],
                notes=MANUAL_DAY_NOTE,
            )
        ],
    )
