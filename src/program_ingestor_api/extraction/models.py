"""
Extraction Models

Pydantic models shared by every stage of the program extraction pipeline:
the source document, intermediate text/sections, parsed exercises and the
final ProcessingResult handed back to callers.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# Minimum amount of text for an extraction tier to count as usable
MIN_TEXT_LENGTH = 50


class ExtractionMethod(str, Enum):
    """How the schedule in a ProcessingResult was obtained"""
    PATTERN = "pattern"    # Per-day line grammars matched the document
    FALLBACK = "fallback"  # Vocabulary scan or filename skeleton
    MANUAL = "manual"      # Nothing usable, user must enter the program


class TextSource(str, Enum):
    """Which extraction tier produced the text"""
    DOCUMENT = "document"
    RAW_BYTES = "raw_bytes"
    FILENAME = "filename"


class SourceDocument(BaseModel):
    """Uploaded document: filename plus raw bytes"""
    name: str = Field(default="document.pdf")
    content: bytes = b""

    model_config = ConfigDict(frozen=True)


class StrategyTraceEntry(BaseModel):
    """One step of an ordered strategy chain"""
    stage: str
    strategy: str
    outcome: Literal["accepted", "rejected", "skipped", "failed", "dropped"]
    detail: Optional[str] = None


class ExtractedText(BaseModel):
    """Cleaned text pulled out of a document by one of the extraction tiers"""
    content: str = ""
    source: TextSource = TextSource.DOCUMENT
    detected_format: str = "unknown"
    skeleton: Optional[str] = Field(
        default=None,
        description="Skeleton key when the text was synthesized from the filename",
    )
    trace: List[StrategyTraceEntry] = Field(default_factory=list)

    @property
    def is_usable(self) -> bool:
        return len(self.content.strip()) >= MIN_TEXT_LENGTH


class DaySection(BaseModel):
    """Span of text believed to describe one training day"""
    index: int = Field(..., ge=1)
    label: str = Field(..., min_length=1)
    text: str


class ExerciseEntry(BaseModel):
    """One parsed exercise prescription"""
    name: str = Field(..., min_length=3, max_length=50)
    sets: int = Field(default=3, ge=1)
    reps: str = Field(default="8-10", description="Reps as string to preserve ranges like '8-10'")
    rest_seconds: int = Field(default=90, ge=1)
    notes: str = ""
    detected_by: Literal["grammar", "dictionary", "token"] = "grammar"


class WorkoutDay(BaseModel):
    """Named, ordered collection of exercises"""
    name: str
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    notes: Optional[str] = None


class ProgramMetadata(BaseModel):
    """Program-level details inferred from the text and filename"""
    name: str
    difficulty: Literal["beginner", "intermediate", "advanced"] = "intermediate"
    goals: List[str] = Field(default_factory=lambda: ["General Fitness"])
    duration_weeks: int = Field(default=4, ge=1, le=52)


class ConfidenceSignals(BaseModel):
    """Individual additive contributions to the confidence score"""
    base: float = 0.5
    days: float = 0.0
    exercises: float = 0.0
    sets_reps: float = 0.0
    rest: float = 0.0
    day_numbers: float = 0.0
    ceiling: Optional[float] = Field(
        default=None,
        description="Upper bound applied for fallback methods",
    )

    @property
    def total(self) -> float:
        score = min(
            self.base + self.days + self.exercises + self.sets_reps + self.rest + self.day_numbers,
            1.0,
        )
        if self.ceiling is not None:
            score = min(score, self.ceiling)
        return round(max(score, 0.0), 4)


class TemplateExercise(BaseModel):
    """Exercise as stored in a StructuredTemplate"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    sets: int
    reps: str
    rest_seconds: int
    weight: str = ""
    notes: str = ""


class TemplateDay(BaseModel):
    """Day entry of a StructuredTemplate schedule"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    day: str
    name: str
    exercises: List[TemplateExercise] = Field(default_factory=list)
    notes: str = ""


class StructuredTemplate(BaseModel):
    """Final workout template handed to the template store"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    difficulty: Literal["beginner", "intermediate", "advanced"] = "intermediate"
    category: str = "strength"
    goals: List[str] = Field(default_factory=lambda: ["General Fitness"])
    equipment: List[str] = Field(default_factory=list)
    days_per_week: int = Field(default=1, ge=0)
    duration_weeks: int = Field(default=4, ge=1)
    estimated_time_minutes: int = 60
    schedule: List[TemplateDay] = Field(default_factory=list)
    is_custom: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DebugInfo(BaseModel):
    """Diagnostics returned alongside every result"""
    raw_text: str = ""
    detected_format: str = "unknown"
    text_source: Optional[TextSource] = None
    strategy_trace: List[StrategyTraceEntry] = Field(default_factory=list)
    confidence_signals: ConfidenceSignals = Field(default_factory=ConfidenceSignals)


class ProcessingResult(BaseModel):
    """Pipeline output for one document"""
    success: bool = False
    template: StructuredTemplate
    confidence: float = Field(default=0, ge=0, le=1)
    extracted_days: int = 0
    extracted_exercises: int = 0
    processing_time_ms: int = 0
    method: ExtractionMethod = ExtractionMethod.MANUAL
    warnings: List[str] = Field(default_factory=list)
    debug: DebugInfo = Field(default_factory=DebugInfo)
