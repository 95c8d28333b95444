"""
Program Extraction Pipeline

bytes -> TextExtractor -> FormatClassifier -> DaySegmenter -> per-day
ExerciseLineParser -> (no exercises at all) dictionary names -> filename
skeleton -> unverified words -> TemplateBuilder/ConfidenceScorer.

process() never raises: any unexpected error still yields a 'manual'
ProcessingResult with the error text in its warnings.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from . import day_segmenter, format_classifier, template_builder
from .exercise_parser import parse_section
from .models import (
    DebugInfo,
    ExerciseEntry,
    ExtractedText,
    ExtractionMethod,
    ProcessingResult,
    SourceDocument,
    StrategyTraceEntry,
    TextSource,
    WorkoutDay,
)
from .program_metadata import extract_day_notes, extract_program_metadata
from .skeletons import GENERIC_SKELETON, skeleton_for_filename
from .text_cleaner import clean, is_garbage
from .text_extractor import TextExtractor
from .vocabulary_extractor import extract_by_vocabulary

logger = logging.getLogger(__name__)

DICTIONARY_CEILING = 0.8
TOKEN_CEILING = 0.4
SKELETON_CEILING = 0.9

DICTIONARY_DAY_NAME = "Detected Exercises"
TOKEN_DAY_NAME = "Potential Exercises (Verify Required)"

FALLBACK_WARNING = "Used fallback extraction method"
SKELETON_WARNING = "Used smart template based on filename"
MANUAL_WARNING = "Could not extract exercises from document - manual entry required"

EXERCISE_STAGE = "exercise_extraction"


@dataclass
class _Run:
    """Mutable state for one document run"""
    doc: SourceDocument
    started: float
    warnings: List[str] = field(default_factory=list)
    trace: List[StrategyTraceEntry] = field(default_factory=list)
    raw_text: str = ""
    detected_format: str = "unknown"
    text_source: Optional[TextSource] = None

    def warn(self, message: str) -> None:
        logger.warning(f"{self.doc.name}: {message}")
        self.warnings.append(message)

    def record(self, strategy: str, outcome: str, detail: Optional[str] = None) -> None:
        self.trace.append(
            StrategyTraceEntry(stage=EXERCISE_STAGE, strategy=strategy, outcome=outcome, detail=detail)
        )

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)


class ProgramExtractionPipeline:
    """Turns one uploaded document into a ProcessingResult"""

    def __init__(self, extractor: Optional[TextExtractor] = None):
        self.extractor = extractor or TextExtractor()

    def process(self, doc: SourceDocument) -> ProcessingResult:
        """
        Run every stage for a document.

        Args:
            doc: Source document (filename + bytes)

        Returns:
            ProcessingResult; method is always set, 'manual' on total failure
        """
        run = _Run(doc=doc, started=time.perf_counter())
        logger.info(f"Processing document {doc.name} ({len(doc.content)} bytes)")

        try:
            return self._process(run)
        except Exception as e:
            logger.exception(f"Extraction failed for {doc.name}")
            run.warnings.append(f"Extraction failed: {e}")
            return self._manual_result(run)

    def _process(self, run: _Run) -> ProcessingResult:
        extracted = self.extractor.extract(run.doc)
        run.trace.extend(extracted.trace)
        run.text_source = extracted.source
        run.raw_text = extracted.content
        run.detected_format = format_classifier.classify(extracted.content)

        if extracted.source == TextSource.FILENAME:
            run.warn("PDF text extraction failed - using filename-based template")
            return self._from_filename_skeleton(run, extracted)

        days = self._extract_days(run, extracted.content)
        if days:
            run.record("line_grammars", "accepted")
            return self._result(run, days, ExtractionMethod.PATTERN)
        run.record("line_grammars", "rejected", "no exercises matched")

        exercises = extract_by_vocabulary(extracted.content)
        if exercises and exercises[0].detected_by == "dictionary":
            return self._from_vocabulary(run, exercises)

        # Unverified words rank below a program named in the filename
        skeleton = skeleton_for_filename(run.doc.name)
        if skeleton is not None:
            if exercises:
                run.record("vocabulary", "rejected", "unverified words, filename names a program")
            key, text = skeleton
            run.raw_text = clean(text)
            run.text_source = TextSource.FILENAME
            return self._from_filename_skeleton(
                run, ExtractedText(content=run.raw_text, source=TextSource.FILENAME, skeleton=key)
            )

        if exercises:
            return self._from_vocabulary(run, exercises)

        run.record("vocabulary", "rejected", "no known exercises or candidate words")
        run.record("filename_skeleton", "skipped", "no filename keyword")
        return self._manual_result(run)

    def _extract_days(self, run: _Run, text: str) -> List[WorkoutDay]:
        """Segment the text and parse each section, keeping non-empty days"""
        if is_garbage(text):
            run.record("line_grammars", "skipped", "garbage text")
            return []

        traced = len(run.trace)
        sections = day_segmenter.segment(text, trace=run.trace)
        for entry in run.trace[traced:]:
            if entry.outcome == "dropped":
                run.warn(f"Skipped short day sections: {entry.detail}")

        days = []
        for section in sections:
            exercises = parse_section(section.text)
            logger.debug(f"{section.label}: {len(exercises)} exercises")
            if exercises:
                days.append(
                    WorkoutDay(name=section.label, exercises=exercises, notes=extract_day_notes(section.text))
                )
        return days

    def _from_vocabulary(self, run: _Run, exercises: List[ExerciseEntry]) -> ProcessingResult:
        if exercises[0].detected_by == "dictionary":
            day_name, ceiling = DICTIONARY_DAY_NAME, DICTIONARY_CEILING
        else:
            day_name, ceiling = TOKEN_DAY_NAME, TOKEN_CEILING
            run.warn("Exercises are unverified words from the document, please review")

        run.record("vocabulary", "accepted", f"{len(exercises)} {exercises[0].detected_by} matches")
        run.warn(FALLBACK_WARNING)
        return self._result(run, [WorkoutDay(name=day_name, exercises=exercises)], ExtractionMethod.FALLBACK, ceiling)

    def _from_filename_skeleton(self, run: _Run, extracted: ExtractedText) -> ProcessingResult:
        if extracted.skeleton == GENERIC_SKELETON:
            run.record("filename_skeleton", "rejected", "no program keyword in filename")
            return self._manual_result(run)

        days = self._extract_days(run, extracted.content)
        if not days:
            run.record("filename_skeleton", "rejected", f"{extracted.skeleton} skeleton yielded no exercises")
            return self._manual_result(run)

        run.record("filename_skeleton", "accepted", extracted.skeleton)
        run.warn(SKELETON_WARNING)
        return self._result(run, days, ExtractionMethod.FALLBACK, SKELETON_CEILING)

    def _result(
        self,
        run: _Run,
        days: List[WorkoutDay],
        method: ExtractionMethod,
        ceiling: Optional[float] = None,
    ) -> ProcessingResult:
        metadata = extract_program_metadata(run.raw_text, run.doc.name)
        template = template_builder.build(run.doc.name, days, metadata)
        signals = template_builder.confidence_signals(days, run.raw_text, ceiling=ceiling)
        exercise_count = template_builder.total_exercises(days)

        logger.info(
            f"Extracted {len(days)} days, {exercise_count} exercises from {run.doc.name} "
            f"(method={method.value}, confidence={signals.total})"
        )

        return ProcessingResult(
            success=True,
            template=template,
            confidence=signals.total,
            extracted_days=len(days),
            extracted_exercises=exercise_count,
            processing_time_ms=run.elapsed_ms,
            method=method,
            warnings=run.warnings,
            debug=self._debug(run, signals),
        )

    def _manual_result(self, run: _Run) -> ProcessingResult:
        run.warn(MANUAL_WARNING)

        return ProcessingResult(
            success=False,
            template=template_builder.build_manual_template(run.doc.name),
            confidence=0.0,
            extracted_days=0,
            extracted_exercises=0,
            processing_time_ms=run.elapsed_ms,
            method=ExtractionMethod.MANUAL,
            warnings=run.warnings,
            debug=self._debug(run, template_builder.confidence_signals([], run.raw_text, ceiling=0.0)),
        )

    def _debug(self, run: _Run, signals) -> DebugInfo:
        return DebugInfo(
            raw_text=run.raw_text,
            detected_format=run.detected_format,
            text_source=run.text_source,
            strategy_trace=run.trace,
            confidence_signals=signals,
        )


_default_pipeline: Optional[ProgramExtractionPipeline] = None


def process_document(content: bytes, filename: str) -> ProcessingResult:
    """Process raw bytes with the default pipeline"""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = ProgramExtractionPipeline()
    return _default_pipeline.process(SourceDocument(name=filename or "document.pdf", content=content or b""))
