"""Workout program document extraction."""
from .models import (
    ExtractionMethod,
    ProcessingResult,
    SourceDocument,
    StructuredTemplate,
    TextSource,
)
from .pipeline import ProgramExtractionPipeline, process_document

__all__ = [
    "ExtractionMethod",
    "ProcessingResult",
    "SourceDocument",
    "StructuredTemplate",
    "TextSource",
    "ProgramExtractionPipeline",
    "process_document",
]
