"""
Text Extractor

Turns raw document bytes into cleaned text by degrading through an ordered
chain of extraction tiers:

1. PDF text layer, decoded page by page with PyMuPDF
2. Raw bytes reinterpreted as text, harvesting readable strings out of
   PDF markup when the bytes look like an unparseable PDF
3. A synthetic program skeleton derived from the filename

Tiers 1 and 2 may fail (logged as warnings); tier 3 always succeeds, so
extract() never raises.
"""

import logging
import re
from typing import List, Optional

import fitz  # PyMuPDF

from . import text_cleaner
from .models import ExtractedText, SourceDocument, StrategyTraceEntry, TextSource, MIN_TEXT_LENGTH
from .skeletons import GENERIC_SKELETON, generic_skeleton, skeleton_for_filename
from .strategies import Strategy, first_success

logger = logging.getLogger(__name__)

STAGE = "text_extraction"

# Markers that identify PDF source when the bytes are read as plain text
_PDF_MARKUP = re.compile(rb"%PDF-|\bendobj\b|\bendstream\b|\bxref\b")

# Readable runs inside PDF markup, in document order:
# (literal strings), [bracketed runs] without nested strings, <hex or angle runs>
_MARKUP_TEXT = re.compile(
    r"\(((?:\\.|[^()\\])+)\)"
    r"|\[([^\[\]()]+)\]"
    r"|<([^<>]+)>"
)
_PDF_ESCAPE = re.compile(r"\\([()\\])")
_HEX_RUN = re.compile(r"[0-9A-Fa-f\s]+")
_LETTERS = re.compile(r"[A-Za-z]{2,}")


class PdfTextStrategy(Strategy[SourceDocument, ExtractedText]):
    """Tier 1: decode the document's text objects page by page"""

    name = "pdf_text_layer"

    def attempt(self, doc: SourceDocument) -> Optional[ExtractedText]:
        if not doc.content:
            return None

        try:
            pdf = fitz.open(stream=doc.content, filetype="pdf")
        except Exception as e:
            logger.warning(f"PDF parse failed for {doc.name}: {e}")
            return None

        try:
            pages = [page.get_text() for page in pdf]
        except Exception as e:
            logger.warning(f"PDF text decoding failed for {doc.name}: {e}")
            return None
        finally:
            pdf.close()

        text = text_cleaner.clean("\n".join(pages))

        if len(text) < MIN_TEXT_LENGTH:
            logger.warning(
                f"PDF text layer too short for {doc.name} ({len(text)} chars), "
                "document may be scanned or encoded"
            )
            return None

        logger.info(f"Extracted {len(pages)} pages ({len(text)} chars) from {doc.name}")
        return ExtractedText(content=text, source=TextSource.DOCUMENT)


class RawBytesStrategy(Strategy[SourceDocument, ExtractedText]):
    """Tier 2: read the file as text, harvesting strings out of PDF markup"""

    name = "raw_bytes"

    ENCODINGS = ("utf-8", "utf-8-sig", "cp1252", "latin-1")

    def attempt(self, doc: SourceDocument) -> Optional[ExtractedText]:
        if not doc.content:
            return None

        raw = self._decode_content(doc.content)

        if _PDF_MARKUP.search(doc.content):
            raw = harvest_markup_text(raw)

        # Judge the decoded text before cleaning turns control bytes into spaces
        if text_cleaner.is_garbage(raw):
            logger.warning(f"Raw text fallback found only binary data in {doc.name}")
            return None

        text = text_cleaner.clean(raw)

        if len(text) < MIN_TEXT_LENGTH or not text_cleaner.looks_like_text(text):
            logger.warning(f"Raw text fallback found no readable text in {doc.name}")
            return None

        logger.info(f"Recovered {len(text)} chars of raw text from {doc.name}")
        return ExtractedText(content=text, source=TextSource.RAW_BYTES)

    def _decode_content(self, content: bytes) -> str:
        """Decode bytes to string"""
        for encoding in self.ENCODINGS:
            try:
                return content.decode(encoding)
            except UnicodeDecodeError:
                continue

        return content.decode("utf-8", errors="replace")


class FilenameSkeletonStrategy(Strategy[SourceDocument, ExtractedText]):
    """Tier 3: synthesize a program skeleton from keywords in the filename"""

    name = "filename_skeleton"

    def attempt(self, doc: SourceDocument) -> Optional[ExtractedText]:
        match = skeleton_for_filename(doc.name)
        if match:
            key, text = match
        else:
            key, text = GENERIC_SKELETON, generic_skeleton(doc.name)

        logger.warning(f"Using {key} skeleton derived from filename {doc.name!r}")
        return ExtractedText(
            content=text_cleaner.clean(text),
            source=TextSource.FILENAME,
            skeleton=key,
        )


def harvest_markup_text(source: str) -> str:
    """
    Pull plausible human-readable substrings out of PDF source.

    Literal strings, bracketed runs and angle-bracketed runs are collected
    in document order; hex strings are decoded. Runs without at least two
    consecutive letters are dropped.
    """
    pieces: List[str] = []

    for match in _MARKUP_TEXT.finditer(source):
        literal, bracketed, angled = match.groups()

        if literal is not None:
            piece = _PDF_ESCAPE.sub(r"\1", literal)
        elif bracketed is not None:
            piece = bracketed
        else:
            piece = _decode_hex_run(angled)

        piece = piece.strip()
        if len(piece) > 2 and _LETTERS.search(piece):
            pieces.append(piece)

    return "\n".join(pieces)


def _decode_hex_run(run: str) -> str:
    if not _HEX_RUN.fullmatch(run):
        return run

    digits = "".join(run.split())
    if len(digits) % 2:
        digits += "0"

    try:
        data = bytes.fromhex(digits)
    except ValueError:
        return run

    if data.startswith(b"\xfe\xff"):
        return data[2:].decode("utf-16-be", errors="ignore")
    return data.decode("latin-1")


class TextExtractor:
    """Runs the extraction tiers in priority order"""

    def __init__(self, strategies: Optional[List[Strategy[SourceDocument, ExtractedText]]] = None):
        self.strategies = strategies or [
            PdfTextStrategy(),
            RawBytesStrategy(),
            FilenameSkeletonStrategy(),
        ]

    def extract(self, doc: SourceDocument) -> ExtractedText:
        """
        Extract usable text from a document.

        Args:
            doc: Source document (filename + bytes)

        Returns:
            ExtractedText from the first tier that produced usable text,
            with the tier-by-tier trace attached. Never raises.
        """
        trace: List[StrategyTraceEntry] = []

        winner = first_success(
            self.strategies,
            doc,
            accept=lambda extracted: extracted.source == TextSource.FILENAME or extracted.is_usable,
            trace=trace,
            stage=STAGE,
        )

        if winner is None:
            # Only reachable with a custom strategy list lacking the filename tier
            logger.warning(f"No extraction tier produced text for {doc.name}")
            return ExtractedText(content="", source=TextSource.FILENAME, skeleton=GENERIC_SKELETON, trace=trace)

        _strategy, extracted = winner
        return extracted.model_copy(update={"trace": trace})
