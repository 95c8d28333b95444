"""Tests for the text extraction tiers."""
import random
from unittest.mock import patch

import pytest

from program_ingestor_api.extraction.models import SourceDocument, TextSource
from program_ingestor_api.extraction.text_extractor import (
    FilenameSkeletonStrategy,
    PdfTextStrategy,
    RawBytesStrategy,
    TextExtractor,
    harvest_markup_text,
)


PDF_MARKUP = (
    b"%PDF-1.4\n"
    b"1 0 obj\n<< /Type /Page >>\nendobj\n"
    b"2 0 obj\nBT (Day 1: Upper Body) Tj ET\n"
    b"BT (Bench Press - 3 sets x 8-10 reps - Rest 90 seconds) Tj ET\n"
    b"BT (Barbell Row - 3 sets x 8-10 reps - Rest 90 seconds) Tj ET\n"
    b"endobj\n"
)


class TestPdfTextStrategy:

    def test_reads_text_layer(self, push_pull_pdf):
        extracted = PdfTextStrategy().attempt(SourceDocument(name="ppl.pdf", content=push_pull_pdf))

        assert extracted is not None
        assert extracted.source == TextSource.DOCUMENT
        assert "Bench Press - 4 sets x 8-10 reps" in extracted.content
        assert "Day 2: Pull" in extracted.content

    def test_unparseable_bytes_return_none(self):
        doc = SourceDocument(name="broken.pdf", content=b"\xff\xfe\xfd\xfc" * 100)
        assert PdfTextStrategy().attempt(doc) is None

    def test_decoder_exception_is_not_raised(self):
        doc = SourceDocument(name="plan.pdf", content=b"%PDF-1.4")
        with patch("program_ingestor_api.extraction.text_extractor.fitz.open", side_effect=RuntimeError("boom")):
            assert PdfTextStrategy().attempt(doc) is None

    def test_too_little_text_returns_none(self, make_pdf):
        doc = SourceDocument(name="cover.pdf", content=make_pdf(["Cover page"]))
        assert PdfTextStrategy().attempt(doc) is None


class TestRawBytesStrategy:

    def test_plain_text_upload(self):
        content = "Day 1: Legs\nSquat - 5 sets x 5 reps - Rest 3 minutes\nLeg Press - 3 sets x 12 reps\n".encode()
        extracted = RawBytesStrategy().attempt(SourceDocument(name="legs.txt", content=content))

        assert extracted is not None
        assert extracted.source == TextSource.RAW_BYTES
        assert "Squat - 5 sets x 5 reps" in extracted.content

    def test_harvests_strings_from_pdf_markup(self):
        extracted = RawBytesStrategy().attempt(SourceDocument(name="upper.pdf", content=PDF_MARKUP))

        assert extracted is not None
        assert "Bench Press - 3 sets x 8-10 reps - Rest 90 seconds" in extracted.content
        assert "endobj" not in extracted.content

    def test_binary_noise_returns_none(self):
        doc = SourceDocument(name="noise.pdf", content=b"\xff\xfe\xfd\xfc" * 100)
        assert RawBytesStrategy().attempt(doc) is None

    @pytest.mark.parametrize("seed", range(8))
    def test_random_binary_returns_none(self, seed):
        content = random.Random(seed).randbytes(4000)
        assert RawBytesStrategy().attempt(SourceDocument(name="scan.pdf", content=content)) is None

    def test_printable_noise_without_words_returns_none(self):
        content = b"k#8 ]Q% ;v@ 4~r Zp$ 0^j (x) !m+ w=3 {c} 7<y q/9 E&f 5*t" * 3
        assert RawBytesStrategy().attempt(SourceDocument(name="noise.txt", content=content)) is None

    def test_empty_content_returns_none(self):
        assert RawBytesStrategy().attempt(SourceDocument(name="empty.pdf", content=b"")) is None


class TestHarvestMarkupText:

    def test_collects_runs_in_document_order(self):
        source = "BT (First line) Tj [Second line] TJ <Third line> ET (x)"
        assert harvest_markup_text(source) == "First line\nSecond line\nThird line"

    def test_unescapes_parentheses(self):
        assert harvest_markup_text(r"(Curl \(EZ bar\))") == "Curl (EZ bar)"

    def test_decodes_hex_strings(self):
        hex_run = "Squat".encode("latin-1").hex()
        assert harvest_markup_text(f"<{hex_run}>") == "Squat"

    def test_decodes_utf16_hex_strings(self):
        hex_run = ("\ufeff" + "Deadlift").encode("utf-16-be").hex()
        assert harvest_markup_text(f"<{hex_run}>") == "Deadlift"

    def test_drops_runs_without_letters(self):
        assert harvest_markup_text("(123) [4 5 6] (ok)") == ""


class TestFilenameSkeletonStrategy:

    def test_bench_keyword(self):
        extracted = FilenameSkeletonStrategy().attempt(SourceDocument(name="bench_press_12wk.pdf"))

        assert extracted.source == TextSource.FILENAME
        assert extracted.skeleton == "bench_press"
        assert "Incline Bench Press" in extracted.content

    def test_stronglifts_keyword(self):
        extracted = FilenameSkeletonStrategy().attempt(SourceDocument(name="StrongLifts-5x5.pdf"))
        assert extracted.skeleton == "stronglifts"
        assert "Workout B:" in extracted.content

    def test_generic_skeleton(self):
        extracted = FilenameSkeletonStrategy().attempt(SourceDocument(name="notes.pdf"))
        assert extracted.skeleton == "generic"
        assert "Upper Body" in extracted.content


class TestTextExtractor:

    def test_prefers_pdf_text_layer(self, push_pull_pdf):
        extracted = TextExtractor().extract(SourceDocument(name="ppl.pdf", content=push_pull_pdf))

        assert extracted.source == TextSource.DOCUMENT
        assert [entry.outcome for entry in extracted.trace] == ["accepted"]

    def test_falls_back_to_raw_bytes(self):
        extracted = TextExtractor().extract(SourceDocument(name="upper.pdf", content=PDF_MARKUP))

        assert extracted.source == TextSource.RAW_BYTES
        assert [(e.strategy, e.outcome) for e in extracted.trace] == [
            ("pdf_text_layer", "rejected"),
            ("raw_bytes", "accepted"),
        ]

    def test_empty_document_uses_filename(self):
        extracted = TextExtractor().extract(SourceDocument(name="notes.pdf", content=b""))

        assert extracted.source == TextSource.FILENAME
        assert extracted.skeleton == "generic"
        assert extracted.trace[-1].strategy == "filename_skeleton"
        assert extracted.trace[-1].outcome == "accepted"
