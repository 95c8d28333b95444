"""
Test fixtures for program-ingestor-api.

PDF fixtures are generated in-test with PyMuPDF so no binary files are
committed. LLM clients are always mocked.
"""

import sys
from pathlib import Path
from typing import Callable, List
from unittest.mock import MagicMock

import fitz  # PyMuPDF
import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import program_ingestor_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from program_ingestor_api.api.routes import get_summary_service, get_template_store
from program_ingestor_api.main import app
from program_ingestor_api.services.template_store import InMemoryTemplateStore


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


PUSH_PULL_PROGRAM = """Program: Push Pull Hypertrophy
8 week plan for intermediate lifters

Day 1: Push
Bench Press - 4 sets x 8-10 reps - Rest 90 seconds
Overhead Press - 3 sets x 8-12 reps - Rest 2 minutes
Tricep Dips - 3 sets x 10-12 reps - Rest 60 seconds
Note: Keep one rep in reserve

Day 2: Pull
Barbell Row - 4 sets x 8-10 reps - Rest 90 seconds
Pull-ups - 3 sets x 6-10 reps - Rest 2 minutes
Bicep Curl - 3 sets x 10-12 reps - Rest 60 seconds"""


@pytest.fixture
def push_pull_text() -> str:
    return PUSH_PULL_PROGRAM


@pytest.fixture
def make_pdf() -> Callable[[List[str]], bytes]:
    """Build a PDF with one page per string."""

    def _make(pages: List[str]) -> bytes:
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            page.insert_text((72, 72), text, fontsize=10)
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def push_pull_pdf(make_pdf) -> bytes:
    return make_pdf([PUSH_PULL_PROGRAM])


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def template_store() -> InMemoryTemplateStore:
    return InMemoryTemplateStore()


@pytest.fixture
def mock_summary_service() -> MagicMock:
    service = MagicMock()
    service.summarize.return_value = "A two day push/pull split built around compound lifts."
    return service


@pytest.fixture
def client(template_store, mock_summary_service) -> TestClient:
    """Per-test FastAPI TestClient with a fresh store and a mocked summary service."""
    app.dependency_overrides[get_template_store] = lambda: template_store
    app.dependency_overrides[get_summary_service] = lambda: mock_summary_service
    yield TestClient(app)
    app.dependency_overrides.clear()
