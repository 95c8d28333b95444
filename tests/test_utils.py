"""Unit tests for utility functions."""
import pytest
from program_ingestor_api.utils import program_name_from_filename, title_case, to_int


class TestUtils:
    """Test cases for utility functions."""

    def test_to_int_valid(self):
        assert to_int("10") == 10
        assert to_int("0") == 0
        assert to_int("-5") == -5

    def test_to_int_invalid(self):
        assert to_int("abc") is None
        assert to_int("") is None
        assert to_int(None) is None

    def test_title_case(self):
        assert title_case("bench press") == "Bench Press"
        assert title_case("pull-ups 5x5") == "Pull-Ups 5x5"
        assert title_case("DB row") == "DB Row"

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("bench_press_12wk.pdf", "bench press 12wk"),
            ("Upper-Lower--Split.PDF", "Upper Lower Split"),
            ("program", "program"),
            ("", "Imported Program"),
            (None, "Imported Program"),
            (".pdf", "Imported Program"),
        ],
    )
    def test_program_name_from_filename(self, filename, expected):
        assert program_name_from_filename(filename) == expected
