"""Utility functions."""
import re
from typing import Optional

_EXTENSION = re.compile(r"\.[A-Za-z0-9]{1,5}$")
_SEPARATORS = re.compile(r"[_\-]+")


def to_int(s: Optional[str]) -> Optional[int]:
    """Convert string to int, returning None if conversion fails."""
    try:
        return int(s) if s is not None else None
    except (TypeError, ValueError):
        return None


def title_case(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest alone."""
    return re.sub(r"\b([a-z])", lambda m: m.group(1).upper(), text)


def program_name_from_filename(filename: str) -> str:
    """'bench_press-12wk.pdf' -> 'bench press 12wk'"""
    base = _EXTENSION.sub("", (filename or "").strip())
    name = " ".join(_SEPARATORS.sub(" ", base).split())
    return name or "Imported Program"
