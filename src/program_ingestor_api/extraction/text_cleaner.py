"""
Text Cleaner

Strips binary and metadata noise from extracted document text. The rules
run in order; later rules assume the earlier ones already removed gross
structural noise. The rule chain is re-applied until the text stops
changing, which makes clean() idempotent.
"""

import re
from typing import Pattern, Tuple

# Minimum length and printable ratio below which text is treated as garbage
GARBAGE_MIN_LENGTH = 20
GARBAGE_PRINTABLE_RATIO = 0.5

# Decoded binary rarely has more than a few percent of word-like tokens
MIN_WORD_RATIO = 0.2

# Tokens at least this long are encoded data, not words
LONG_TOKEN_LENGTH = 30

_LINE_ENDINGS = re.compile(r"\r\n?")

# Ordered removal rules; every match is replaced by a single space
CLEANING_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("control_chars", re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")),
    ("xml_namespaces", re.compile(r"xmlns[^>]*>", re.IGNORECASE)),
    ("urls", re.compile(r"(?:https?://|www\.)[^\s\"'<>]*", re.IGNORECASE)),
    ("timestamps", re.compile(r"\d{4}/\d{2}/\d{2}-\d{2}:\d{2}:\d{2}")),
    ("object_headers", re.compile(r"\b\d+\s+\d+\s+obj\b", re.IGNORECASE)),
    ("object_delimiters", re.compile(r"\b(?:endstream|endobj|startxref|xref|stream|obj)\b", re.IGNORECASE)),
    ("name_objects", re.compile(r"(?<![\w/])/[A-Z][a-z]*[A-Z][A-Za-z0-9]*")),
    ("camel_case", re.compile(r"\b(?=[A-Za-z0-9]{12,}\b)[a-z]*[A-Z][a-z0-9]+[A-Z][A-Za-z0-9]*\b")),
    ("all_caps", re.compile(r"\b(?=[A-Z0-9]*[A-Z])[A-Z0-9]{12,}\b")),
    ("long_tokens", re.compile(r"\S{%d,}" % LONG_TOKEN_LENGTH)),
)

_HORIZONTAL_WS = re.compile(r"[ \t\f\v\u00a0]+")
_BLANK_LINES = re.compile(r"\n{3,}")
_PRINTABLE = re.compile(r"[\x20-\x7e\t\n\r]")
_WORD = re.compile(r"[A-Za-z][A-Za-z'\-]*[A-Za-z]")
_WORD_PUNCTUATION = ".,:;!?()\"'"


def _apply_rules(text: str) -> str:
    text = _LINE_ENDINGS.sub("\n", text)

    for _name, pattern in CLEANING_RULES:
        text = pattern.sub(" ", text)

    # Collapse whitespace but keep line and paragraph breaks
    text = _HORIZONTAL_WS.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES.sub("\n\n", text)

    return text.strip()


def clean(text: str) -> str:
    """
    Remove binary/metadata noise from text.

    Args:
        text: Raw text from any extraction tier

    Returns:
        Cleaned text with single spaces, line breaks and paragraph breaks kept
    """
    if not text:
        return ""

    # Each changing pass removes at least one non-space character, so this terminates
    previous = None
    while text != previous:
        previous = text
        text = _apply_rules(text)

    return text


def is_garbage(text: str) -> bool:
    """True when text is too short or mostly non-printable to be worth scanning"""
    if len(text) < GARBAGE_MIN_LENGTH:
        return True

    printable = len(_PRINTABLE.findall(text))
    return printable / len(text) < GARBAGE_PRINTABLE_RATIO


def word_ratio(text: str) -> float:
    """Share of whitespace-separated tokens that are plain words of two or more letters"""
    tokens = text.split()
    if not tokens:
        return 0.0

    words = sum(1 for token in tokens if _WORD.fullmatch(token.strip(_WORD_PUNCTUATION)))
    return words / len(tokens)


def looks_like_text(text: str) -> bool:
    """True when text is printable and enough of it reads as words"""
    return not is_garbage(text) and word_ratio(text) >= MIN_WORD_RATIO
