"""
Format Classifier

Guesses how a program document is organized. The tag is advisory: it is
reported in the debug output but never gates segmentation.
"""

import logging

from .vocabulary import FORMAT_PATTERNS, GENERIC_FORMAT

logger = logging.getLogger(__name__)


def classify(text: str) -> str:
    """Return the first matching format tag, or 'generic'"""
    for tag, pattern in FORMAT_PATTERNS:
        if pattern.search(text or ""):
            logger.info(f"Detected document format: {tag}")
            return tag

    logger.info(f"Detected document format: {GENERIC_FORMAT}")
    return GENERIC_FORMAT
