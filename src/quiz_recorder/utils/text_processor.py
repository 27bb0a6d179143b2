"""
Text Processing Utilities

This module provides the small text helpers used when reading the quiz
page: normalizing option labels and pulling numbers out of the counter
and score elements for the session trace.
"""

import re
from typing import Optional, Tuple

from ..constants import DEFAULT_PATHS

COUNTER_PATTERN = re.compile(r'(\d+)\s*(?:/|of)\s*(\d+)', re.IGNORECASE)
SCORE_PATTERN = re.compile(r'Score:\s*(-?\d+)', re.IGNORECASE)
UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._-]+')


class TextProcessor:
    """
    Handles text processing operations for rendered quiz content.
    """

    @staticmethod
    def clean_option_text(text: Optional[str]) -> str:
        """
        Normalize an option label the way answers are compared.

        Args:
            text: Raw text content (may be None for an empty element)

        Returns:
            str: Trimmed text
        """
        if not text:
            return ""
        return text.strip()

    @staticmethod
    def parse_counter(counter_label: Optional[str]) -> Optional[Tuple[int, int]]:
        """
        Extract ``(current, total)`` from labels such as "Question 3 of 10" or "3/10".

        Returns:
            Tuple of ints, or None when the label carries no counter
        """
        if not counter_label:
            return None
        match = COUNTER_PATTERN.search(counter_label)
        if not match:
            return None
        return int(match.group(1)), int(match.group(2))

    @staticmethod
    def parse_score(score_text: Optional[str]) -> Optional[int]:
        """Extract the numeric score from text like "Score: 40"."""
        if not score_text:
            return None
        match = SCORE_PATTERN.search(score_text)
        return int(match.group(1)) if match else None

    @staticmethod
    def screenshot_filename(name: str) -> str:
        """Build ``debug-<name>.png`` with filesystem-unsafe characters replaced."""
        safe = UNSAFE_FILENAME_CHARS.sub('-', name).strip('-') or 'screenshot'
        return DEFAULT_PATHS['screenshot_pattern'].format(name=safe)
