"""
Utility modules for the quiz recorder.

This package contains utility classes and functions for:
- Logging configuration
- Named pacing pauses
- Text processing of rendered quiz content
- Environment checks
"""

from .logging_setup import setup_logging
from .pacing import Pacer
from .text_processor import TextProcessor

__all__ = [
    'Pacer',
    'TextProcessor',
    'setup_logging'
]
