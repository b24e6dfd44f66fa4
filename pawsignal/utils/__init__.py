"""
Utility module: logging and text helpers
"""

from .logging import logger, set_log_level
from .text import normalize, is_placeholder, split_words, split_phrases

__all__ = [
    'logger',
    'set_log_level',
    'normalize',
    'is_placeholder',
    'split_words',
    'split_phrases',
]
