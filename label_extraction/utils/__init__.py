"""
Utility Module for the Label Extraction Engine.

This module provides common utilities used across all other modules:
    - Logging configuration and per-page log context
    - Exception hierarchy
    - Text and file helpers
"""

from .logger import setup_logger, get_logger, page_context
from .helpers import split_lines, join_lines, title_case, ensure_directory

__all__ = [
    'setup_logger',
    'get_logger',
    'page_context',
    'split_lines',
    'join_lines',
    'title_case',
    'ensure_directory',
]
