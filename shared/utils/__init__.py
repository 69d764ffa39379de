"""
Utility modules for the compression service.

Provides common utilities for:
- Structured logging
- Error handling
"""

from .logging import setup_logging, get_logger
from .errors import (
    DataProcessingError,
    InputFormatError,
    SerializationError,
    ConfigurationError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "DataProcessingError",
    "InputFormatError",
    "SerializationError",
    "ConfigurationError",
]
