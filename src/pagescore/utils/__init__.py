"""Utility functions for pagescore."""

from pagescore.utils.logging import configure_logging, get_logger, get_logger_with_context
from pagescore.utils.errors import (
    PageScoreError,
    ConfigValidationError,
    DuplicateIdError,
    DanglingReferenceError,
    InvalidWeightError,
    InvalidConfigError,
    InvalidResultError,
    MissingResultError,
    ConfigurationError,
)
from pagescore.utils.documents import dump_document, load_document, save_document
from pagescore.utils.config import (
    PageScoreConfig,
    OutputConfig,
    ScoringConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "PageScoreError",
    "ConfigValidationError",
    "DuplicateIdError",
    "DanglingReferenceError",
    "InvalidWeightError",
    "InvalidConfigError",
    "InvalidResultError",
    "MissingResultError",
    "ConfigurationError",
    # Documents
    "dump_document",
    "load_document",
    "save_document",
    # Config
    "PageScoreConfig",
    "OutputConfig",
    "ScoringConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
