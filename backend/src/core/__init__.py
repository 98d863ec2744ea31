"""
Core package for the FieldDay competition store.
Contains exceptions, error handling, and common utilities.
"""

from .exceptions import *
from .error_handler import (
    ErrorHandler,
    error_handler,
    with_domain_error_handling,
    with_storage_error_handling,
)
from .utils import *

__all__ = [
    # Base exceptions
    "FieldDayException",
    "ErrorContext",
    "ValidationError",
    "ConfigurationError",

    # Domain exceptions
    "DomainException",
    "CompetitorNotFoundError",
    "EliminationRuleError",
    "WrongCategoryError",
    "AttemptLimitError",

    # Persistence exceptions
    "PersistenceException",
    "DocumentParseError",
    "StorageIOError",

    # Error handler
    "ErrorHandler",
    "error_handler",
    "with_domain_error_handling",
    "with_storage_error_handling",

    # Utilities
    "PathManager",
    "LoggerFactory",
    "DataValidator",
    "PROJECT_ROOT",
    "BACKEND_SRC"
]
