"""
Exception hierarchy for the FieldDay competition store.
Provides specific exceptions for each rejected operation with context.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    competitor_id: Optional[str] = None
    path: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to dictionary."""
        return {
            'operation': self.operation,
            'competitor_id': self.competitor_id,
            'path': self.path,
            'parameters': self.parameters,
            'timestamp': self.timestamp.isoformat(),
        }


class FieldDayException(Exception):
    """
    Base exception class for all FieldDay-specific errors.
    Provides rich context and error categorization.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        error_code: Optional[str] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.original_error = original_error
        self.error_code = error_code
        self.recoverable = recoverable
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'recoverable': self.recoverable,
            'timestamp': self.timestamp.isoformat(),
            'context': self.context.to_dict() if self.context else None,
            'original_error': str(self.original_error) if self.original_error else None
        }

    def __str__(self) -> str:
        """Enhanced string representation with context."""
        base_msg = self.message
        if self.error_code:
            base_msg += f" [Code: {self.error_code}]"
        return base_msg


# =============================================================================
# Validation and Configuration Exceptions
# =============================================================================

class ValidationError(FieldDayException):
    """Raised when input validation fails."""

    def __init__(
        self,
        field: str,
        value: Any,
        constraint: str,
        context: Optional[ErrorContext] = None
    ):
        message = f"Validation failed for field '{field}': {constraint}. Got: {value!r}"
        super().__init__(
            message=message,
            context=context,
            error_code="VALIDATION_ERROR",
            recoverable=True
        )
        self.field = field
        self.value = value
        self.constraint = constraint


class ConfigurationError(FieldDayException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, setting: str, message: str, context: Optional[ErrorContext] = None):
        full_message = f"Configuration error for '{setting}': {message}"
        super().__init__(
            message=full_message,
            context=context,
            error_code="CONFIG_ERROR",
            recoverable=False
        )
        self.setting = setting


# =============================================================================
# Domain-Level Exceptions
# =============================================================================

class DomainException(FieldDayException):
    """Base class for domain logic errors."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        error_code: str = "DOMAIN_ERROR",
        recoverable: bool = True
    ):
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code=error_code,
            recoverable=recoverable
        )


class CompetitorNotFoundError(DomainException):
    """Raised when no competitor has the given id."""

    def __init__(self, competitor_id: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=f"Competitor with ID {competitor_id} not found",
            context=context,
            error_code="COMPETITOR_NOT_FOUND",
            recoverable=False
        )
        self.competitor_id = competitor_id


class EliminationRuleError(DomainException):
    """Raised when a pole vault attempt follows three failures at a lower height."""

    def __init__(
        self,
        competitor_id: str,
        height: float,
        blocking_height: float,
        failures: int,
        context: Optional[ErrorContext] = None
    ):
        message = (
            f"Cannot attempt {height} after failing {blocking_height} "
            f"{failures} times"
        )
        super().__init__(
            message=message,
            context=context,
            error_code="ELIMINATION_RULE_VIOLATION",
            recoverable=False
        )
        self.competitor_id = competitor_id
        self.height = height
        self.blocking_height = blocking_height
        self.failures = failures


class WrongCategoryError(DomainException):
    """Raised when an attempt type does not apply to the competitor's category."""

    def __init__(
        self,
        competitor_id: str,
        category: str,
        required_category: str,
        context: Optional[ErrorContext] = None
    ):
        message = (
            f"Competitor {competitor_id} is in category '{category}', "
            f"this attempt requires '{required_category}'"
        )
        super().__init__(
            message=message,
            context=context,
            error_code="WRONG_CATEGORY",
            recoverable=False
        )
        self.competitor_id = competitor_id
        self.category = category
        self.required_category = required_category


class AttemptLimitError(DomainException):
    """Raised when a discipline's attempt cap has already been reached."""

    def __init__(
        self,
        competitor_id: str,
        discipline: str,
        limit: int,
        context: Optional[ErrorContext] = None
    ):
        message = f"Maximum number of {discipline} attempts ({limit}) reached"
        super().__init__(
            message=message,
            context=context,
            error_code="ATTEMPT_LIMIT_REACHED",
            recoverable=False
        )
        self.competitor_id = competitor_id
        self.discipline = discipline
        self.limit = limit


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceException(FieldDayException):
    """Base class for document encoding and storage errors."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        error_code: str = "PERSISTENCE_ERROR",
        recoverable: bool = False
    ):
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code=error_code,
            recoverable=recoverable
        )


class DocumentParseError(PersistenceException):
    """Raised when a persisted competition document is malformed."""

    def __init__(
        self,
        cause: str,
        location: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        message = "Failed to parse competition data"
        if location:
            message += f" at {location}"
        message += f": {cause}"
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code="DOCUMENT_PARSE_ERROR",
            recoverable=False
        )
        self.cause = cause
        self.location = location


class StorageIOError(PersistenceException):
    """Raised when reading or writing the competition file fails."""

    def __init__(
        self,
        operation: str,
        path: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        message = f"Failed to {operation} file {path}"
        if original_error:
            message += f": {original_error}"
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code="STORAGE_IO_ERROR",
            recoverable=True
        )
        self.operation = operation
        self.path = path
