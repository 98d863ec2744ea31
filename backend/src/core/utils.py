"""
Core utilities for the FieldDay competition store.
Common functionality used across the entire application.
"""

import sys
import math
import logging
from pathlib import Path
from typing import Any, Optional

from .exceptions import ValidationError

# Constants
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
BACKEND_SRC = PROJECT_ROOT / "backend" / "src"
BACKEND_DIR = PROJECT_ROOT / "backend"


class PathManager:
    """Centralized path management for consistent imports."""

    @staticmethod
    def setup_backend_path():
        """Add backend/src and backend (for the config package) to sys.path."""
        for path in (str(BACKEND_SRC), str(BACKEND_DIR)):
            if path not in sys.path:
                sys.path.insert(0, path)

    @staticmethod
    def ensure_directory(path: Path) -> Path:
        """Create a directory (and parents) if missing and return it."""
        path.mkdir(parents=True, exist_ok=True)
        return path


class LoggerFactory:
    """Centralized logger configuration."""

    _configured = False

    @classmethod
    def setup_logging(cls, level: Optional[str] = None, format_string: Optional[str] = None):
        """Setup application-wide logging configuration."""
        if cls._configured:
            return

        if level is None or format_string is None:
            from config.settings import settings
            level = level or settings.log_level
            format_string = format_string or settings.log_format

        if format_string is None:
            format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format=format_string,
            handlers=[logging.StreamHandler()]
        )
        cls._configured = True

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """Get a configured logger instance."""
        LoggerFactory.setup_logging()
        return logging.getLogger(name)


class DataValidator:
    """Common data validation utilities."""

    @staticmethod
    def validate_real(value: Any, name: str) -> float:
        """Validate a finite real number; ints are widened, bools rejected."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(name, value, "must be a real number")
        try:
            value = float(value)
        except OverflowError:
            raise ValidationError(name, value, "must be finite")
        if not math.isfinite(value):
            raise ValidationError(name, value, "must be finite")
        return value

    @staticmethod
    def validate_bool(value: Any, name: str) -> bool:
        """Validate a boolean flag."""
        if not isinstance(value, bool):
            raise ValidationError(name, value, "must be a boolean")
        return value

    @staticmethod
    def validate_competitor_id(value: Any) -> str:
        """Validate a competitor id. An empty id is well-typed and simply never found."""
        if not isinstance(value, str):
            raise ValidationError("competitor_id", value, "must be a string")
        return value

    @staticmethod
    def validate_name(value: Any, name: str = "name") -> str:
        """Validate a display name."""
        if not isinstance(value, str):
            raise ValidationError(name, value, "must be a string")
        return value


# Setup path management on import
PathManager.setup_backend_path()

# Export commonly used utilities
__all__ = [
    'PathManager',
    'LoggerFactory',
    'DataValidator',
    'PROJECT_ROOT',
    'BACKEND_SRC'
]
