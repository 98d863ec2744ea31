"""
Base domain models and common patterns for the competition store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union
import uuid


class DisciplineCategory(str, Enum):
    """
    Closed set of competitor categories.
    The value is the tag written to the persisted document.
    """
    TRACK_VAULT = "Stab"
    FIELD_THROW = "Wurf"

    @classmethod
    def from_value(cls, value: Union[str, 'DisciplineCategory']) -> 'DisciplineCategory':
        """
        Resolve a category from the enum itself, its persisted tag ("Stab")
        or its member name ("track_vault", case-insensitive).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value == member.value or value.upper() == member.name:
                    return member
        raise ValueError(f"Unknown discipline category: {value!r}")


@dataclass(frozen=True)
class BaseEntity:
    """
    Base entity class for domain models with an opaque string identifier.
    """
    id: str

    @staticmethod
    def new_id() -> str:
        """Generate a new globally unique identifier."""
        return str(uuid.uuid4())
