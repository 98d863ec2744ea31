"""
Domain models for the FieldDay competition store.
"""

from .base import DisciplineCategory, BaseEntity
from .competitor import Competitor, PoleVaultAttempt, JumpAttempt, ShotAttempt
from .competition import Competition

__all__ = [
    # Base models
    "DisciplineCategory",
    "BaseEntity",

    # Competitor models
    "Competitor",
    "PoleVaultAttempt",
    "JumpAttempt",
    "ShotAttempt",

    # Aggregate
    "Competition",
]
