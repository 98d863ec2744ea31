"""
Competitor domain models: one athlete and the results recorded for them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import BaseEntity, DisciplineCategory


@dataclass(frozen=True)
class PoleVaultAttempt:
    """A single pole vault attempt at a given bar height (metres)."""
    height: float
    successful: bool

    @property
    def failed(self) -> bool:
        return not self.successful

    @property
    def symbol(self) -> str:
        """Scoreboard notation: 'o' for a clearance, 'x' for a miss."""
        return "o" if self.successful else "x"


@dataclass(frozen=True)
class JumpAttempt:
    """A single jump attempt (metres)."""
    distance: float


@dataclass(frozen=True)
class ShotAttempt:
    """A single shot put attempt (metres)."""
    distance: float


@dataclass(frozen=True)
class Competitor(BaseEntity):
    """
    One athlete's identity plus their recorded results.

    Every result field is None until something has been recorded for it.
    Attempt sequences are tuples in chronological order.
    """
    name: str = ""
    discipline_category: DisciplineCategory = DisciplineCategory.TRACK_VAULT

    # Track / vault disciplines
    pole_vault_attempts: Optional[Tuple[PoleVaultAttempt, ...]] = None
    sprint_time: Optional[float] = None  # Seconds
    climbing_time: Optional[float] = None  # Seconds

    # Field / throw disciplines
    jump_attempts: Optional[Tuple[JumpAttempt, ...]] = None
    shot_distance: Optional[float] = None  # Metres
    shot_attempts: Optional[Tuple[ShotAttempt, ...]] = None
    throw_sprint_time: Optional[float] = None  # Seconds

    def __post_init__(self):
        """Normalize category tags and attempt sequences."""
        if not isinstance(self.discipline_category, DisciplineCategory):
            object.__setattr__(
                self, 'discipline_category',
                DisciplineCategory.from_value(self.discipline_category)
            )
        for name in ('pole_vault_attempts', 'jump_attempts', 'shot_attempts'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @property
    def is_field_throw(self) -> bool:
        return self.discipline_category is DisciplineCategory.FIELD_THROW

    @property
    def pole_vault_attempt_count(self) -> int:
        return len(self.pole_vault_attempts or ())

    @property
    def jump_attempt_count(self) -> int:
        return len(self.jump_attempts or ())

    @property
    def shot_attempt_count(self) -> int:
        return len(self.shot_attempts or ())

    def highest_cleared_height(self) -> Optional[float]:
        """Maximum height among successful pole vault attempts, if any."""
        cleared = [a.height for a in self.pole_vault_attempts or () if a.successful]
        return max(cleared) if cleared else None

    def best_jump_distance(self) -> Optional[float]:
        distances = [a.distance for a in self.jump_attempts or ()]
        return max(distances) if distances else None

    def best_shot_distance(self) -> Optional[float]:
        distances = [a.distance for a in self.shot_attempts or ()]
        return max(distances) if distances else None
