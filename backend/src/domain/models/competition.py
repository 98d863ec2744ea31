"""
Competition aggregate: the roster of competitors for one meet.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .competitor import Competitor


@dataclass(frozen=True)
class Competition:
    """
    Root aggregate. Competitors keep insertion order and are never re-sorted;
    ids are unique within a competition.
    """
    name: str = ""
    competitors: Tuple[Competitor, ...] = ()

    def __post_init__(self):
        if not isinstance(self.competitors, tuple):
            object.__setattr__(self, 'competitors', tuple(self.competitors))

    @property
    def competitor_ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.competitors)

    def duplicate_ids(self) -> Tuple[str, ...]:
        """Ids appearing more than once, in roster order."""
        seen = set()
        duplicates = []
        for competitor_id in self.competitor_ids:
            if competitor_id in seen and competitor_id not in duplicates:
                duplicates.append(competitor_id)
            seen.add(competitor_id)
        return tuple(duplicates)

    def find(self, competitor_id: str) -> Optional[Competitor]:
        """Get the competitor with the given id, or None."""
        for competitor in self.competitors:
            if competitor.id == competitor_id:
                return competitor
        return None

    def with_competitor(self, competitor: Competitor) -> 'Competition':
        """Return a copy with the competitor appended to the roster."""
        return replace(self, competitors=self.competitors + (competitor,))

    def with_replaced(self, competitor: Competitor) -> 'Competition':
        """Return a copy with the competitor of the same id swapped in place."""
        return replace(
            self,
            competitors=tuple(
                competitor if c.id == competitor.id else c
                for c in self.competitors
            )
        )
