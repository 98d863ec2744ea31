"""
Leaderboard rankings computed from a competition snapshot.

Rankings are pure functions of the document; nothing here touches the store
lock. Ties keep roster order.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..models.base import DisciplineCategory
from ..models.competition import Competition
from ..models.competitor import Competitor

POLE_VAULT_WEIGHT = 10.0
SHOT_PUT_WEIGHT = 1.3
JUMP_DIVISOR = 2.0


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked row of a leaderboard."""
    rank: int
    competitor_id: str
    name: str
    value: float
    detail: str = ""


def _rank(
    rows: Iterable[Competitor],
    value: Callable[[Competitor], float],
    descending: bool,
    detail: Callable[[Competitor], str] = lambda c: ""
) -> List[LeaderboardEntry]:
    ordered = sorted(rows, key=value, reverse=descending)
    return [
        LeaderboardEntry(
            rank=index + 1,
            competitor_id=c.id,
            name=c.name,
            value=value(c),
            detail=detail(c)
        )
        for index, c in enumerate(ordered)
    ]


def _in_category(competition: Competition, category: DisciplineCategory) -> List[Competitor]:
    return [c for c in competition.competitors if c.discipline_category is category]


def _or_zero(value: Optional[float]) -> float:
    return value if value is not None else 0.0


def attempts_at_best_height(competitor: Competitor) -> str:
    """'o'/'x' sequence of the attempts at the competitor's best cleared height."""
    best = _or_zero(competitor.highest_cleared_height())
    return " ".join(
        a.symbol for a in competitor.pole_vault_attempts or () if a.height == best
    )


class LeaderboardService:
    """
    Ranking rules for each discipline and for the two combined programmes.
    """

    @staticmethod
    def pole_vault_ranking(competition: Competition) -> List[LeaderboardEntry]:
        """
        Track/vault competitors: those who attempted first, then best cleared
        height (higher first), then fewer total attempts.
        """
        competitors = _in_category(competition, DisciplineCategory.TRACK_VAULT)
        ordered = sorted(
            competitors,
            key=lambda c: (
                c.pole_vault_attempt_count == 0,
                -_or_zero(c.highest_cleared_height()),
                c.pole_vault_attempt_count,
            )
        )
        return [
            LeaderboardEntry(
                rank=index + 1,
                competitor_id=c.id,
                name=c.name,
                value=_or_zero(c.highest_cleared_height()),
                detail=attempts_at_best_height(c)
            )
            for index, c in enumerate(ordered)
        ]

    @staticmethod
    def sprint_ranking(competition: Competition) -> List[LeaderboardEntry]:
        """Track/vault competitors with a sprint time, fastest first."""
        timed = [
            c for c in _in_category(competition, DisciplineCategory.TRACK_VAULT)
            if c.sprint_time is not None
        ]
        return _rank(timed, lambda c: c.sprint_time, descending=False)

    @staticmethod
    def climbing_ranking(competition: Competition) -> List[LeaderboardEntry]:
        """All competitors with a climbing time, fastest first."""
        timed = [c for c in competition.competitors if c.climbing_time is not None]
        return _rank(timed, lambda c: c.climbing_time, descending=False)

    @staticmethod
    def shot_put_ranking(competition: Competition) -> List[LeaderboardEntry]:
        """Field/throw competitors by best shot put attempt, longest first."""
        return _rank(
            _in_category(competition, DisciplineCategory.FIELD_THROW),
            lambda c: _or_zero(c.best_shot_distance()),
            descending=True,
            detail=lambda c: " ".join(f"{a.distance:.2f}" for a in c.shot_attempts or ())
        )

    @staticmethod
    def track_vault_score(competitor: Competitor) -> float:
        """Best height x 10 minus climbing and sprint times; missing values count as 0."""
        return (
            _or_zero(competitor.highest_cleared_height()) * POLE_VAULT_WEIGHT
            - _or_zero(competitor.climbing_time)
            - _or_zero(competitor.sprint_time)
        )

    @staticmethod
    def field_throw_score(competitor: Competitor) -> float:
        """Best shot x 1.3 plus half the best jump minus the throw sprint time."""
        return (
            _or_zero(competitor.best_shot_distance()) * SHOT_PUT_WEIGHT
            + _or_zero(competitor.best_jump_distance()) / JUMP_DIVISOR
            - _or_zero(competitor.throw_sprint_time)
        )

    @classmethod
    def track_vault_overall(cls, competition: Competition) -> List[LeaderboardEntry]:
        return _rank(
            _in_category(competition, DisciplineCategory.TRACK_VAULT),
            cls.track_vault_score,
            descending=True
        )

    @classmethod
    def field_throw_overall(cls, competition: Competition) -> List[LeaderboardEntry]:
        return _rank(
            _in_category(competition, DisciplineCategory.FIELD_THROW),
            cls.field_throw_score,
            descending=True
        )
