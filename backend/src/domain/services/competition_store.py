"""
Competition store: the single in-memory competition document and the rules
governing how results are recorded against it.

All reads and writes go through one lock. Operations never perform I/O or
suspend while holding it; persistence is the caller's job and works on
``snapshot()``.
"""

import threading
from collections import Counter
from dataclasses import replace
from typing import Callable, Iterable, Optional, Tuple, Union

from core.utils import LoggerFactory, DataValidator
from core.exceptions import (
    CompetitorNotFoundError, EliminationRuleError, WrongCategoryError,
    AttemptLimitError, ValidationError
)
from core.error_handler import with_domain_error_handling

from ..models.base import BaseEntity, DisciplineCategory
from ..models.competition import Competition
from ..models.competitor import Competitor, PoleVaultAttempt, JumpAttempt, ShotAttempt

MAX_JUMP_ATTEMPTS = 2
MAX_SHOT_ATTEMPTS = 5
ELIMINATION_FAILURES = 3


def find_elimination_height(
    attempts: Iterable[PoleVaultAttempt],
    height: float,
    threshold: int = ELIMINATION_FAILURES
) -> Optional[Tuple[float, int]]:
    """
    Return (lower_height, failures) for the first height strictly below
    ``height`` that has at least ``threshold`` failed attempts, or None.

    Failures are counted per height with exact equality; successes are ignored.
    """
    failures = Counter(a.height for a in attempts if a.failed and a.height < height)
    for lower_height, count in failures.items():
        if count >= threshold:
            return lower_height, count
    return None


class CompetitionStore:
    """
    Owns the competition document and routes every mutation through its
    method set under mutual exclusion.
    """

    def __init__(self, competition: Optional[Competition] = None):
        self._competition = competition if competition is not None else Competition()
        self._lock = threading.Lock()
        self.logger = LoggerFactory.get_logger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @with_domain_error_handling
    def create_competition(self, name: str) -> Competition:
        """Replace the whole document with a fresh, empty competition."""
        name = DataValidator.validate_name(name)
        competition = Competition(name=name)
        with self._lock:
            self._competition = competition
        self.logger.info(f"Created new competition '{name}'")
        return competition

    @with_domain_error_handling
    def install(self, competition: Competition) -> None:
        """Replace the whole document with one restored from storage."""
        if not isinstance(competition, Competition):
            raise ValidationError("competition", competition, "must be a Competition")
        duplicates = competition.duplicate_ids()
        if duplicates:
            raise ValidationError(
                "competitors", list(duplicates), "competitor ids must be unique"
            )
        with self._lock:
            self._competition = competition
        self.logger.info(
            f"Installed competition '{competition.name}' "
            f"with {len(competition.competitors)} competitors"
        )

    def snapshot(self) -> Competition:
        """Current document. Values are immutable, so no copy is needed."""
        with self._lock:
            return self._competition

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @with_domain_error_handling
    def add_competitor(
        self,
        name: str,
        discipline_category: Union[DisciplineCategory, str]
    ) -> str:
        """Append a competitor with no results and return its new id."""
        name = DataValidator.validate_name(name)
        try:
            category = DisciplineCategory.from_value(discipline_category)
        except ValueError:
            raise ValidationError(
                "discipline_category", discipline_category,
                f"must be one of {[c.value for c in DisciplineCategory]}"
            )

        with self._lock:
            existing = set(self._competition.competitor_ids)
            competitor_id = BaseEntity.new_id()
            while competitor_id in existing:
                competitor_id = BaseEntity.new_id()
            competitor = Competitor(
                id=competitor_id, name=name, discipline_category=category
            )
            self._competition = self._competition.with_competitor(competitor)

        self.logger.info(f"Added competitor '{name}' ({category.value}) as {competitor_id}")
        return competitor_id

    @with_domain_error_handling
    def get_competitor(self, competitor_id: str) -> Competitor:
        competitor_id = DataValidator.validate_competitor_id(competitor_id)
        competitor = self.snapshot().find(competitor_id)
        if competitor is None:
            raise CompetitorNotFoundError(competitor_id)
        return competitor

    # ------------------------------------------------------------------
    # Overwritable results
    # ------------------------------------------------------------------

    @with_domain_error_handling
    def set_sprint_time(self, competitor_id: str, time: float) -> None:
        time = DataValidator.validate_real(time, "time")
        self._update(competitor_id, lambda c: replace(c, sprint_time=time))
        self.logger.info(f"Set sprint time {time} for {competitor_id}")

    @with_domain_error_handling
    def set_climbing_time(self, competitor_id: str, time: float) -> None:
        time = DataValidator.validate_real(time, "time")
        self._update(competitor_id, lambda c: replace(c, climbing_time=time))
        self.logger.info(f"Set climbing time {time} for {competitor_id}")

    @with_domain_error_handling
    def set_shot_put_distance(self, competitor_id: str, distance: float) -> None:
        distance = DataValidator.validate_real(distance, "distance")
        self._update(competitor_id, lambda c: replace(c, shot_distance=distance))
        self.logger.info(f"Set shot put distance {distance} for {competitor_id}")

    @with_domain_error_handling
    def set_throw_sprint_time(self, competitor_id: str, time: float) -> None:
        """Sprint time of the field/throw programme, kept apart from ``sprint_time``."""
        time = DataValidator.validate_real(time, "time")
        self._update(competitor_id, lambda c: replace(c, throw_sprint_time=time))
        self.logger.info(f"Set throw sprint time {time} for {competitor_id}")

    # ------------------------------------------------------------------
    # Attempts
    # ------------------------------------------------------------------

    @with_domain_error_handling
    def record_pole_vault_attempt(
        self,
        competitor_id: str,
        height: float,
        successful: bool
    ) -> None:
        """
        Append a pole vault attempt.

        Raises EliminationRuleError if the competitor already has three or more
        failures at any single height strictly lower than ``height``.
        """
        height = DataValidator.validate_real(height, "height")
        successful = DataValidator.validate_bool(successful, "successful")

        def add_attempt(competitor: Competitor) -> Competitor:
            attempts = competitor.pole_vault_attempts or ()
            blocker = find_elimination_height(attempts, height)
            if blocker is not None:
                lower_height, failures = blocker
                raise EliminationRuleError(competitor.id, height, lower_height, failures)
            attempt = PoleVaultAttempt(height=height, successful=successful)
            return replace(competitor, pole_vault_attempts=attempts + (attempt,))

        try:
            self._update(competitor_id, add_attempt)
        except EliminationRuleError as e:
            self.logger.warning(f"Rejected pole vault attempt for {competitor_id}: {e}")
            raise
        self.logger.info(
            f"Recorded pole vault attempt {height} "
            f"({'cleared' if successful else 'failed'}) for {competitor_id}"
        )

    @with_domain_error_handling
    def record_jump_attempt(self, competitor_id: str, distance: float) -> None:
        """Append a jump attempt; field/throw competitors only, at most two."""
        distance = DataValidator.validate_real(distance, "distance")

        def add_attempt(competitor: Competitor) -> Competitor:
            self._require_field_throw(competitor)
            attempts = competitor.jump_attempts or ()
            if competitor.jump_attempt_count >= MAX_JUMP_ATTEMPTS:
                raise AttemptLimitError(competitor.id, "jump", MAX_JUMP_ATTEMPTS)
            return replace(competitor, jump_attempts=attempts + (JumpAttempt(distance),))

        self._update(competitor_id, add_attempt)
        self.logger.info(f"Recorded jump attempt {distance} for {competitor_id}")

    @with_domain_error_handling
    def record_shot_attempt(self, competitor_id: str, distance: float) -> None:
        """Append a shot put attempt; field/throw competitors only, at most five."""
        distance = DataValidator.validate_real(distance, "distance")

        def add_attempt(competitor: Competitor) -> Competitor:
            self._require_field_throw(competitor)
            attempts = competitor.shot_attempts or ()
            if competitor.shot_attempt_count >= MAX_SHOT_ATTEMPTS:
                raise AttemptLimitError(competitor.id, "shot put", MAX_SHOT_ATTEMPTS)
            return replace(competitor, shot_attempts=attempts + (ShotAttempt(distance),))

        self._update(competitor_id, add_attempt)
        self.logger.info(f"Recorded shot put attempt {distance} for {competitor_id}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def highest_cleared_height(self, competitor_id: str) -> Optional[float]:
        """
        Best successful pole vault height.

        An unknown competitor and a competitor without a clearance both
        yield None.
        """
        competitor = self.snapshot().find(competitor_id)
        if competitor is None:
            return None
        return competitor.highest_cleared_height()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update(
        self,
        competitor_id: str,
        mutate: Callable[[Competitor], Competitor]
    ) -> Competitor:
        """
        Swap in ``mutate(competitor)`` under the lock. If ``mutate`` raises,
        the document is left untouched.
        """
        competitor_id = DataValidator.validate_competitor_id(competitor_id)
        with self._lock:
            competitor = self._competition.find(competitor_id)
            if competitor is None:
                raise CompetitorNotFoundError(competitor_id)
            updated = mutate(competitor)
            self._competition = self._competition.with_replaced(updated)
        return updated

    @staticmethod
    def _require_field_throw(competitor: Competitor) -> None:
        if not competitor.is_field_throw:
            raise WrongCategoryError(
                competitor.id,
                competitor.discipline_category.value,
                DisciplineCategory.FIELD_THROW.value
            )
