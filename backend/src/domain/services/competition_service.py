"""
Competition service: the entry point the command layer calls.

Each mutation runs against the store under its lock and, when autosave is
on, the resulting snapshot is encoded and written afterwards, outside the
lock. A crash between the two steps loses that one mutation.
"""

from typing import Optional, Union

from config.settings import settings
from core.utils import LoggerFactory

from adapters.persistence import competition_codec
from adapters.persistence.file_repository import CompetitionFileRepository

from ..models.base import DisciplineCategory
from ..models.competition import Competition
from .competition_store import CompetitionStore


class CompetitionService:
    """
    Orchestrates the competition store and its file persistence.
    """

    def __init__(
        self,
        store: Optional[CompetitionStore] = None,
        repository: Optional[CompetitionFileRepository] = None,
        autosave: Optional[bool] = None,
        json_indent: Optional[int] = None
    ):
        """
        Initialize service with its collaborators.

        Args:
            store: Competition store; a fresh empty one by default
            repository: File repository; the configured data file by default
            autosave: Persist after every successful mutation
            json_indent: Indentation of the written document
        """
        self.store = store or CompetitionStore()
        self.repository = repository or CompetitionFileRepository()
        self.autosave = settings.autosave if autosave is None else autosave
        self.json_indent = settings.json_indent if json_indent is None else json_indent
        self.logger = LoggerFactory.get_logger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def save(self) -> None:
        """Encode the current snapshot and write it to storage."""
        snapshot = self.store.snapshot()
        text = competition_codec.encode(snapshot, indent=self.json_indent)
        await self.repository.write_text(text)

    async def load(self) -> bool:
        """
        Restore the document saved by a previous run.

        Returns:
            True if a document was found and installed, False if none exists
        """
        text = await self.repository.read_text()
        if text is None:
            return False
        competition = competition_codec.decode(text)
        self.store.install(competition)
        self.logger.info(f"Loaded competition data from {self.repository.path}")
        return True

    async def _after_write(self) -> None:
        if self.autosave:
            await self.save()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_competition(self, name: str) -> Competition:
        competition = self.store.create_competition(name)
        await self._after_write()
        return competition

    async def add_competitor(
        self,
        name: str,
        discipline_category: Union[DisciplineCategory, str]
    ) -> str:
        competitor_id = self.store.add_competitor(name, discipline_category)
        await self._after_write()
        return competitor_id

    async def set_sprint_time(self, competitor_id: str, time: float) -> None:
        self.store.set_sprint_time(competitor_id, time)
        await self._after_write()

    async def set_climbing_time(self, competitor_id: str, time: float) -> None:
        self.store.set_climbing_time(competitor_id, time)
        await self._after_write()

    async def set_shot_put_distance(self, competitor_id: str, distance: float) -> None:
        self.store.set_shot_put_distance(competitor_id, distance)
        await self._after_write()

    async def set_throw_sprint_time(self, competitor_id: str, time: float) -> None:
        self.store.set_throw_sprint_time(competitor_id, time)
        await self._after_write()

    async def record_pole_vault_attempt(
        self,
        competitor_id: str,
        height: float,
        successful: bool
    ) -> None:
        self.store.record_pole_vault_attempt(competitor_id, height, successful)
        await self._after_write()

    async def record_jump_attempt(self, competitor_id: str, distance: float) -> None:
        self.store.record_jump_attempt(competitor_id, distance)
        await self._after_write()

    async def record_shot_attempt(self, competitor_id: str, distance: float) -> None:
        self.store.record_shot_attempt(competitor_id, distance)
        await self._after_write()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_competition_data(self) -> Competition:
        return self.store.snapshot()

    async def highest_cleared_height(self, competitor_id: str) -> Optional[float]:
        return self.store.highest_cleared_height(competitor_id)
