"""
Local file storage for the competition document.
Reads and writes the encoded document text; knows nothing about its schema.
"""
import os
from pathlib import Path
from typing import Optional, Union

import aiofiles

from config.settings import settings
from core.error_handler import error_handler, with_storage_error_handling
from core.exceptions import ConfigurationError
from core.utils import LoggerFactory, PathManager

logger = LoggerFactory.get_logger(__name__)


class CompetitionFileRepository:
    """
    Persists the competition document as a single UTF-8 file.

    Writes go to a temporary sibling that is then renamed over the target,
    so a crash mid-write leaves the previous document intact.
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        file_name: Optional[str] = None
    ):
        self.data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
        self.file_name = file_name or settings.data_file_name
        if not self.file_name or Path(self.file_name).name != self.file_name:
            raise ConfigurationError(
                "data_file_name", f"must be a plain file name, got {self.file_name!r}"
            )
        self.path = self.data_dir / self.file_name

    @property
    def temp_path(self) -> Path:
        return self.path.with_name(f".{self.file_name}.tmp")

    async def exists(self) -> bool:
        return self.path.is_file()

    @with_storage_error_handling("read")
    async def read_text(self) -> Optional[str]:
        """Return the stored document text, or None if nothing was saved yet."""
        if not self.path.exists():
            logger.info(f"No existing data file found at {self.path}")
            return None

        async with aiofiles.open(self.path, 'r', encoding='utf-8') as f:
            text = await f.read()

        logger.debug(f"Read {len(text)} characters from {self.path}")
        return text

    @error_handler.with_retry(
        max_retries=settings.storage_retries,
        delay=settings.storage_retry_delay
    )
    @with_storage_error_handling("write")
    async def write_text(self, text: str) -> None:
        """Replace the stored document with ``text``."""
        PathManager.ensure_directory(self.data_dir)

        try:
            async with aiofiles.open(self.temp_path, 'w', encoding='utf-8') as f:
                await f.write(text)
                await f.flush()
            os.replace(self.temp_path, self.path)
        except OSError:
            self.temp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Saved competition data to {self.path}")
