"""
Persistence adapters: the JSON document codec and local file storage.
"""

from . import competition_codec
from .competition_codec import encode, decode
from .file_repository import CompetitionFileRepository

__all__ = [
    "competition_codec",
    "encode",
    "decode",
    "CompetitionFileRepository",
]
