"""
Domain services for the FieldDay competition store.
Contains the store, its persistence orchestration, and leaderboards.
"""

from .competition_store import CompetitionStore, find_elimination_height
from .competition_service import CompetitionService
from .leaderboard_service import LeaderboardService, LeaderboardEntry

__all__ = [
    "CompetitionStore",
    "find_elimination_height",
    "CompetitionService",
    "LeaderboardService",
    "LeaderboardEntry",
]
