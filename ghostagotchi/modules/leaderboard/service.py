"""
Leaderboard Service
===================

Purpose
-------
Public ranking of every ghost by progression. Read-only and computed fresh
on every call; nothing is cached or snapshotted.

Ordering
--------
Level desc, experience desc, created_at asc. The database applies the same
order to pick the top rows; the final order is then fixed in Python with one
composite key so ties resolve identically whatever the store returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List

from ghostagotchi.core.database.base import utc_now
from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.domain.models.ranking import (
    ANONYMOUS_OWNER,
    clamp_limit,
    format_age,
    ranking_key,
)
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.shared.base_service import BaseService

if TYPE_CHECKING:
    from datetime import datetime
    from logging import Logger

    from ghostagotchi.core.config.config import Config
    from ghostagotchi.database.models import Pet


class LeaderboardService(BaseService):
    """
    Service for the public pet ranking.

    Public Methods
    --------------
    - list_top() -> Ranked rows plus total and computation timestamp
    """

    def __init__(
        self,
        config: type[Config],
        logger: Logger,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(config, logger)
        self._clock = clock
        self._pets = PetRepository(logger=get_logger(f"{__name__}.PetRepository"))

    async def list_top(self, raw_limit: Any = None) -> Dict[str, Any]:
        """
        Top pets, best first.

        This is a **read-only** operation using get_session().

        Args:
            raw_limit: Caller-supplied row count; clamped to [1, max], and
                replaced by the default when absent or not a number

        Returns:
            Dict containing:
                - leaderboard: rows with rank, ghost_name, level, experience,
                  owner and age
                - total: number of rows returned
                - last_updated: ISO-8601 time the ranking was computed
        """
        limit = clamp_limit(
            raw_limit,
            default=self.get_config("LEADERBOARD_DEFAULT_LIMIT", 10),
            maximum=self.get_config("LEADERBOARD_MAX_LIMIT", 50),
        )

        self.log_operation("list_top", limit=limit)

        async with DatabaseService.get_session() as session:
            pets = await self._pets.list_ordered(session, limit)
            now = self._clock()
            rows = self.rank_rows(pets, now)

        return {
            "leaderboard": rows,
            "total": len(rows),
            "last_updated": now.isoformat(),
        }

    @staticmethod
    def _row(rank: int, pet: Pet, now: datetime) -> Dict[str, Any]:
        username = pet.profile.username if pet.profile else None
        return {
            "rank": rank,
            "ghost_name": pet.name,
            "level": pet.level,
            "experience": pet.experience,
            "owner": username or ANONYMOUS_OWNER,
            "age": format_age(pet.created_at, now),
        }

    def rank_rows(self, pets: List[Pet], now: datetime) -> List[Dict[str, Any]]:
        """Rank already-loaded pets without touching the database."""
        ordered = sorted(
            pets, key=lambda p: ranking_key(p.level, p.experience, p.created_at)
        )
        return [self._row(rank, pet, now) for rank, pet in enumerate(ordered, 1)]


__all__ = ["LeaderboardService"]
