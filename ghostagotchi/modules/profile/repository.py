"""
Profile repository: data access for the ``profiles`` table.

Profiles are created lazily, the first time an identity adopts a pet or sets
a username, so both writers go through PostgreSQL upserts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy.dialects.postgresql import insert as pg_insert

from ghostagotchi.core.database.base import utc_now
from ghostagotchi.database.models import Profile
from ghostagotchi.modules.shared.base_repository import BaseRepository

if TYPE_CHECKING:
    from logging import Logger

    from sqlalchemy.ext.asyncio import AsyncSession


class ProfileRepository(BaseRepository[Profile]):
    """Repository for the Profile model."""

    def __init__(self, logger: Logger) -> None:
        super().__init__(Profile, logger)

    async def find_by_username(
        self, session: AsyncSession, username: str
    ) -> Optional[Profile]:
        return await self.find_one_where(session, Profile.username == username)

    async def ensure(self, session: AsyncSession, owner_id: str) -> None:
        """Create an empty profile for ``owner_id`` unless one exists."""
        now = utc_now()
        stmt = (
            pg_insert(Profile)
            .values(id=owner_id, username=None, created_at=now, updated_at=now)
            .on_conflict_do_nothing(index_elements=[Profile.id])
        )
        await session.execute(stmt)

        self.log.debug(
            "Repository.ensure: Profile",
            extra={"model": "Profile", "owner_id": owner_id},
        )

    async def upsert_username(
        self, session: AsyncSession, owner_id: str, username: str
    ) -> Profile:
        """
        Set the username, creating the profile if needed.

        Raises:
            sqlalchemy.exc.IntegrityError: Another profile holds ``username``
        """
        now = utc_now()
        stmt = pg_insert(Profile).values(
            id=owner_id, username=username, created_at=now, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Profile.id],
            set_={"username": stmt.excluded.username, "updated_at": now},
        )
        await session.execute(stmt)

        profile = await session.get(Profile, owner_id, populate_existing=True)

        self.log.debug(
            "Repository.upsert_username: Profile",
            extra={"model": "Profile", "owner_id": owner_id},
        )

        return profile
