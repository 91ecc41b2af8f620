"""
Pet repository: data access for the ``pets`` table.

No business logic. Services own the transaction; every method here takes the
session it should run in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ghostagotchi.database.models import Pet
from ghostagotchi.modules.shared.base_repository import BaseRepository

if TYPE_CHECKING:
    from logging import Logger

    from sqlalchemy.ext.asyncio import AsyncSession

    from ghostagotchi.domain.models.pet import PetSnapshot


class PetRepository(BaseRepository[Pet]):
    """Repository for the Pet model."""

    def __init__(self, logger: Logger) -> None:
        super().__init__(Pet, logger)

    async def find_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        for_update: bool = False,
    ) -> Optional[Pet]:
        """The owner's pet, optionally row-locked until the transaction ends."""
        return await self.find_one_where(
            session, Pet.owner_id == owner_id, for_update=for_update
        )

    async def find_by_id(self, session: AsyncSession, pet_id: str) -> Optional[Pet]:
        return await self.get(session, pet_id)

    async def create(self, session: AsyncSession, snapshot: PetSnapshot) -> Pet:
        """
        Insert a new pet and flush.

        Raises:
            sqlalchemy.exc.IntegrityError: The owner already has a pet
        """
        pet = Pet(
            owner_id=snapshot.owner_id,
            name=snapshot.name,
            experience=snapshot.experience,
            hunger=snapshot.hunger,
            mood=snapshot.mood,
            created_at=snapshot.created_at,
            updated_at=snapshot.created_at,
        )
        self.add(session, pet)
        await self.flush(session)
        return pet

    async def list_ordered(self, session: AsyncSession, limit: int) -> List[Pet]:
        """
        Top ``limit`` pets by level desc, experience desc, created_at asc.

        Profiles are eager-loaded so owner names can be read outside the query.
        """
        stmt = (
            select(Pet)
            .options(selectinload(Pet.profile))
            .order_by(Pet.level.desc(), Pet.experience.desc(), Pet.created_at.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        pets = list(result.scalars().all())

        self.log.debug(
            "Repository.list_ordered: Pet",
            extra={"model": "Pet", "limit": limit, "found_count": len(pets)},
        )

        return pets
