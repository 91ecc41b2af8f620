"""
Pet Service
===========

Purpose
-------
Owns the lifecycle of an owner's ghost: adoption, lookup and the two owner
actions (feed, play). Stat arithmetic is delegated to the progression engine
in ``ghostagotchi.domain.models.pet``; this service adds persistence,
uniqueness checks and locking around it.

Domain
------
- Adopt exactly one pet per owner (implicitly provisioning the profile)
- Fetch the owner's pet together with the public username
- Feed and play under a row lock so concurrent actions never lose XP

Transactions
------------
Reads use ``DatabaseService.get_session()``. Adopt, feed and play each run in
one ``DatabaseService.get_transaction()`` block; feed and play lock the pet
row with ``SELECT ... FOR UPDATE`` before reading its stats.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from sqlalchemy.exc import IntegrityError

from ghostagotchi.core.database.base import utc_now
from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.domain.models.pet import (
    PetSnapshot,
    ProgressionResult,
    feed,
    play,
)
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.profile.repository import ProfileRepository
from ghostagotchi.modules.shared.base_service import BaseService
from ghostagotchi.modules.shared.exceptions import ConflictError, NotFoundError

if TYPE_CHECKING:
    from datetime import datetime
    from logging import Logger

    from ghostagotchi.core.config.config import Config
    from ghostagotchi.database.models import Pet, Profile


PET_ALREADY_EXISTS = "User already has a pet"

_ACTION_MESSAGES = {
    "feed": ("Fed! Your ghost leveled up to {level}! 🎉", "Fed! Your ghost is happy! 👻"),
    "play": ("Played! Your ghost leveled up to {level}! 🎉", "Played! Your ghost is delighted! 👻"),
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def pet_payload(pet: Pet) -> Dict[str, Any]:
    """Serialize a pet row for API responses."""
    return {
        "id": pet.id,
        "owner_id": pet.owner_id,
        "name": pet.name,
        "level": pet.level,
        "experience": pet.experience,
        "hunger": pet.hunger,
        "mood": pet.mood,
        "created_at": _iso(pet.created_at),
        "last_fed_at": _iso(pet.last_fed_at),
        "last_played_at": _iso(pet.last_played_at),
    }


def _with_profile(pet: Pet, profile: Optional[Profile]) -> Dict[str, Any]:
    payload = pet_payload(pet)
    payload["profile"] = {"username": profile.username if profile else None}
    return payload


def action_message(action: str, result: ProgressionResult) -> str:
    """
    User-facing line for a feed or play result.

    A level-up names the new level, e.g. "Fed! Your ghost leveled up to 2! 🎉".
    """
    leveled, steady = _ACTION_MESSAGES[action]
    if result.leveled_up:
        return leveled.format(level=result.level)
    return steady


class PetService(BaseService):
    """
    Service for the owner's ghost pet.

    Public Methods
    --------------
    - get_pet() -> The owner's pet with profile username
    - adopt() -> Create the owner's only pet
    - feed() -> +10 XP, hunger refilled
    - play() -> +5 XP, mood refilled
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
        self._profiles = ProfileRepository(
            logger=get_logger(f"{__name__}.ProfileRepository")
        )

    # ========================================================================
    # PUBLIC API - Read Operations
    # ========================================================================

    async def get_pet(self, owner_id: str) -> Dict[str, Any]:
        """
        Fetch the owner's pet.

        Raises:
            NotFoundError: The owner has not adopted yet
        """
        self.log_operation("get_pet", owner_id=owner_id)

        async with DatabaseService.get_session() as session:
            pet = await self._pets.find_by_owner(session, owner_id)
            if pet is None:
                raise NotFoundError("Pet")

            profile = await self._profiles.get(session, owner_id)
            return _with_profile(pet, profile)

    # ========================================================================
    # PUBLIC API - Write Operations
    # ========================================================================

    async def adopt(self, owner_id: str, name: Any) -> Dict[str, Any]:
        """
        Adopt a new ghost named ``name``.

        The name is validated before the database is touched. The profile row
        is created if this is the identity's first write.

        Raises:
            ValidationError: Name is not a 1-50 character string after trimming
            ConflictError: The owner already has a pet
        """
        snapshot = PetSnapshot.new(owner_id=owner_id, name=name, now=self._clock())

        self.log_operation("adopt", owner_id=owner_id, pet_name=snapshot.name)

        async with DatabaseService.get_transaction() as session:
            await self._profiles.ensure(session, owner_id)

            if await self._pets.find_by_owner(session, owner_id) is not None:
                raise ConflictError("Pet", PET_ALREADY_EXISTS)

            try:
                pet = await self._pets.create(session, snapshot)
            except IntegrityError as exc:
                # Lost the race against a concurrent adopt for the same owner.
                self.log.warning(
                    "Concurrent adopt rejected by unique owner index",
                    extra={"owner_id": owner_id, "error": str(exc.orig)},
                )
                raise ConflictError("Pet", PET_ALREADY_EXISTS) from exc

            profile = await self._profiles.get(session, owner_id)
            payload = _with_profile(pet, profile)

        self.log.info(
            f"Pet adopted: {snapshot.name}",
            extra={"owner_id": owner_id, "pet_id": payload["id"]},
        )
        return payload

    async def feed(self, owner_id: str) -> Dict[str, Any]:
        """
        Feed the owner's pet.

        Returns:
            Dict with ``pet``, ``leveled_up``, ``xp_gained`` and ``message``

        Raises:
            NotFoundError: The owner has no pet
        """
        return await self._apply_action("feed", owner_id, feed)

    async def play(self, owner_id: str) -> Dict[str, Any]:
        """Play with the owner's pet. Same result shape as ``feed``."""
        return await self._apply_action("play", owner_id, play)

    # ========================================================================
    # PRIVATE HELPERS
    # ========================================================================

    async def _apply_action(
        self,
        action: str,
        owner_id: str,
        engine_step: Callable[[PetSnapshot, datetime], ProgressionResult],
    ) -> Dict[str, Any]:
        self.log_operation(action, owner_id=owner_id)

        async with DatabaseService.get_transaction() as session:
            pet = await self._pets.find_by_owner(session, owner_id, for_update=True)
            if pet is None:
                raise NotFoundError("Pet")

            result = engine_step(PetSnapshot.from_row(pet), self._clock())
            result.pet.apply_to(pet)
            await self._pets.flush(session)

            payload = pet_payload(pet)

        if result.leveled_up:
            self.log.info(
                f"Pet leveled up to {result.level}",
                extra={
                    "owner_id": owner_id,
                    "action": action,
                    "old_level": result.previous_level,
                    "new_level": result.level,
                },
            )

        return {
            "pet": payload,
            "leveled_up": result.leveled_up,
            "xp_gained": result.xp_gained,
            "message": action_message(action, result),
        }


__all__ = ["PetService", "action_message", "pet_payload", "PET_ALREADY_EXISTS"]
