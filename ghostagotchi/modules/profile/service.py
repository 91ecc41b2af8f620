"""
Profile Service
===============

Purpose
-------
Manages the public identity record attached to each owner: currently just
the optional, globally unique username shown on the leaderboard.

Rules
-----
- Username: trimmed, 3 to 20 characters, letters, digits, ``_`` and ``-``
- Uniqueness is checked before the write and enforced by a unique index;
  losing a race to a concurrent writer is still reported as a conflict
- Profiles are upserted, so setting a username also provisions the profile
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.modules.profile.repository import ProfileRepository
from ghostagotchi.modules.shared.base_service import BaseService
from ghostagotchi.modules.shared.exceptions import ConflictError
from ghostagotchi.modules.shared.validators import InputValidator

if TYPE_CHECKING:
    from logging import Logger

    from ghostagotchi.core.config.config import Config
    from ghostagotchi.database.models import Profile


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = r"[A-Za-z0-9_-]+"
USERNAME_TAKEN = "Username is already taken"


def validate_username(username: Any) -> str:
    """
    Return the trimmed username.

    Raises:
        ValidationError: Wrong type, length or characters
    """
    return InputValidator.validate_text(
        username,
        field_name="username",
        label="Username",
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
        pattern_message=(
            "Username can only contain letters, numbers, underscores, and hyphens"
        ),
    )


def profile_payload(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "username": profile.username,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
        "updated_at": profile.updated_at.isoformat() if profile.updated_at else None,
    }


class ProfileService(BaseService):
    """
    Service for owner profiles.

    Public Methods
    --------------
    - get_profile() -> The owner's profile, or None
    - update_username() -> Validate and set a unique username
    """

    def __init__(self, config: type[Config], logger: Logger) -> None:
        super().__init__(config, logger)
        self._profiles = ProfileRepository(
            logger=get_logger(f"{__name__}.ProfileRepository")
        )

    async def get_profile(self, owner_id: str) -> Optional[Dict[str, Any]]:
        self.log_operation("get_profile", owner_id=owner_id)

        async with DatabaseService.get_session() as session:
            profile = await self._profiles.get(session, owner_id)
            return profile_payload(profile) if profile else None

    async def update_username(self, owner_id: str, username: Any) -> Dict[str, Any]:
        """
        Set the owner's username, creating the profile if needed.

        Setting the username the owner already holds is a no-op success.

        Raises:
            ValidationError: Username fails the format rules
            ConflictError: Another owner holds the username
        """
        username = validate_username(username)

        self.log_operation("update_username", owner_id=owner_id, username=username)

        async with DatabaseService.get_transaction() as session:
            holder = await self._profiles.find_by_username(session, username)
            if holder is not None and holder.id != owner_id:
                raise ConflictError("Username", USERNAME_TAKEN)

            try:
                profile = await self._profiles.upsert_username(
                    session, owner_id, username
                )
            except IntegrityError as exc:
                self.log.warning(
                    "Concurrent username claim rejected by unique index",
                    extra={"owner_id": owner_id, "username": username},
                )
                raise ConflictError("Username", USERNAME_TAKEN) from exc

            return profile_payload(profile)


__all__ = ["ProfileService", "validate_username", "USERNAME_TAKEN"]
