"""
Pet Domain Model: the progression engine.

Purpose
-------
Pure stat and leveling arithmetic over an immutable pet snapshot. Nothing in
this module touches the database, the clock or the network; callers pass
``now`` in and persist the returned snapshot themselves.

Rules
-----
- ``level == experience // 100 + 1``, always derived, never stored.
- Experience only grows: feed adds 10, play adds 5.
- Feed refills hunger to 100; play refills mood to 100.
- Hunger and mood are clamped to [0, 100] whatever the input.
- No cooldowns and no decay: stats change only when an action is applied.

Usage Example
-------------
>>> pet = PetSnapshot.new(owner_id="42", name="Casper", now=now)
>>> result = feed(pet, now)
>>> result.pet.experience, result.leveled_up, result.xp_gained
(10, False, 10)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from ghostagotchi.modules.shared.validators import InputValidator

if TYPE_CHECKING:
    from ghostagotchi.database.models.pet import Pet as PetRow


XP_PER_LEVEL = 100
FEED_XP = 10
PLAY_XP = 5
STAT_MIN = 0
STAT_MAX = 100
PET_NAME_MAX_LENGTH = 50


def level_for_experience(experience: int) -> int:
    """
    Level reached with ``experience`` cumulative points.

    >>> [level_for_experience(e) for e in (0, 99, 100, 450)]
    [1, 1, 2, 5]
    """
    if experience < 0:
        raise ValueError(f"experience cannot be negative, got {experience}")
    return experience // XP_PER_LEVEL + 1


def clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, value))


def validate_pet_name(name: Any) -> str:
    """
    Return the trimmed pet name.

    Raises:
        ValidationError: if ``name`` is not a string, is blank, or is longer
            than 50 characters once trimmed.
    """
    return InputValidator.validate_text(
        name,
        field_name="name",
        label="Pet name",
        max_length=PET_NAME_MAX_LENGTH,
    )


@dataclass(frozen=True)
class PetSnapshot:
    """
    Immutable view of one pet's state.

    ``id`` is None for a pet that has not been persisted yet.
    """

    owner_id: str
    name: str
    experience: int
    hunger: int
    mood: int
    created_at: datetime
    id: Optional[str] = None
    last_fed_at: Optional[datetime] = None
    last_played_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.experience < 0:
            raise ValueError(f"experience cannot be negative, got {self.experience}")
        object.__setattr__(self, "hunger", clamp_stat(self.hunger))
        object.__setattr__(self, "mood", clamp_stat(self.mood))

    @property
    def level(self) -> int:
        return level_for_experience(self.experience)

    @classmethod
    def new(cls, owner_id: str, name: str, now: datetime) -> PetSnapshot:
        """A freshly adopted pet: level 1, full hunger and mood."""
        return cls(
            owner_id=owner_id,
            name=validate_pet_name(name),
            experience=0,
            hunger=STAT_MAX,
            mood=STAT_MAX,
            created_at=now,
        )

    @classmethod
    def from_row(cls, row: PetRow) -> PetSnapshot:
        return cls(
            id=row.id,
            owner_id=row.owner_id,
            name=row.name,
            experience=row.experience,
            hunger=row.hunger,
            mood=row.mood,
            created_at=row.created_at,
            last_fed_at=row.last_fed_at,
            last_played_at=row.last_played_at,
        )

    def apply_to(self, row: PetRow) -> None:
        """Copy the mutable stats onto an ORM row."""
        row.experience = self.experience
        row.hunger = self.hunger
        row.mood = self.mood
        row.last_fed_at = self.last_fed_at
        row.last_played_at = self.last_played_at


@dataclass(frozen=True)
class ProgressionResult:
    """Outcome of one action: the new snapshot, whether it leveled, and the XP added."""

    pet: PetSnapshot
    previous_level: int
    xp_gained: int

    @property
    def leveled_up(self) -> bool:
        return self.pet.level > self.previous_level

    @property
    def level(self) -> int:
        return self.pet.level


def _award(pet: PetSnapshot, xp: int, **changes: Any) -> ProgressionResult:
    updated = replace(pet, experience=pet.experience + xp, **changes)
    return ProgressionResult(pet=updated, previous_level=pet.level, xp_gained=xp)


def feed(pet: PetSnapshot, now: datetime) -> ProgressionResult:
    """
    Feed the pet: +10 XP, hunger back to 100, ``last_fed_at = now``.

    A pet at 95 XP ends at 105 XP and levels from 1 to 2.
    """
    return _award(pet, FEED_XP, hunger=STAT_MAX, last_fed_at=now)


def play(pet: PetSnapshot, now: datetime) -> ProgressionResult:
    """Play with the pet: +5 XP, mood back to 100, ``last_played_at = now``."""
    return _award(pet, PLAY_XP, mood=STAT_MAX, last_played_at=now)
