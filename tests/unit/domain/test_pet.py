"""
Unit tests for the pet progression engine.

Tests level derivation, stat clamping, feed/play rewards and name validation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ghostagotchi.domain.models.pet import (
    FEED_XP,
    PLAY_XP,
    PetSnapshot,
    clamp_stat,
    feed,
    level_for_experience,
    play,
    validate_pet_name,
)
from ghostagotchi.modules.shared.exceptions import ValidationError

NOW = datetime(2025, 10, 31, 12, 0, tzinfo=timezone.utc)


def snapshot(experience=0, hunger=100, mood=100):
    return PetSnapshot(
        owner_id="owner-1",
        name="Casper",
        experience=experience,
        hunger=hunger,
        mood=mood,
        created_at=NOW - timedelta(days=1),
    )


@pytest.mark.unit
@pytest.mark.domain
class TestLevelDerivation:
    """Level is always experience // 100 + 1."""

    @pytest.mark.parametrize(
        "experience,expected",
        [(0, 1), (99, 1), (100, 2), (199, 2), (450, 5), (1000, 11)],
    )
    def test_level_for_experience(self, experience, expected):
        assert level_for_experience(experience) == expected

    def test_negative_experience_rejected(self):
        with pytest.raises(ValueError):
            level_for_experience(-1)

    def test_snapshot_level_tracks_experience(self):
        assert snapshot(experience=250).level == 3

    def test_snapshot_rejects_negative_experience(self):
        with pytest.raises(ValueError):
            snapshot(experience=-10)


@pytest.mark.unit
@pytest.mark.domain
class TestStatClamping:
    """Hunger and mood stay within [0, 100]."""

    @pytest.mark.parametrize("raw,expected", [(-5, 0), (0, 0), (55, 55), (100, 100), (180, 100)])
    def test_clamp_stat(self, raw, expected):
        assert clamp_stat(raw) == expected

    def test_snapshot_clamps_on_construction(self):
        pet = snapshot(hunger=150, mood=-20)

        assert pet.hunger == 100
        assert pet.mood == 0


@pytest.mark.unit
@pytest.mark.domain
class TestAdoption:
    """A new pet starts at level 1 with full stats."""

    def test_new_pet_defaults(self):
        pet = PetSnapshot.new(owner_id="owner-1", name="  Casper  ", now=NOW)

        assert pet.name == "Casper"
        assert pet.experience == 0
        assert pet.level == 1
        assert pet.hunger == 100
        assert pet.mood == 100
        assert pet.created_at == NOW
        assert pet.last_fed_at is None
        assert pet.last_played_at is None
        assert pet.id is None

    @pytest.mark.parametrize("bad_name", [None, "", "   ", 42, "x" * 51])
    def test_invalid_names_rejected(self, bad_name):
        with pytest.raises(ValidationError):
            PetSnapshot.new(owner_id="owner-1", name=bad_name, now=NOW)

    def test_name_length_checked_after_trimming(self):
        name = "  " + "x" * 50 + "  "

        assert validate_pet_name(name) == "x" * 50

    def test_too_long_name_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_pet_name("x" * 51)

        assert exc_info.value.validation_message == "Pet name must be 50 characters or less"

    def test_blank_name_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_pet_name("   ")

        assert exc_info.value.validation_message == "Pet name must be a non-empty string"


@pytest.mark.unit
@pytest.mark.domain
class TestFeed:
    """Feeding awards 10 XP and refills hunger."""

    def test_feed_rewards(self):
        # Arrange
        pet = snapshot(experience=40, hunger=20, mood=30)

        # Act
        result = feed(pet, NOW)

        # Assert
        assert result.xp_gained == FEED_XP
        assert result.pet.experience == 50
        assert result.pet.hunger == 100
        assert result.pet.mood == 30
        assert result.pet.last_fed_at == NOW
        assert result.pet.last_played_at is None
        assert result.leveled_up is False

    def test_feed_crosses_level_boundary(self):
        result = feed(snapshot(experience=95), NOW)

        assert result.pet.experience == 105
        assert result.previous_level == 1
        assert result.level == 2
        assert result.leveled_up is True

    def test_feed_does_not_mutate_input(self):
        pet = snapshot(experience=10, hunger=5)

        feed(pet, NOW)

        assert pet.experience == 10
        assert pet.hunger == 5


@pytest.mark.unit
@pytest.mark.domain
class TestPlay:
    """Playing awards 5 XP and refills mood."""

    def test_play_rewards(self):
        pet = snapshot(experience=0, hunger=40, mood=10)

        result = play(pet, NOW)

        assert result.xp_gained == PLAY_XP
        assert result.pet.experience == 5
        assert result.pet.mood == 100
        assert result.pet.hunger == 40
        assert result.pet.last_played_at == NOW
        assert result.leveled_up is False

    def test_play_level_up_at_exact_boundary(self):
        result = play(snapshot(experience=95), NOW)

        assert result.pet.experience == 100
        assert result.leveled_up is True
        assert result.level == 2

    def test_experience_is_monotonic_over_many_actions(self):
        pet = snapshot()
        seen = [pet.experience]

        for step in range(30):
            action = feed if step % 2 else play
            pet = action(pet, NOW).pet
            seen.append(pet.experience)

        assert seen == sorted(seen)
        assert pet.experience == 15 * FEED_XP + 15 * PLAY_XP


@pytest.mark.unit
@pytest.mark.domain
class TestRowConversion:
    """Snapshots round-trip through ORM rows."""

    def test_from_row_and_apply_to(self, pet_factory):
        row = pet_factory(experience=90, hunger=10)

        result = feed(PetSnapshot.from_row(row), NOW)
        result.pet.apply_to(row)

        assert row.experience == 100
        assert row.level == 2
        assert row.hunger == 100
        assert row.last_fed_at == NOW
        assert row.name == "Casper"
