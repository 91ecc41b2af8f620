"""
Unit tests for PetService.

Repositories are replaced with autospecced mocks and DatabaseService is
routed to a mock session, so these tests exercise the orchestration only:
validation order, conflict handling, locking and response shaping.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from ghostagotchi.database.models import Profile
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.pet.service import PET_ALREADY_EXISTS, PetService
from ghostagotchi.modules.profile.repository import ProfileRepository
from ghostagotchi.modules.shared.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def pet_service(mocker, service_config, service_logger, clock, patched_database):
    service = PetService(service_config, service_logger, clock=clock)
    service._pets = mocker.MagicMock(spec=PetRepository)
    service._profiles = mocker.MagicMock(spec=ProfileRepository)
    service._profiles.get.return_value = None
    return service


@pytest.mark.unit
class TestGetPet:
    """Fetching the owner's pet."""

    async def test_returns_pet_with_username(self, pet_service, pet_factory):
        # Arrange
        pet_service._pets.find_by_owner.return_value = pet_factory(experience=150)
        pet_service._profiles.get.return_value = Profile(id="owner-1", username="spooky")

        # Act
        payload = await pet_service.get_pet("owner-1")

        # Assert
        assert payload["name"] == "Casper"
        assert payload["level"] == 2
        assert payload["experience"] == 150
        assert payload["profile"] == {"username": "spooky"}
        assert payload["last_fed_at"] is None

    async def test_profile_username_is_none_without_profile(self, pet_service, pet_factory):
        pet_service._pets.find_by_owner.return_value = pet_factory()

        payload = await pet_service.get_pet("owner-1")

        assert payload["profile"] == {"username": None}

    async def test_missing_pet_raises_not_found(self, pet_service):
        pet_service._pets.find_by_owner.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await pet_service.get_pet("owner-1")

        assert exc_info.value.resource_type == "Pet"


@pytest.mark.unit
class TestAdopt:
    """Adoption: one pet per owner, validated name."""

    async def test_adopt_creates_pet_and_profile(self, pet_service, pet_factory, fixed_now):
        # Arrange
        pet_service._pets.find_by_owner.return_value = None
        pet_service._pets.create.return_value = pet_factory(name="Boo", created_at=fixed_now)

        # Act
        payload = await pet_service.adopt("owner-1", "  Boo ")

        # Assert
        pet_service._profiles.ensure.assert_awaited_once()
        snapshot = pet_service._pets.create.await_args.args[1]
        assert snapshot.name == "Boo"
        assert snapshot.owner_id == "owner-1"
        assert snapshot.created_at == fixed_now
        assert payload["name"] == "Boo"
        assert payload["level"] == 1
        assert payload["profile"] == {"username": None}

    async def test_invalid_name_rejected_before_database(self, pet_service):
        with pytest.raises(ValidationError):
            await pet_service.adopt("owner-1", "   ")

        pet_service._profiles.ensure.assert_not_called()
        pet_service._pets.create.assert_not_called()

    async def test_second_adopt_conflicts(self, pet_service, pet_factory):
        pet_service._pets.find_by_owner.return_value = pet_factory()

        with pytest.raises(ConflictError) as exc_info:
            await pet_service.adopt("owner-1", "Another")

        assert exc_info.value.reason == PET_ALREADY_EXISTS
        pet_service._pets.create.assert_not_called()

    async def test_unique_violation_maps_to_conflict(self, pet_service):
        pet_service._pets.find_by_owner.return_value = None
        pet_service._pets.create.side_effect = IntegrityError(
            "INSERT INTO pets", {}, Exception("duplicate key value")
        )

        with pytest.raises(ConflictError) as exc_info:
            await pet_service.adopt("owner-1", "Racer")

        assert exc_info.value.reason == PET_ALREADY_EXISTS


@pytest.mark.unit
class TestActions:
    """Feed and play run under a row lock and report progression."""

    async def test_feed_levels_up(self, pet_service, pet_factory, fixed_now):
        # Arrange
        row = pet_factory(experience=95, hunger=30)
        pet_service._pets.find_by_owner.return_value = row

        # Act
        result = await pet_service.feed("owner-1")

        # Assert
        pet_service._pets.find_by_owner.assert_awaited_once()
        assert pet_service._pets.find_by_owner.await_args.kwargs["for_update"] is True
        pet_service._pets.flush.assert_awaited_once()
        assert row.experience == 105
        assert row.hunger == 100
        assert row.last_fed_at == fixed_now
        assert result["leveled_up"] is True
        assert result["xp_gained"] == 10
        assert result["pet"]["level"] == 2
        assert result["message"] == "Fed! Your ghost leveled up to 2! 🎉"

    async def test_feed_without_level_up(self, pet_service, pet_factory):
        pet_service._pets.find_by_owner.return_value = pet_factory(experience=10)

        result = await pet_service.feed("owner-1")

        assert result["leveled_up"] is False
        assert result["message"] == "Fed! Your ghost is happy! 👻"

    async def test_play_refills_mood(self, pet_service, pet_factory, fixed_now):
        row = pet_factory(experience=0, mood=15, hunger=40)
        pet_service._pets.find_by_owner.return_value = row

        result = await pet_service.play("owner-1")

        assert row.experience == 5
        assert row.mood == 100
        assert row.hunger == 40
        assert row.last_played_at == fixed_now
        assert result["xp_gained"] == 5
        assert result["message"] == "Played! Your ghost is delighted! 👻"

    async def test_play_level_up_message(self, pet_service, pet_factory):
        pet_service._pets.find_by_owner.return_value = pet_factory(experience=195)

        result = await pet_service.play("owner-1")

        assert result["message"] == "Played! Your ghost leveled up to 3! 🎉"

    @pytest.mark.parametrize("action", ["feed", "play"])
    async def test_action_without_pet_raises_not_found(self, pet_service, action):
        pet_service._pets.find_by_owner.return_value = None

        with pytest.raises(NotFoundError):
            await getattr(pet_service, action)("owner-1")

        pet_service._pets.flush.assert_not_called()
