"""
Integration Tests for DatabaseService
=====================================

Purpose
-------
Test database operations with real PostgreSQL using testcontainers.
Verifies schema creation, transaction management, health checks and the
repository queries that rely on PostgreSQL behavior.

Test Coverage
-------------
- Schema creation
- Transaction commit and rollback
- Health check
- Unique constraints on pets.owner_id and profiles.username
- Level expression ordering in list_ordered
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from ghostagotchi.core.database.base import utc_now
from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.database.models import Pet, Profile
from ghostagotchi.domain.models.pet import PetSnapshot
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.profile.repository import ProfileRepository


@pytest.fixture
def pet_repo():
    return PetRepository(logger=get_logger("tests.PetRepository"))


@pytest.fixture
def profile_repo():
    return ProfileRepository(logger=get_logger("tests.ProfileRepository"))


async def seed_pet(pet_repo, profile_repo, owner_id, experience=0, created_at=None):
    snapshot = PetSnapshot.new(owner_id=owner_id, name=f"Ghost-{owner_id}", now=created_at or utc_now())
    async with DatabaseService.get_transaction() as session:
        await profile_repo.ensure(session, owner_id)
        pet = await pet_repo.create(session, snapshot)
        pet.experience = experience
    return pet


# ============================================================================
# DATABASE CONNECTION TESTS
# ============================================================================


@pytest.mark.integration
@pytest.mark.database
class TestDatabaseConnection:
    """Test database connection and basic operations."""

    async def test_health_check(self, database):
        assert await DatabaseService.health_check() is True

    async def test_database_schema_created(self, database):
        """Test that database schema tables are created."""
        # Act
        async with DatabaseService.get_session() as session:
            result = await session.execute(
                text(
                    """
                    SELECT table_name
                    FROM information_schema.tables
                    WHERE table_schema = 'public'
                    """
                )
            )
            tables = [row.table_name for row in result.fetchall()]

        # Assert
        assert {"profiles", "pets", "messages"} <= set(tables)


# ============================================================================
# TRANSACTION TESTS
# ============================================================================


@pytest.mark.integration
@pytest.mark.database
class TestTransactions:
    """Test commit and rollback through get_transaction()."""

    async def test_commit_persists(self, database, profile_repo):
        async with DatabaseService.get_transaction() as session:
            await profile_repo.ensure(session, "owner-1")

        async with DatabaseService.get_session() as session:
            assert await profile_repo.get(session, "owner-1") is not None

    async def test_rollback_on_error(self, database, profile_repo):
        # Act
        with pytest.raises(RuntimeError):
            async with DatabaseService.get_transaction() as session:
                await profile_repo.ensure(session, "owner-1")
                raise RuntimeError("abort")

        # Assert
        async with DatabaseService.get_session() as session:
            assert await profile_repo.get(session, "owner-1") is None

    async def test_ensure_is_idempotent(self, database, profile_repo):
        for _ in range(2):
            async with DatabaseService.get_transaction() as session:
                await profile_repo.ensure(session, "owner-1")

        async with DatabaseService.get_session() as session:
            count = await session.scalar(select(func.count()).select_from(Profile))
        assert count == 1


# ============================================================================
# CONSTRAINT AND QUERY TESTS
# ============================================================================


@pytest.mark.integration
@pytest.mark.database
class TestRepositories:
    async def test_owner_is_unique(self, database, pet_repo, profile_repo):
        await seed_pet(pet_repo, profile_repo, "owner-1")

        with pytest.raises(IntegrityError):
            await seed_pet(pet_repo, profile_repo, "owner-1")

    async def test_username_is_unique(self, database, profile_repo):
        async with DatabaseService.get_transaction() as session:
            await profile_repo.upsert_username(session, "owner-1", "spooky")

        with pytest.raises(IntegrityError):
            async with DatabaseService.get_transaction() as session:
                await profile_repo.upsert_username(session, "owner-2", "spooky")

    async def test_upsert_updates_existing_profile(self, database, profile_repo):
        async with DatabaseService.get_transaction() as session:
            await profile_repo.ensure(session, "owner-1")
            profile = await profile_repo.upsert_username(session, "owner-1", "spooky")

        assert profile.username == "spooky"

    async def test_list_ordered_uses_level_expression(self, database, pet_repo, profile_repo):
        # Arrange
        now = utc_now()
        await seed_pet(pet_repo, profile_repo, "low", experience=90, created_at=now - timedelta(days=2))
        await seed_pet(pet_repo, profile_repo, "high", experience=210, created_at=now)
        await seed_pet(pet_repo, profile_repo, "tie-new", experience=105, created_at=now)
        await seed_pet(pet_repo, profile_repo, "tie-old", experience=105, created_at=now - timedelta(days=1))

        # Act
        async with DatabaseService.get_session() as session:
            pets = await pet_repo.list_ordered(session, 3)
            owners = [p.owner_id for p in pets]
            profiles_loaded = all(p.profile is not None for p in pets)

        # Assert
        assert owners == ["high", "tie-old", "tie-new"]
        assert profiles_loaded

    async def test_find_by_owner_for_update(self, database, pet_repo, profile_repo):
        await seed_pet(pet_repo, profile_repo, "owner-1")

        async with DatabaseService.get_transaction() as session:
            pet = await pet_repo.find_by_owner(session, "owner-1", for_update=True)
            assert isinstance(pet, Pet)
            assert pet.level == 1

    async def test_generic_helpers(self, database, pet_repo, profile_repo):
        seeded = await seed_pet(pet_repo, profile_repo, "owner-1", experience=40)
        await seed_pet(pet_repo, profile_repo, "owner-2", experience=400)

        async with DatabaseService.get_session() as session:
            assert await pet_repo.count(session) == 2
            assert await pet_repo.exists(session, Pet.owner_id == "owner-2")
            assert not await pet_repo.exists(session, Pet.owner_id == "nobody")

            veterans = await pet_repo.find_many_where(session, Pet.experience >= 100)
            assert [p.owner_id for p in veterans] == ["owner-2"]

            pet = await pet_repo.find_by_id(session, seeded.id)
            assert pet.experience == 40
            await pet_repo.refresh(session, pet, ["experience"])
            assert pet.level == 1
