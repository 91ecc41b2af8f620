"""
Unit tests for LeaderboardService.
"""

from datetime import timedelta

import pytest

from ghostagotchi.domain.models.ranking import ANONYMOUS_OWNER
from ghostagotchi.modules.leaderboard.service import LeaderboardService
from ghostagotchi.modules.pet.repository import PetRepository


@pytest.fixture
def leaderboard_service(mocker, service_config, service_logger, clock, patched_database):
    service = LeaderboardService(service_config, service_logger, clock=clock)
    service._pets = mocker.MagicMock(spec=PetRepository)
    service._pets.list_ordered.return_value = []
    return service


@pytest.mark.unit
class TestListTop:
    """Ranking rows, limits and metadata."""

    async def test_rows_are_ranked_and_shaped(self, leaderboard_service, pet_factory, fixed_now):
        # Arrange
        leaderboard_service._pets.list_ordered.return_value = [
            pet_factory(pet_id="p1", name="Slowpoke", experience=40, created_at=fixed_now - timedelta(minutes=5)),
            pet_factory(pet_id="p2", name="Wisp", experience=250, username="spooky",
                        created_at=fixed_now - timedelta(days=10)),
            pet_factory(pet_id="p3", name="Shade", experience=250, created_at=fixed_now - timedelta(hours=3)),
        ]

        # Act
        result = await leaderboard_service.list_top()

        # Assert
        assert result["total"] == 3
        assert result["last_updated"] == fixed_now.isoformat()
        assert result["leaderboard"] == [
            {
                "rank": 1,
                "ghost_name": "Wisp",
                "level": 3,
                "experience": 250,
                "owner": "spooky",
                "age": "1 week old",
            },
            {
                "rank": 2,
                "ghost_name": "Shade",
                "level": 3,
                "experience": 250,
                "owner": ANONYMOUS_OWNER,
                "age": "3 hours old",
            },
            {
                "rank": 3,
                "ghost_name": "Slowpoke",
                "level": 1,
                "experience": 40,
                "owner": ANONYMOUS_OWNER,
                "age": "Just born",
            },
        ]

    @pytest.mark.parametrize(
        "raw_limit,expected",
        [(None, 10), ("abc", 10), ("0", 1), ("-3", 1), ("20", 20), ("500", 50)],
    )
    async def test_limit_is_clamped(self, leaderboard_service, raw_limit, expected):
        await leaderboard_service.list_top(raw_limit)

        assert leaderboard_service._pets.list_ordered.await_args.args[1] == expected

    async def test_empty_leaderboard(self, leaderboard_service):
        result = await leaderboard_service.list_top()

        assert result["leaderboard"] == []
        assert result["total"] == 0

    async def test_blank_username_is_anonymous(self, leaderboard_service, pet_factory):
        leaderboard_service._pets.list_ordered.return_value = [pet_factory(username="")]

        result = await leaderboard_service.list_top()

        assert result["leaderboard"][0]["owner"] == ANONYMOUS_OWNER
