"""
Unit tests for the Discord cogs.

The bot, context and request boundary are mocks; these tests check the
request each command sends and how the response is rendered.
"""

import pytest

from ghostagotchi.api.envelope import error, success
from ghostagotchi.modules.chat.cog import ChatCog
from ghostagotchi.modules.leaderboard.cog import LeaderboardCog
from ghostagotchi.modules.pet.cog import PetCog
from ghostagotchi.modules.profile.cog import ProfileCog

PET = {
    "id": "pet-1",
    "owner_id": "987654321",
    "name": "Casper",
    "level": 2,
    "experience": 105,
    "hunger": 100,
    "mood": 80,
}


def sent_embed(ctx):
    return ctx.reply.await_args.kwargs["embed"]


@pytest.mark.unit
class TestDispatch:
    """Commands become ApiRequests for the invoking user."""

    async def test_feed_sends_request_for_author(self, mock_context, mock_bot):
        # Arrange
        mock_bot.container.boundary.handle.return_value = success(
            {"pet": PET, "leveled_up": True, "xp_gained": 10},
            message="Fed! Your ghost leveled up to 2! 🎉",
        )
        cog = PetCog(mock_bot)

        # Act
        await cog.feed.callback(cog, mock_context)

        # Assert
        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert request.method == "POST"
        assert request.path == "/pet/feed"
        assert request.principal.user_id == "987654321"
        assert request.principal.is_bot is False
        assert "leveled up to 2" in sent_embed(mock_context).title

    async def test_adopt_passes_name(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            PET, status=201, message="Pet created successfully"
        )
        cog = PetCog(mock_bot)

        await cog.adopt.callback(cog, mock_context, name="Casper")

        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert request.body == {"name": "Casper"}
        assert "Casper" in sent_embed(mock_context).title

    async def test_error_envelope_renders_message(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = error(
            404, "Not Found", message="Pet not found", code="PET_NOT_FOUND"
        )
        cog = PetCog(mock_bot)

        await cog.pet.callback(cog, mock_context)

        embed = sent_embed(mock_context)
        assert embed.title == "Not Found"
        assert embed.description == "Pet not found"

    async def test_boundary_crash_is_reported(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.side_effect = RuntimeError("boom")
        cog = PetCog(mock_bot)

        await cog.play.callback(cog, mock_context)

        assert "Something Went Wrong" in sent_embed(mock_context).title


@pytest.mark.unit
class TestChatCog:
    async def test_chat_reply(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            {"reply": "Boo! 👻", "pet_name": "Casper", "tokens_used": 12}
        )
        cog = ChatCog(mock_bot)

        await cog.chat.callback(cog, mock_context, message="hello")

        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert request.body == {"message": "hello"}
        assert "Boo! 👻" in sent_embed(mock_context).description


@pytest.mark.unit
class TestLeaderboardCog:
    async def test_limit_forwarded_as_query(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            {"leaderboard": [], "total": 0, "last_updated": "2025-10-31T12:00:00+00:00"}
        )
        cog = LeaderboardCog(mock_bot)

        await cog.leaderboard.callback(cog, mock_context, limit="5")

        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert request.path == "/leaderboard"
        assert request.query == {"limit": "5"}
        assert "No ghosts yet" in sent_embed(mock_context).description


@pytest.mark.unit
class TestProfileCog:
    async def test_profile_shows_username(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            {"id": "987654321", "username": "spooky"}
        )
        cog = ProfileCog(mock_bot)

        await cog.profile.callback(cog, mock_context)

        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert (request.method, request.path) == ("GET", "/profile")
        assert "spooky" in sent_embed(mock_context).description

    async def test_profile_without_username_is_anonymous(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            {"id": "987654321", "username": None}
        )
        cog = ProfileCog(mock_bot)

        await cog.profile.callback(cog, mock_context)

        assert "Anonymous Ghost Keeper" in sent_embed(mock_context).description

    async def test_username_sends_body(self, mock_context, mock_bot):
        mock_bot.container.boundary.handle.return_value = success(
            {"id": "987654321", "username": "spooky"},
            message="Profile updated successfully",
        )
        cog = ProfileCog(mock_bot)

        await cog.username.callback(cog, mock_context, username="spooky")

        request = mock_bot.container.boundary.handle.await_args.args[0]
        assert request.body == {"username": "spooky"}
        assert sent_embed(mock_context).title == "Profile updated successfully"
