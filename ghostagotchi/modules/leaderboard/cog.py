"""
Leaderboard Cog - Discord commands for the ghost leaderboard
============================================================

Commands:
- View the top ghosts by level, experience and age
"""

from typing import Optional

from discord.ext import commands

from ghostagotchi.bot.base_cog import BaseCog
from ghostagotchi.ui.embeds import EmbedFactory


class LeaderboardCog(BaseCog):
    """Public ranking of every ghost."""

    def __init__(self, bot: commands.Bot):
        super().__init__(bot, "LeaderboardCog")

    @commands.command(name="leaderboard", aliases=["lb", "top"], description="Show the top ghosts")
    async def leaderboard(self, ctx: commands.Context, limit: Optional[str] = None):
        try:
            query = {"limit": limit} if limit is not None else {}
            response = await self.dispatch(ctx, "GET", "/leaderboard", query=query)
            if not response.ok:
                return await self.send_api_error(ctx, response)

            data = response.data
            if not data["leaderboard"]:
                return await self.send_info(
                    ctx, "🏆 Ghost Leaderboard", "No ghosts yet. Be the first to adopt one!"
                )

            embed = EmbedFactory.leaderboard(data["leaderboard"], data["last_updated"])
            await self._safe_send(ctx, embed)
        except Exception as e:
            self.log_cog_error("leaderboard", e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Something Went Wrong", "Could not load the leaderboard."
            )


async def setup(bot: commands.Bot):
    await bot.add_cog(LeaderboardCog(bot))
