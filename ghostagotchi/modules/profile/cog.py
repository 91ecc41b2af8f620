"""
Profile Cog - Discord commands for owner profiles
=================================================

Commands:
- View your profile
- Set the username shown on the leaderboard
"""

from discord.ext import commands

from ghostagotchi.bot.base_cog import BaseCog
from ghostagotchi.domain.models.ranking import ANONYMOUS_OWNER


class ProfileCog(BaseCog):
    """Set the name shown next to your ghost on the leaderboard."""

    def __init__(self, bot: commands.Bot):
        super().__init__(bot, "ProfileCog")

    @commands.command(name="profile", aliases=["me"], description="Show your profile")
    async def profile(self, ctx: commands.Context):
        try:
            response = await self.dispatch(ctx, "GET", "/profile")
            if not response.ok:
                return await self.send_api_error(ctx, response)

            username = response.data["username"] or ANONYMOUS_OWNER
            await self.send_info(
                ctx,
                "👤 Your Profile",
                f"Leaderboard name: **{username}**",
                footer="Change it with the username command",
            )
        except Exception as e:
            self.log_cog_error("profile", e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Something Went Wrong", "Could not load your profile."
            )

    @commands.command(name="username", aliases=["setname"], description="Set your public username")
    async def username(self, ctx: commands.Context, username: str):
        try:
            response = await self.dispatch(
                ctx, "POST", "/profile", body={"username": username}
            )
            if not response.ok:
                return await self.send_api_error(ctx, response)

            await self.send_success(
                ctx,
                response.message,
                f"You are now known as **{response.data['username']}**.",
            )
        except Exception as e:
            self.log_cog_error("username", e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Something Went Wrong", "Could not update your username."
            )


async def setup(bot: commands.Bot):
    await bot.add_cog(ProfileCog(bot))
