"""
Pet Cog - Discord commands for your ghost pet
=============================================

Commands:
- Adopt a ghost
- View your ghost's stats
- Feed and play to earn experience
"""

from discord.ext import commands

from ghostagotchi.bot.base_cog import BaseCog
from ghostagotchi.ui.embeds import EmbedFactory


class PetCog(BaseCog):
    """
    Adopt, inspect, feed and play with your ghost.

    Commands:
        adopt <name>  adopt your one and only ghost
        pet           show your ghost's stats
        feed          +10 XP, hunger back to full
        play          +5 XP, mood back to full
    """

    def __init__(self, bot: commands.Bot):
        super().__init__(bot, "PetCog")

    @commands.command(name="adopt", description="Adopt your ghost pet")
    async def adopt(self, ctx: commands.Context, *, name: str):
        try:
            response = await self.dispatch(ctx, "POST", "/pet", body={"name": name})
            if not response.ok:
                return await self.send_api_error(ctx, response)

            embed = EmbedFactory.pet_card(
                response.data,
                title=f"👻 Welcome, {response.data['name']}!",
                message=response.message,
            )
            await self._safe_send(ctx, embed)
        except Exception as e:
            self.log_cog_error("adopt", e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Adoption Failed", "An unexpected error occurred while adopting."
            )

    @commands.command(name="pet", aliases=["ghost", "status"], description="Show your ghost")
    async def pet(self, ctx: commands.Context):
        try:
            response = await self.dispatch(ctx, "GET", "/pet")
            if not response.ok:
                return await self.send_api_error(ctx, response)

            await self._safe_send(ctx, EmbedFactory.pet_card(response.data))
        except Exception as e:
            self.log_cog_error("pet", e, user_id=ctx.author.id)
            await self.send_error(ctx, "Something Went Wrong", "Could not load your ghost.")

    @commands.command(name="feed", description="Feed your ghost (+10 XP)")
    async def feed(self, ctx: commands.Context):
        await self._run_action(ctx, "feed", "/pet/feed", "🍬")

    @commands.command(name="play", description="Play with your ghost (+5 XP)")
    async def play(self, ctx: commands.Context):
        await self._run_action(ctx, "play", "/pet/play", "🎈")

    async def _run_action(self, ctx: commands.Context, action: str, path: str, emoji: str):
        try:
            response = await self.dispatch(ctx, "POST", path)
            if not response.ok:
                return await self.send_api_error(ctx, response)

            data = response.data
            embed = EmbedFactory.pet_card(
                data["pet"],
                title=f"{emoji} {response.message}",
                message=f"+{data['xp_gained']} XP",
            )
            await self._safe_send(ctx, embed)
        except Exception as e:
            self.log_cog_error(action, e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Something Went Wrong", f"Could not {action} your ghost."
            )


async def setup(bot: commands.Bot):
    await bot.add_cog(PetCog(bot))
