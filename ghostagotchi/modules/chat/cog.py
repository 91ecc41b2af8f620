"""
Chat Cog - Discord commands for talking to your ghost
=====================================================

Commands:
- Chat with your ghost in character
"""

from discord.ext import commands

from ghostagotchi.bot.base_cog import BaseCog
from ghostagotchi.ui.embeds import EmbedFactory


class ChatCog(BaseCog):
    """Talk to your ghost."""

    def __init__(self, bot: commands.Bot):
        super().__init__(bot, "ChatCog")

    @commands.command(name="chat", aliases=["talk", "say"], description="Chat with your ghost")
    async def chat(self, ctx: commands.Context, *, message: str):
        await self.defer(ctx)
        try:
            response = await self.dispatch(ctx, "POST", "/chat", body={"message": message})
            if not response.ok:
                return await self.send_api_error(ctx, response)

            data = response.data
            embed = EmbedFactory.chat_reply(
                data["pet_name"], data["reply"], degraded="error" in data
            )
            await self._safe_send(ctx, embed)
        except Exception as e:
            self.log_cog_error("chat", e, user_id=ctx.author.id)
            await self.send_error(
                ctx, "Something Went Wrong", "Your ghost could not hear you."
            )


async def setup(bot: commands.Bot):
    await bot.add_cog(ChatCog(bot))
