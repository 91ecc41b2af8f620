"""
Base Discord Cog for Ghostagotchi.

Purpose
-------
Parent for every feature cog. Cogs translate Discord commands into
``ApiRequest`` values, hand them to the request boundary and render the
``ApiResponse`` as an embed. They hold no business logic.

Key Features
------------
**Dispatch**:
- `dispatch()`: Build an ApiRequest for the invoking user and run it

**User Feedback**:
- `send_success()`, `send_error()`, `send_info()`: Standardized embeds
- `send_api_error()`: Render an error envelope

**Logging**:
- `log_command_use()`: Command execution logging with context
- `log_cog_error()`: Cog-level error logging with context

Usage Example
-------------
>>> class PetCog(BaseCog):
>>>     def __init__(self, bot):
>>>         super().__init__(bot, "PetCog")
>>>
>>>     @commands.command(name="feed")
>>>     async def feed(self, ctx):
>>>         response = await self.dispatch(ctx, "POST", "/pet/feed")
>>>         if not response.ok:
>>>             return await self.send_api_error(ctx, response)
>>>         await self.send_success(ctx, "Fed!", response.message)
"""

import time
from typing import Any, Dict, Optional

import discord
from discord.ext import commands

from ghostagotchi.api.auth import Principal
from ghostagotchi.api.envelope import ApiRequest, ApiResponse
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.ui.embeds import EmbedFactory


class BaseCog(commands.Cog):
    """
    Base class for all feature cogs (prefix-only).

    Provides request dispatch, consistent feedback and structured logging.
    """

    def __init__(self, bot: commands.Bot, cog_name: str):
        """
        Args:
            bot: GhostBot instance (must expose ``container``)
            cog_name: Name of the cog (e.g., "PetCog")
        """
        self.bot = bot
        self.cog_name = cog_name
        self.logger = get_logger(cog_name)

    # ========================================================================
    # DISPATCH
    # ========================================================================

    @staticmethod
    def principal_for(ctx: commands.Context) -> Principal:
        return Principal(
            user_id=str(ctx.author.id),
            is_bot=ctx.author.bot,
            display_name=ctx.author.display_name,
        )

    async def dispatch(
        self,
        ctx: commands.Context,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """Send one request for the invoking user through the boundary."""
        start_time = time.perf_counter()

        request = ApiRequest(
            method=method,
            path=path,
            principal=self.principal_for(ctx),
            body=body or {},
            query=query or {},
        )
        response = await self.bot.container.boundary.handle(request)

        self.log_command_use(
            ctx.command.name if ctx.command else path,
            ctx.author.id,
            guild_id=ctx.guild.id if ctx.guild else None,
            status=response.status,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return response

    # ========================================================================
    # USER FEEDBACK UTILITIES
    # ========================================================================

    async def defer(self, ctx: commands.Context):
        """Show the typing indicator for slow operations."""
        try:
            await ctx.typing()
        except discord.HTTPException as e:
            self.logger.warning(f"Failed to start typing indicator: {e}")

    async def send_error(
        self,
        ctx: commands.Context,
        title: str,
        description: str,
        help_text: Optional[str] = None,
    ):
        embed = EmbedFactory.error(title=title, description=description, help_text=help_text)
        await self._safe_send(ctx, embed)

    async def send_success(
        self,
        ctx: commands.Context,
        title: str,
        description: str,
        footer: Optional[str] = None,
    ):
        embed = EmbedFactory.success(title=title, description=description, footer=footer)
        await self._safe_send(ctx, embed)

    async def send_info(
        self,
        ctx: commands.Context,
        title: str,
        description: str,
        footer: Optional[str] = None,
    ):
        embed = EmbedFactory.info(title=title, description=description, footer=footer)
        await self._safe_send(ctx, embed)

    async def send_api_error(self, ctx: commands.Context, response: ApiResponse):
        """Client errors render as warnings, server errors as errors."""
        title = response.body.get("error", "Error")
        description = response.body.get("message") or title

        if response.status >= 500:
            embed = EmbedFactory.error(
                title, description, help_text="The issue has been logged."
            )
        else:
            embed = EmbedFactory.warning(title, description)

        await self._safe_send(ctx, embed)

    async def _safe_send(self, ctx: commands.Context, embed: discord.Embed):
        try:
            await ctx.reply(embed=embed)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send embed in {self.cog_name}: {e}")

    # ========================================================================
    # LOGGING UTILITIES
    # ========================================================================

    def log_command_use(
        self,
        command_name: str,
        user_id: int,
        guild_id: Optional[int] = None,
        **kwargs: Any,
    ):
        self.logger.info(
            f"Command used: {command_name}",
            extra={
                "component": self.cog_name,
                "operation": command_name,
                "user_id": user_id,
                "guild_id": guild_id,
                **kwargs,
            },
        )

    def log_cog_error(
        self,
        operation: str,
        error: Exception,
        user_id: Optional[int] = None,
        **kwargs: Any,
    ):
        self.logger.error(
            f"{self.cog_name}.{operation} failed: {error}",
            exc_info=error,
            extra={
                "component": self.cog_name,
                "operation": operation,
                "user_id": user_id,
                **kwargs,
            },
        )
