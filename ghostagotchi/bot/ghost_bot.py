"""
Ghostagotchi Discord Bot.

Handles Discord integration: prefix commands, cog loading and the global
command error handler. All game behavior sits behind the request boundary in
the service container; this class only wires Discord to it.
"""

import time
from typing import Dict, Optional

import discord
from discord.ext import commands

from ghostagotchi.bot.loader import load_all_features
from ghostagotchi.core.config.config import Config
from ghostagotchi.core.logging.logger import LogContext, dropped_log_records, get_logger
from ghostagotchi.core.services.container import ServiceContainer
from ghostagotchi.ui.embeds import EmbedFactory

logger = get_logger(__name__)


class GhostBot(commands.Bot):
    """Ghostagotchi bot: prefix commands over the ServiceContainer."""

    def __init__(self, container: ServiceContainer):
        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(
            command_prefix=commands.when_mentioned_or(Config.COMMAND_PREFIX),
            intents=intents,
            case_insensitive=True,
            strip_after_prefix=True,
            description=Config.BOT_DESCRIPTION,
        )

        self.container = container
        self.commands_executed = 0
        self.commands_failed = 0
        self.errors_by_type: Dict[str, int] = {}
        self.cog_stats: Optional[dict] = None

    # --------------------------------------------------------------- #
    # Startup
    # --------------------------------------------------------------- #

    async def setup_hook(self):
        startup_start = time.perf_counter()
        logger.info("=" * 60)
        logger.info(f"👻 {Config.BOT_NAME.upper()} BOT STARTUP")
        logger.info("=" * 60)

        try:
            self.cog_stats = await load_all_features(self)
        except Exception as e:
            logger.critical(f"FATAL: Setup failed: {e}", exc_info=True)
            raise

        logger.info(
            "Bot setup complete",
            extra={
                "setup_time_ms": round((time.perf_counter() - startup_start) * 1000, 2),
                "cogs_loaded": self.cog_stats.get("loaded", 0),
                "cogs_failed": self.cog_stats.get("failed", 0),
            },
        )

    async def on_ready(self):
        logger.info("=" * 60)
        logger.info(f"{self.user} is ONLINE")
        logger.info(f"{len(self.guilds)} guilds")
        logger.info("=" * 60)

        await self.change_presence(
            activity=discord.Activity(
                type=discord.ActivityType.playing,
                name=f"{Config.COMMAND_PREFIX}adopt | {len(self.guilds)} servers",
            )
        )

    # --------------------------------------------------------------- #
    # Error Handling - Prefix Commands
    # --------------------------------------------------------------- #

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for framework-level command errors."""
        async with LogContext(
            user_id=ctx.author.id,
            guild_id=ctx.guild.id if ctx.guild else None,
            command=f"prefix:{ctx.command}" if ctx.command else "unknown",
        ):
            if isinstance(error, commands.CommandNotFound):
                return

            self.commands_failed += 1
            original = getattr(error, "original", error)
            error_type = type(original).__name__
            self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1

            if isinstance(error, commands.MissingRequiredArgument):
                embed = EmbedFactory.error(
                    title="Missing Argument",
                    description=f"Missing required argument: `{error.param.name}`",
                    help_text=f"Try `{Config.COMMAND_PREFIX}help {ctx.command}`.",
                )
                return await ctx.send(embed=embed)

            if isinstance(error, commands.BadArgument):
                embed = EmbedFactory.error(title="Invalid Argument", description=str(error))
                return await ctx.send(embed=embed)

            if isinstance(error, commands.CheckFailure):
                embed = EmbedFactory.error(
                    title="Permission Denied",
                    description="You lack permission to use this command.",
                )
                return await ctx.send(embed=embed)

            logger.error(
                f"Unhandled error in {ctx.command}: {error}",
                exc_info=original,
                extra={"error_type": error_type},
            )
            embed = EmbedFactory.error(
                title="Unexpected Error",
                description="Something went wrong while processing your command.",
                help_text="The issue has been logged.",
            )
            await ctx.send(embed=embed)

    async def on_command_completion(self, ctx: commands.Context):
        self.commands_executed += 1

    # --------------------------------------------------------------- #
    # Shutdown
    # --------------------------------------------------------------- #

    async def close(self):
        logger.info("=" * 60)
        logger.info(f"👻 {Config.BOT_NAME.upper()} BOT SHUTDOWN")
        logger.info("=" * 60)

        total = self.commands_executed + self.commands_failed
        if total > 0:
            logger.info("Final Stats:")
            logger.info(f"  Commands Executed: {self.commands_executed}")
            logger.info(f"  Commands Failed:   {self.commands_failed}")
            logger.info(f"  Success Rate:      {self.commands_executed / total * 100:.1f}%")

        dropped = dropped_log_records()
        if dropped:
            logger.warning(f"  Log records dropped: {dropped}")

        await super().close()
