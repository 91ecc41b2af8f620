"""
Ghostagotchi - Application Entry Point
======================================

Bootstrap
---------
1. Validate configuration
2. Initialize the database (and create missing tables)
3. Build the service container (services, LLM client, request boundary)
4. Start the bot
5. Shut everything down in reverse order
"""

import asyncio
import signal
import sys
from typing import Optional

from ghostagotchi.bot.ghost_bot import GhostBot
from ghostagotchi.core.config.config import Config
from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.logging.logger import get_logger, shutdown_logging
from ghostagotchi.core.services.container import ServiceContainer

logger = get_logger(__name__)


# ============================================================================
# Application Bootstrap
# ============================================================================

async def _startup() -> GhostBot:
    """Initialize infrastructure before launching the bot."""
    logger.info("========== GHOSTAGOTCHI INITIALIZATION START ==========")

    # Step 1: Validate configuration early
    try:
        Config.validate()
        logger.info("✓ Configuration validated")
    except Exception as exc:
        logger.critical(f"Configuration validation failed: {exc}")
        raise

    # Step 2: Initialize database service
    try:
        await DatabaseService.initialize()
        await DatabaseService.create_schema()
        logger.info("✓ Database service initialized")
    except Exception as exc:
        logger.critical(f"Database initialization failed: {exc}", exc_info=True)
        raise

    # Step 3: Initialize service container
    try:
        container = ServiceContainer(
            config=Config,
            logger=get_logger("ghostagotchi.core.services.container"),
        )
        await container.initialize()
        logger.info("✓ Service container initialized")
    except Exception as exc:
        logger.critical(f"Service container initialization failed: {exc}", exc_info=True)
        raise

    # Step 4: Initialize bot
    bot = GhostBot(container)
    logger.info("✓ Bot initialized")

    logger.info("========== INFRASTRUCTURE INITIALIZED SUCCESSFULLY ==========")
    return bot


# ============================================================================
# Application Shutdown
# ============================================================================

async def _shutdown(bot: Optional[GhostBot]) -> None:
    """Gracefully shut down the bot and infrastructure services."""
    logger.info("========== GHOSTAGOTCHI SHUTDOWN START ==========")

    if bot is not None:
        if not bot.is_closed():
            try:
                await bot.close()
                logger.info("✓ Bot closed")
            except Exception as exc:
                logger.error(f"Error while closing bot: {exc}", exc_info=True)

        try:
            await bot.container.shutdown()
            logger.info("✓ Service container shut down")
        except Exception as exc:
            logger.error(f"Service container shutdown error: {exc}", exc_info=True)

    try:
        await DatabaseService.shutdown()
        logger.info("✓ Database service shut down")
    except Exception as exc:
        logger.error(f"Database service shutdown error: {exc}", exc_info=True)

    logger.info("========== SHUTDOWN COMPLETE ==========")
    shutdown_logging()


# ============================================================================
# Application Entrypoint
# ============================================================================

async def main() -> None:
    bot: Optional[GhostBot] = None

    try:
        bot = await _startup()
        logger.info(f"Starting {Config.BOT_NAME} Discord bot...")
        await bot.start(Config.DISCORD_TOKEN)

    except asyncio.CancelledError:
        logger.warning("Asyncio task cancellation received; shutting down gracefully.")
        raise

    except Exception as exc:
        logger.critical(f"Fatal startup error: {exc}", exc_info=True)
        sys.exit(1)

    finally:
        await _shutdown(bot)


def _install_signal_handlers(loop: asyncio.AbstractEventLoop) -> None:
    try:
        loop.add_signal_handler(signal.SIGTERM, loop.stop)
        logger.debug("SIGTERM handler installed")
    except NotImplementedError:
        logger.debug("SIGTERM not supported on this platform (likely Windows)")


def run() -> None:
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    _install_signal_handlers(loop)

    try:
        loop.run_until_complete(main())
    except KeyboardInterrupt:
        logger.info("Bot manually stopped via keyboard interrupt.")
    finally:
        loop.close()


if __name__ == "__main__":
    run()
