"""
Feature cog loader.

Discovers every ``cog`` module under ``ghostagotchi.modules`` and loads it as
a discord.py extension, recording per-cog timing. A cog that fails to load
is logged and skipped; the bot starts with the rest.
"""

from __future__ import annotations

import asyncio
import importlib
import pkgutil
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ghostagotchi.core.logging.logger import get_logger

if TYPE_CHECKING:
    from discord.ext import commands

logger = get_logger(__name__)


@dataclass
class LoadResult:
    """Result of loading a single cog."""

    name: str
    success: bool
    duration_ms: float
    error: Optional[Exception] = None
    error_type: Optional[str] = None


class FeatureLoader:
    """Discovers and loads feature cogs with timing and failure isolation."""

    LOAD_TIMEOUT = 30.0  # seconds per cog
    BASE_PACKAGE = "ghostagotchi.modules"
    COG_MODULE = "cog"

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.load_results: List[LoadResult] = []

    async def load_all_features(self) -> Dict[str, Any]:
        start_time = time.perf_counter()

        cog_names = self.discover_cogs()
        if not cog_names:
            logger.warning(f"No cog modules found under {self.BASE_PACKAGE}")
            return self._build_stats(start_time)

        logger.info(f"Found {len(cog_names)} cog(s): {', '.join(cog_names)}")

        self.load_results = [await self._load_cog(name) for name in cog_names]

        stats = self._build_stats(start_time)
        self._log_summary(stats)
        return stats

    def discover_cogs(self) -> List[str]:
        """Fully qualified names of ``<feature>.cog`` modules, sorted."""
        package = importlib.import_module(self.BASE_PACKAGE)
        suffix = f".{self.COG_MODULE}"
        return sorted(
            name
            for _, name, ispkg in pkgutil.walk_packages(
                package.__path__, prefix=f"{self.BASE_PACKAGE}."
            )
            if not ispkg and name.endswith(suffix)
        )

    async def _load_cog(self, extension_name: str) -> LoadResult:
        start_time = time.perf_counter()
        try:
            await asyncio.wait_for(
                self.bot.load_extension(extension_name), timeout=self.LOAD_TIMEOUT
            )
        except asyncio.TimeoutError:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"{extension_name} timed out after {self.LOAD_TIMEOUT}s")
            return LoadResult(
                name=extension_name,
                success=False,
                duration_ms=duration_ms,
                error=TimeoutError(f"Cog loading exceeded {self.LOAD_TIMEOUT}s timeout"),
                error_type="TimeoutError",
            )
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            error_type = type(e).__name__
            logger.error(
                f"Failed to load {extension_name} ({error_type}): {e}",
                exc_info=True,
                extra={
                    "cog_name": extension_name,
                    "error_type": error_type,
                    "duration_ms": duration_ms,
                },
            )
            return LoadResult(
                name=extension_name,
                success=False,
                duration_ms=duration_ms,
                error=e,
                error_type=error_type,
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"Loaded {extension_name} ({duration_ms:.0f}ms)")
        return LoadResult(name=extension_name, success=True, duration_ms=duration_ms)

    def _build_stats(self, start_time: float) -> Dict[str, Any]:
        successful = [r for r in self.load_results if r.success]
        failed = [r for r in self.load_results if not r.success]

        stats: Dict[str, Any] = {
            "total_time_ms": (time.perf_counter() - start_time) * 1000,
            "discovered": len(self.load_results),
            "loaded": len(successful),
            "failed": len(failed),
            "results": self.load_results,
        }

        if failed:
            error_types: Dict[str, int] = {}
            for result in failed:
                key = result.error_type or "Unknown"
                error_types[key] = error_types.get(key, 0) + 1
            stats["error_breakdown"] = error_types

        return stats

    def _log_summary(self, stats: Dict[str, Any]) -> None:
        logger.info("=" * 60)
        logger.info("FEATURE COG LOADING SUMMARY")
        logger.info(f"Total Time:     {stats['total_time_ms']:.0f}ms")
        logger.info(f"Loaded:         {stats['loaded']}/{stats['discovered']} cogs")
        if "error_breakdown" in stats:
            logger.warning("Error Breakdown:")
            for error_type, count in stats["error_breakdown"].items():
                logger.warning(f"  • {error_type}: {count}")
        logger.info("=" * 60)


async def load_all_features(bot: commands.Bot) -> Dict[str, Any]:
    return await FeatureLoader(bot).load_all_features()
