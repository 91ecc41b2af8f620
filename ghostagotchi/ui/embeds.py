"""
Embed factory for Ghostagotchi's Discord presentation.

Features:
- Consistent branding and colors from Config
- Discord limits enforced on title, description, fields and footer
- Specialized builders for the pet card, chat replies and the leaderboard

Usage:
    >>> from ghostagotchi.ui.embeds import EmbedFactory
    >>> embed = EmbedFactory.success("Fed!", "Your ghost is happy! 👻")
"""

from typing import Any, Dict, List, Optional

import discord

from ghostagotchi.core.config.config import Config

EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_FIELD_LIMIT = 1024
EMBED_FOOTER_LIMIT = 2048

DEFAULT_FOOTER = "👻 Ghostagotchi"

_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def truncate_text(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def stat_bar(value: int, maximum: int = 100, width: int = 10) -> str:
    """Text progress bar, e.g. ``▰▰▰▰▰▱▱▱▱▱ 50/100``."""
    filled = max(0, min(width, round(width * value / maximum)))
    return f"{'▰' * filled}{'▱' * (width - filled)} {value}/{maximum}"


class EmbedFactory:
    """
    Factory for standardized Discord embeds.

    All embeds carry a timestamp and enforce Discord limits.
    """

    @staticmethod
    def _base_embed(
        title: str,
        description: str,
        color: int,
        footer: Optional[str] = None,
    ) -> discord.Embed:
        embed = discord.Embed(
            title=truncate_text(title, EMBED_TITLE_LIMIT),
            description=truncate_text(description, EMBED_DESCRIPTION_LIMIT),
            color=color,
            timestamp=discord.utils.utcnow(),
        )

        if footer:
            embed.set_footer(text=truncate_text(footer, EMBED_FOOTER_LIMIT))

        return embed

    # =========================================================================
    # CORE TYPES
    # =========================================================================

    @staticmethod
    def primary(title: str, description: str, footer: Optional[str] = None) -> discord.Embed:
        return EmbedFactory._base_embed(
            title, description, Config.EMBED_COLOR_PRIMARY, footer or DEFAULT_FOOTER
        )

    @staticmethod
    def success(title: str, description: str, footer: Optional[str] = None) -> discord.Embed:
        """Positive actions (adoption, feeding, level-ups)."""
        return EmbedFactory._base_embed(
            title, description, Config.EMBED_COLOR_SUCCESS, footer or DEFAULT_FOOTER
        )

    @staticmethod
    def error(
        title: str,
        description: str,
        help_text: Optional[str] = None,
    ) -> discord.Embed:
        """Error embed with optional help text appended to the description."""
        desc = description
        if help_text:
            desc += f"\n\n💡 **Help:** {help_text}"
        return EmbedFactory._base_embed(title, desc, Config.EMBED_COLOR_ERROR)

    @staticmethod
    def warning(title: str, description: str, footer: Optional[str] = None) -> discord.Embed:
        return EmbedFactory._base_embed(
            title, description, Config.EMBED_COLOR_WARNING, footer or DEFAULT_FOOTER
        )

    @staticmethod
    def info(title: str, description: str, footer: Optional[str] = None) -> discord.Embed:
        return EmbedFactory._base_embed(
            title, description, Config.EMBED_COLOR_INFO, footer or DEFAULT_FOOTER
        )

    # =========================================================================
    # GAME-SPECIFIC TYPES
    # =========================================================================

    @staticmethod
    def pet_card(
        pet: Dict[str, Any],
        title: Optional[str] = None,
        message: Optional[str] = None,
    ) -> discord.Embed:
        """Ghost status card: level, experience and the two needs."""
        embed = EmbedFactory.primary(
            title or f"👻 {pet['name']}",
            message or f"Level **{pet['level']}** ghost",
        )

        into_level = pet["experience"] % 100
        embed.add_field(name="Level", value=str(pet["level"]), inline=True)
        embed.add_field(
            name="Experience",
            value=f"{pet['experience']:,} XP ({into_level}/100 to next)",
            inline=True,
        )
        embed.add_field(name="🍬 Hunger", value=stat_bar(pet["hunger"]), inline=False)
        embed.add_field(name="🎈 Mood", value=stat_bar(pet["mood"]), inline=False)

        owner = (pet.get("profile") or {}).get("username")
        if owner:
            embed.set_footer(text=f"{DEFAULT_FOOTER} · Keeper: {owner}")

        return embed

    @staticmethod
    def chat_reply(pet_name: str, reply: str, degraded: bool = False) -> discord.Embed:
        title = f"💬 {pet_name} says"
        if degraded:
            return EmbedFactory.warning(title, reply)
        return EmbedFactory.primary(title, reply)

    @staticmethod
    def leaderboard(rows: List[Dict[str, Any]], last_updated: Optional[str] = None) -> discord.Embed:
        """
        Create leaderboard embed.

        Args:
            rows: Ranked rows (rank, ghost_name, level, experience, owner, age)
            last_updated: ISO timestamp the ranking was computed
        """
        embed = EmbedFactory.primary(
            "🏆 Ghost Leaderboard",
            "Top ghosts ranked by level and experience",
            footer=f"{DEFAULT_FOOTER} · Updated {last_updated}" if last_updated else None,
        )

        if not rows:
            embed.add_field(name="Rankings", value="No ghosts adopted yet", inline=False)
            return embed

        lines = []
        for row in rows:
            rank = row["rank"]
            rank_display = f"{_MEDALS[rank]} #{rank}" if rank in _MEDALS else f"#{rank}"
            lines.append(
                f"{rank_display} **{row['ghost_name']}** · Lv {row['level']} "
                f"({row['experience']:,} XP) · {row['owner']} · {row['age']}"
            )

        # Discord caps a field value at 1024 characters; split across fields.
        chunk: List[str] = []
        for line in lines:
            if sum(len(x) + 1 for x in chunk) + len(line) > EMBED_FIELD_LIMIT:
                embed.add_field(name="Rankings", value="\n".join(chunk), inline=False)
                chunk = []
            chunk.append(line)
        if chunk:
            embed.add_field(name="Rankings", value="\n".join(chunk), inline=False)

        return embed
