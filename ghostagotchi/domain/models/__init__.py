"""
Domain models for Ghostagotchi.

Pure game rules, separate from the database models:
- pet: the progression engine (leveling, feed, play, adoption defaults)
- ranking: leaderboard ordering, limit clamping and age buckets

Services convert database rows into these snapshots and back.
"""

from .pet import (
    FEED_XP,
    PLAY_XP,
    STAT_MAX,
    XP_PER_LEVEL,
    PetSnapshot,
    ProgressionResult,
    feed,
    level_for_experience,
    play,
    validate_pet_name,
)
from .ranking import ANONYMOUS_OWNER, clamp_limit, format_age, ranking_key

__all__ = [
    "FEED_XP",
    "PLAY_XP",
    "STAT_MAX",
    "XP_PER_LEVEL",
    "PetSnapshot",
    "ProgressionResult",
    "feed",
    "play",
    "level_for_experience",
    "validate_pet_name",
    "ANONYMOUS_OWNER",
    "clamp_limit",
    "format_age",
    "ranking_key",
]
