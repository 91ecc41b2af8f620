from .service import LeaderboardService

__all__ = ["LeaderboardService"]
