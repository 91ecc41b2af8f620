from .base_cog import BaseCog
from .ghost_bot import GhostBot
from .loader import FeatureLoader, LoadResult, load_all_features

__all__ = ["BaseCog", "GhostBot", "FeatureLoader", "LoadResult", "load_all_features"]
