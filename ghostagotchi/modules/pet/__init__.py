"""Pet module: adoption, lookup, feed and play."""

from .repository import PetRepository
from .service import PetService

__all__ = ["PetRepository", "PetService"]
