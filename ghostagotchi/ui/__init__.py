from .embeds import EmbedFactory

__all__ = ["EmbedFactory"]
