"""Language-model integration."""

from ghostagotchi.core.llm.client import ChatPrompt, Completion, LanguageModelClient

__all__ = ["ChatPrompt", "Completion", "LanguageModelClient"]
