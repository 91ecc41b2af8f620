"""Ghostagotchi: adopt a ghost, feed it, play with it, chat with it."""

__version__ = "1.0.0"
