"""Conversational career coaching backed by Gemini."""

__version__ = "0.1.0"
