"""Conversational travel and task planning assistant."""

__version__ = "1.0.0"
