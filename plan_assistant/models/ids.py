"""Identifier generation shared by messages, plans, todos and routes."""
from typing import Callable
import uuid


IdFactory = Callable[[], str]


def random_id() -> str:
    """Return a short random identifier."""
    return uuid.uuid4().hex[:12]
