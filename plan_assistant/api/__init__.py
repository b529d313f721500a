"""HTTP API for the plan assistant."""
from .routes import router

__all__ = ["router"]
