"""FastAPI routers acting as controllers in the MVC architecture."""

from . import stt

__all__ = ["stt"]
