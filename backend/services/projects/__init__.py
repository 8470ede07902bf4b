"""Project CRUD."""

from .service import ProjectService

__all__ = ["ProjectService"]
