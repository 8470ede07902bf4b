"""
Database models package - SQLAlchemy ORM models
"""

from .conversation import ConversationContext
from .project import Project
from .slide import Slide
from .user import User

__all__ = [
    "ConversationContext",
    "Project",
    "Slide",
    "User",
]
