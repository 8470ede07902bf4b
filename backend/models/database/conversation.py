"""
Conversation context model - chat-edit history per slide
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from database import Base


class ConversationContext(Base):
    """Accumulated chat instructions for one slide"""

    __tablename__ = "conversation_contexts"

    slide_id = Column(
        Integer, ForeignKey("slides.id", ondelete="CASCADE"), primary_key=True
    )
    context = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    slide = relationship("Slide", back_populates="conversation")
