"""
Slide model - individual pitch deck slides
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class Slide(Base):
    """Slide content; position orders slides within their project"""

    __tablename__ = "slides"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)  # 1-based
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    hero_image_url = Column(String(1000), nullable=True)
    layout = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    project = relationship("Project", back_populates="slides")
    conversation = relationship(
        "ConversationContext",
        back_populates="slide",
        uselist=False,
        cascade="all, delete-orphan",
    )
