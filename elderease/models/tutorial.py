from sqlalchemy import Column, String, Integer, Text, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel, TimestampMixin
from elderease.db.database import Base


class Tutorial(TimestampMixin, Base):
    """Reference content. Seeded once, never edited by end users."""

    __tablename__ = "tutorials"

    id = Column(String(50), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(50), nullable=False, index=True)
    platform = Column(String(50), nullable=False, index=True)
    difficulty = Column(String(20), nullable=False, index=True)
    estimated_minutes = Column(Integer, nullable=False, default=0)

    steps = relationship(
        "TutorialStep",
        back_populates="tutorial",
        order_by="TutorialStep.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Tutorial(id={self.id}, title={self.title!r})>"


class TutorialStep(BaseModel):
    __tablename__ = "tutorial_steps"

    tutorial_id = Column(String(50), ForeignKey("tutorials.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # 0-based
    title = Column(String(200), nullable=False)
    instruction = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    tips = Column(JSON, default=list, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("tutorial_id", "position", name="uq_tutorial_step_position"),
    )

    tutorial = relationship("Tutorial", back_populates="steps")
