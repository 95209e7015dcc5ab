from sqlalchemy import Column, Integer, Boolean, String, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from .base import BaseModel


class TutorialProgress(BaseModel):
    __tablename__ = "tutorial_progress"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tutorial_id = Column(String(50), ForeignKey("tutorials.id", ondelete="CASCADE"), nullable=False, index=True)

    # 0-based; completed implies current_step >= number of steps
    current_step = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "tutorial_id", name="uq_progress_user_tutorial"),
    )

    user = relationship("User", back_populates="progress_records")
    tutorial = relationship("Tutorial")
