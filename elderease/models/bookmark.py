from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from .base import BaseModel


class Bookmark(BaseModel):
    """Presence-only marker: the row exists iff the tutorial is saved."""

    __tablename__ = "bookmarks"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tutorial_id = Column(String(50), ForeignKey("tutorials.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "tutorial_id", name="uq_bookmark_user_tutorial"),
    )

    user = relationship("User", back_populates="bookmarks")
