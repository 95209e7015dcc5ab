from sqlalchemy import Column, Integer, ForeignKey, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from .base import BaseModel


class UserPreference(BaseModel):
    __tablename__ = "user_preferences"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    # Accessibility options keyed by their camelCase names, see schemas.preferences
    preferences = Column(JSON().with_variant(JSONB, "postgresql"), default=dict, nullable=False)
    version = Column(Integer, default=1, nullable=False)

    user = relationship("User", back_populates="preferences")
