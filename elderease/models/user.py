from sqlalchemy import Column, String, Integer, Text, DateTime
from sqlalchemy.orm import relationship
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    # Stored lower-cased; lookups normalise the same way
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    birth_year = Column(Integer, nullable=True)
    profile_photo = Column(Text, nullable=True)  # data URL of the uploaded image
    last_login = Column(DateTime(timezone=True), nullable=True)

    # Relationships - User OWNS these
    preferences = relationship(
        "UserPreference",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    progress_records = relationship(
        "TutorialProgress",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    bookmarks = relationship(
        "Bookmark",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
