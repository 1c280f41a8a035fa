from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobboard.db.base import Base, utcnow


class UserSession(Base):
    """
    Server-side login session.

    Valid while it exists, ``expires_at`` is in the future and the owning
    user is active. Identified by the random token kept in the cookie.
    """

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    session_token = Column(String(64), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="sessions")
