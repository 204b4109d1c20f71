# landing/models/session.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from landing.utils.database import Base


class UserSession(Base):
    """Серверная сессия: cookie хранит только подписанный id."""
    __tablename__ = "user_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
