# landing/models/lead.py

from sqlalchemy import Column, String, DateTime
from landing.utils.database import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(String(36), primary_key=True)                      # UUID строкой
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    whatsapp = Column(String(50), nullable=False)                  # как ввёл посетитель
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
