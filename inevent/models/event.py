from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text
from inevent.database import Base


class Event(Base):
    __tablename__ = "inevent_event"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    start_time = Column(String(20), nullable=True)
    location = Column(String(255), nullable=True)
    banner = Column(Text, nullable=True)
    support_email = Column(String(255), nullable=True)
    organizer_name = Column(String(255), nullable=True)
    # Compte organisateur propriétaire (auth externe, pas de FK)
    user_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
