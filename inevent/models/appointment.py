from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from inevent.database import Base


class Appointment(Base):
    __tablename__ = "inevent_appointment"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    event_id = Column(Integer, ForeignKey("inevent_event.id"), nullable=False, index=True)
    requester_id = Column(Integer, ForeignKey("inevent_registration.id"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("inevent_registration.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="PENDING")
    message = Column(Text, nullable=True)
    proposed_time = Column(DateTime, nullable=True)
    confirmed_time = Column(DateTime, nullable=True)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    requester = relationship("Registration", foreign_keys=[requester_id], lazy="joined")
    recipient = relationship("Registration", foreign_keys=[recipient_id], lazy="joined")
