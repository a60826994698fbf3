from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from inevent.database import Base


class Registration(Base):
    __tablename__ = "inevent_registration"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    event_id = Column(Integer, ForeignKey("inevent_event.id"), nullable=False, index=True)
    # Lien facultatif vers le compte utilisateur (auth externe)
    user_id = Column(Integer, nullable=True, index=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    company = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    type = Column(String(20), nullable=False, default="PARTICIPANT")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
