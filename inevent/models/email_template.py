from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean
from inevent.database import Base


class EmailTemplate(Base):
    __tablename__ = "inevent_email_template"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    subject = Column(String(500), nullable=False)
    category = Column(String(60), nullable=False, default="CUSTOM")
    type = Column(String(30), nullable=False, default="ANNOUNCEMENT")
    html_content = Column(Text, nullable=False)
    text_content = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=False)
    is_default = Column(Boolean, nullable=False, default=False)
    is_global = Column(Boolean, nullable=False, default=False)
    # Pas de FK : les templates globaux sont semés sans événement
    event_id = Column(Integer, nullable=True, index=True)
    # Template global dont cette copie d'événement est issue
    base_template_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
