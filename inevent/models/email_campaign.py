from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from inevent.database import Base


class EmailCampaign(Base):
    __tablename__ = "inevent_email_campaign"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    event_id = Column(Integer, ForeignKey("inevent_event.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("inevent_email_template.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(30), nullable=False, default="CUSTOM")
    recipient_type = Column(String(30), nullable=False, default="ALL_PARTICIPANTS")
    subject = Column(String(500), nullable=False)
    html_content = Column(Text, nullable=False)
    text_content = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="DRAFT")
    scheduled_at = Column(DateTime, nullable=True)
    sent_at = Column(DateTime, nullable=True)
    total_recipients = Column(Integer, nullable=False, default=0)
    success_count = Column(Integer, nullable=False, default=0)
    failure_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
