from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from inevent.database import Base


class EmailLog(Base):
    __tablename__ = "inevent_email_log"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    campaign_id = Column(Integer, ForeignKey("inevent_email_campaign.id"), nullable=False, index=True)
    recipient_email = Column(String(255), nullable=False)
    recipient_name = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")
    error_message = Column(Text, nullable=True)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
