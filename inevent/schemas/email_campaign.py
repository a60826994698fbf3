from datetime import datetime
from typing import Literal

from pydantic import BaseModel, field_validator

from .validators import CAMEL_CONFIG, format_datetime


class EmailCampaignSchema(BaseModel):
    id: int
    event_id: int
    template_id: int | None = None
    name: str
    description: str | None = None
    type: str
    recipient_type: str
    subject: str
    html_content: str
    text_content: str | None = None
    status: str
    scheduled_at: str | None = None
    sent_at: str | None = None
    total_recipients: int = 0
    success_count: int = 0
    failure_count: int = 0
    created_at: str

    model_config = CAMEL_CONFIG

    @field_validator("scheduled_at", "sent_at", "created_at", mode="before")
    @classmethod
    def parse_date(cls, v):
        return format_datetime(v)


class EmailCampaignCreateSchema(BaseModel):
    name: str | None = None
    subject: str | None = None
    html_content: str | None = None
    template_id: int | None = None
    description: str | None = None
    type: str | None = None
    recipient_type: str | None = None
    text_content: str | None = None
    scheduled_at: datetime | None = None

    model_config = CAMEL_CONFIG


class CampaignFromTemplateSchema(BaseModel):
    template_id: int
    recipient_type: str = "ALL_PARTICIPANTS"
    name: str | None = None
    description: str | None = None
    send_type: Literal["immediate", "scheduled"] = "immediate"
    scheduled_at: datetime | None = None

    model_config = CAMEL_CONFIG


class CampaignSendResultSchema(BaseModel):
    campaign_id: int
    recipient_count: int
    emails_sent: int
    emails_failed: int
    message: str

    model_config = CAMEL_CONFIG


class EmailLogSchema(BaseModel):
    id: int
    campaign_id: int
    recipient_email: str
    recipient_name: str | None = None
    status: str
    error_message: str | None = None
    sent_at: str | None = None

    model_config = CAMEL_CONFIG

    @field_validator("sent_at", mode="before")
    @classmethod
    def parse_date(cls, v):
        return format_datetime(v)
