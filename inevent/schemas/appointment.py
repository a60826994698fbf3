from datetime import datetime

from pydantic import BaseModel, field_validator

from .validators import CAMEL_CONFIG, format_datetime


class ParticipantSummarySchema(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    company: str | None = None
    job_title: str | None = None

    model_config = CAMEL_CONFIG


class AppointmentSchema(BaseModel):
    id: int
    event_id: int
    requester_id: int
    recipient_id: int
    status: str
    message: str | None = None
    proposed_time: str | None = None
    confirmed_time: str | None = None
    location: str | None = None
    notes: str | None = None
    created_at: str
    updated_at: str
    requester: ParticipantSummarySchema
    recipient: ParticipantSummarySchema

    model_config = CAMEL_CONFIG

    @field_validator("proposed_time", "confirmed_time", "created_at", "updated_at", mode="before")
    @classmethod
    def parse_date(cls, v):
        return format_datetime(v)


class AppointmentCreateSchema(BaseModel):
    # Ids optionnels ici : leur absence est signalée en 400 par le service
    requester_id: int | None = None
    recipient_id: int | None = None
    message: str | None = None
    proposed_time: datetime | None = None
    location: str | None = None

    model_config = CAMEL_CONFIG


class AppointmentUpdateSchema(BaseModel):
    status: str | None = None
    confirmed_time: datetime | None = None
    notes: str | None = None

    model_config = CAMEL_CONFIG


class AppointmentSummarySchema(BaseModel):
    received: int = 0
    sent: int = 0
    pending_received: int = 0
    accepted: int = 0

    model_config = CAMEL_CONFIG
