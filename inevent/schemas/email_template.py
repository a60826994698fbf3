from typing import Literal

from pydantic import BaseModel, field_validator

from .validators import CAMEL_CONFIG, format_datetime

TemplateType = Literal["INVITATION", "ANNOUNCEMENT", "REMINDER", "FOLLOW_UP"]

TemplateCategory = Literal[
    "CONFIRMATION_INSCRIPTION",
    "BIENVENUE_PARTICIPANT",
    "RAPPEL_EVENEMENT",
    "INFOS_PRATIQUES",
    "SUIVI_POST_EVENEMENT",
    "GUIDE_EXPOSANT",
    "RAPPEL_INSTALLATION",
    "INFOS_TECHNIQUES_STAND",
    "BILAN_PARTICIPATION",
    "CONFIRMATION_SPEAKER",
    "INFOS_TECHNIQUES_PRESENTATION",
    "RAPPEL_PRESENTATION",
    "REMERCIEMENT_SPEAKER",
    "CUSTOM",
]


class EmailTemplateSchema(BaseModel):
    id: int
    name: str
    description: str | None = None
    subject: str
    category: str
    type: str
    html_content: str
    text_content: str | None = None
    is_active: bool
    is_default: bool
    is_global: bool
    event_id: int | None = None
    base_template_id: int | None = None
    created_at: str
    updated_at: str | None = None

    model_config = CAMEL_CONFIG

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_date(cls, v):
        return format_datetime(v)


class EmailTemplateCreateSchema(BaseModel):
    name: str
    subject: str
    html_content: str
    description: str | None = None
    text_content: str | None = None
    category: TemplateCategory | None = "CUSTOM"
    type: TemplateType | None = "ANNOUNCEMENT"
    is_active: bool | None = False

    model_config = CAMEL_CONFIG


class EmailTemplateUpdateSchema(BaseModel):
    name: str | None = None
    description: str | None = None
    subject: str | None = None
    html_content: str | None = None
    text_content: str | None = None
    is_active: bool | None = None

    model_config = CAMEL_CONFIG


class TemplatePreviewRequestSchema(BaseModel):
    # Contenu non sauvegardé de l'éditeur, prioritaire sur le template stocké
    subject: str | None = None
    html_content: str | None = None

    model_config = CAMEL_CONFIG


class TemplatePreviewSchema(BaseModel):
    subject: str
    html_content: str
    text_content: str | None = None

    model_config = CAMEL_CONFIG


class SendTestEmailSchema(BaseModel):
    email: str | None = None
    preview_content: str | None = None
    subject: str | None = None

    model_config = CAMEL_CONFIG
