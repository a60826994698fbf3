from inevent.database import Base
from .event import Event
from .registration import Registration
from .appointment import Appointment
from .email_template import EmailTemplate
from .email_campaign import EmailCampaign
from .email_log import EmailLog


__all__ = [
    "Base",
    "Event",
    "Registration",
    "Appointment",
    "EmailTemplate",
    "EmailCampaign",
    "EmailLog",
]
