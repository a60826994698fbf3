import re
from datetime import datetime

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def format_datetime(v):
    """
    Convertit un datetime en str ISO 8601 (secondes).
    Si v n'est pas un datetime, le renvoie tel quel.
    """
    if isinstance(v, datetime):
        return v.isoformat(timespec="seconds")
    return v


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(EMAIL_RE.match(value.strip()))


# Champs exposés en camelCase (requesterId, htmlContent...) côté JSON
CAMEL_CONFIG = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)
