from sqlalchemy.orm import Session

from inevent.models.event import Event
from inevent.models.registration import Registration

# Type de destinataire -> type d'inscription (None = tous)
RECIPIENT_TYPES: dict[str, str | None] = {
    "ALL_PARTICIPANTS": None,
    "PARTICIPANTS": "PARTICIPANT",
    "SPEAKERS": "SPEAKER",
    "EXHIBITORS": "EXHIBITOR",
}


def get_event(db: Session, event_id: int) -> Event | None:
    return db.query(Event).filter(Event.id == event_id).first()


def list_recipients(db: Session, event_id: int, recipient_type: str) -> list[Registration] | None:
    """Inscriptions ciblées par un type de destinataire ; None si le type est inconnu."""
    if recipient_type not in RECIPIENT_TYPES:
        return None
    q = db.query(Registration).filter(Registration.event_id == event_id)
    registration_type = RECIPIENT_TYPES[recipient_type]
    if registration_type is not None:
        q = q.filter(Registration.type == registration_type)
    return q.order_by(Registration.id.asc()).all()


def recipient_counts(db: Session, event_id: int) -> dict[str, int]:
    return {key: len(list_recipients(db, event_id, key)) for key in RECIPIENT_TYPES}
