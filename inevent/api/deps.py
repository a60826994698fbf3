from fastapi import HTTPException, Request
from sqlalchemy.orm import Session

from inevent.models.event import Event
from inevent.security.rbac import Access, load_access, require_organizer, require_event_access
from inevent.services.events import get_event


def load_event(db: Session, event_id: int) -> Event:
    event = get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Événement non trouvé")
    return event


def event_for_organizer(request: Request, db: Session, event_id: int) -> tuple[Access, Event]:
    """Utilisateur organisateur/admin ayant accès à l'événement demandé."""
    access = load_access(request)
    require_organizer(access)
    event = load_event(db, event_id)
    require_event_access(access, event)
    return access, event


def raise_for_code(code: str, errors: dict[str, tuple[int, str]]) -> None:
    status_code, detail = errors.get(code, (400, code))
    raise HTTPException(status_code=status_code, detail=detail)
