from datetime import datetime
from typing import Iterable
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from inevent.models.appointment import Appointment
from inevent.models.registration import Registration
from inevent.schemas.appointment import AppointmentCreateSchema, AppointmentUpdateSchema

logger = logging.getLogger("uvicorn.error")

PENDING = "PENDING"
ACCEPTED = "ACCEPTED"
DECLINED = "DECLINED"
COMPLETED = "COMPLETED"

APPOINTMENT_STATUSES = (PENDING, ACCEPTED, DECLINED, COMPLETED)

# DECLINED et COMPLETED sont terminaux
TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({ACCEPTED, DECLINED}),
    ACCEPTED: frozenset({COMPLETED}),
    DECLINED: frozenset(),
    COMPLETED: frozenset(),
}

# Statuts que seul le destinataire peut poser
RECIPIENT_ONLY = frozenset({ACCEPTED, DECLINED})

DIRECTIONS = ("all", "received", "sent", "pending", "accepted")


# -------------------- Machine à états --------------------
def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def check_transition(appointment: Appointment, target: str, actor_id: int | None) -> str | None:
    """Renvoie un code d'erreur si `actor_id` ne peut pas passer le rendez-vous à `target`."""
    if target not in APPOINTMENT_STATUSES:
        return "invalid_status"
    if actor_id not in (appointment.requester_id, appointment.recipient_id):
        return "not_a_party"
    if not can_transition(appointment.status, target):
        return "invalid_transition"
    if target in RECIPIENT_ONLY and actor_id != appointment.recipient_id:
        return "recipient_only"
    return None


# -------------------- Filtres du tableau de bord --------------------
def _full_name(reg: Registration | None) -> str:
    if reg is None:
        return ""
    return f"{reg.first_name or ''} {reg.last_name or ''}".lower()


def matches_search(appointment: Appointment, search: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return (
        needle in _full_name(appointment.requester)
        or needle in _full_name(appointment.recipient)
        or (appointment.message is not None and needle in appointment.message.lower())
    )


def matches_direction(appointment: Appointment, direction: str | None, current_participant_id: int | None) -> bool:
    if not direction or direction == "all":
        return True
    received = appointment.recipient_id == current_participant_id
    sent = appointment.requester_id == current_participant_id
    if direction == "received":
        return received
    if direction == "sent":
        return sent
    if direction == "pending":
        return received and appointment.status == PENDING
    if direction == "accepted":
        return (received or sent) and appointment.status == ACCEPTED
    return False


def filter_appointments(
    appointments: Iterable[Appointment],
    *,
    search: str | None = None,
    status: str | None = None,
    direction: str | None = None,
    current_participant_id: int | None = None,
) -> list[Appointment]:
    """Applique les trois filtres indépendants : recherche, statut, sens."""
    return [
        a
        for a in appointments
        if matches_search(a, search)
        and (not status or status == "all" or a.status == status)
        and matches_direction(a, direction, current_participant_id)
    ]


def summarize(appointments: Iterable[Appointment], current_participant_id: int | None) -> dict[str, int]:
    items = list(appointments)
    return {
        "received": len(filter_appointments(items, direction="received", current_participant_id=current_participant_id)),
        "sent": len(filter_appointments(items, direction="sent", current_participant_id=current_participant_id)),
        "pending_received": len(filter_appointments(items, direction="pending", current_participant_id=current_participant_id)),
        "accepted": len(filter_appointments(items, direction="accepted", current_participant_id=current_participant_id)),
    }


# -------------------- Requêtes --------------------
def get_registration(db: Session, event_id: int, registration_id: int | None) -> Registration | None:
    if registration_id is None:
        return None
    return (
        db.query(Registration)
        .filter(Registration.id == registration_id, Registration.event_id == event_id)
        .first()
    )


def find_user_registration(db: Session, event_id: int, user_id: int | None) -> Registration | None:
    if user_id is None:
        return None
    return (
        db.query(Registration)
        .filter(Registration.event_id == event_id, Registration.user_id == user_id)
        .first()
    )


def list_appointments(
    db: Session,
    event_id: int,
    *,
    status: str | None = None,
    participant_id: int | None = None,
) -> list[Appointment]:
    q = db.query(Appointment).filter(Appointment.event_id == event_id)
    if status:
        q = q.filter(Appointment.status == status)
    if participant_id is not None:
        q = q.filter(
            or_(
                Appointment.requester_id == participant_id,
                Appointment.recipient_id == participant_id,
            )
        )
    return q.order_by(Appointment.created_at.desc(), Appointment.id.desc()).all()


def get_appointment(db: Session, event_id: int, appointment_id: int) -> Appointment | None:
    return (
        db.query(Appointment)
        .filter(Appointment.id == appointment_id, Appointment.event_id == event_id)
        .first()
    )


def create_appointment(
    db: Session, event_id: int, payload: AppointmentCreateSchema, actor_id: int | None
) -> Appointment | str:
    """Crée une demande PENDING ; seul le demandeur lui-même peut la déposer."""
    if payload.requester_id is None or payload.recipient_id is None:
        return "participants_required"
    if actor_id is None or actor_id != payload.requester_id:
        return "not_requester"
    if payload.requester_id == payload.recipient_id:
        return "self_appointment"
    requester = get_registration(db, event_id, payload.requester_id)
    recipient = get_registration(db, event_id, payload.recipient_id)
    if not requester or not recipient:
        return "participant_not_in_event"

    duplicate = (
        db.query(Appointment)
        .filter(
            Appointment.event_id == event_id,
            Appointment.requester_id == payload.requester_id,
            Appointment.recipient_id == payload.recipient_id,
            Appointment.status.in_([PENDING, ACCEPTED]),
        )
        .first()
    )
    if duplicate:
        return "duplicate_appointment"

    ap = Appointment(
        event_id=event_id,
        requester_id=payload.requester_id,
        recipient_id=payload.recipient_id,
        message=payload.message,
        proposed_time=payload.proposed_time,
        location=payload.location,
        status=PENDING,
    )
    try:
        db.add(ap)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("create_appointment failed event_id=%s", event_id)
        raise
    db.refresh(ap)
    logger.info("create_appointment success id=%s event_id=%s", ap.id, event_id)
    return ap


def update_appointment(
    db: Session,
    event_id: int,
    appointment_id: int,
    payload: AppointmentUpdateSchema,
    actor_id: int | None,
) -> Appointment | str:
    ap = get_appointment(db, event_id, appointment_id)
    if not ap:
        return "appointment_not_found"

    if payload.status:
        error = check_transition(ap, payload.status, actor_id)
        if error:
            logger.info(
                "update_appointment refused id=%s %s -> %s actor=%s (%s)",
                ap.id, ap.status, payload.status, actor_id, error,
            )
            return error
    elif actor_id not in (ap.requester_id, ap.recipient_id):
        return "not_a_party"

    previous = ap.status
    if payload.status:
        ap.status = payload.status
        if payload.status == ACCEPTED and (payload.confirmed_time or ap.proposed_time):
            ap.confirmed_time = payload.confirmed_time or ap.proposed_time
    if payload.notes:
        ap.notes = payload.notes
    ap.updated_at = datetime.utcnow()
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("update_appointment failed id=%s", appointment_id)
        raise
    db.refresh(ap)
    logger.info("update_appointment success id=%s %s -> %s", ap.id, previous, ap.status)
    return ap
