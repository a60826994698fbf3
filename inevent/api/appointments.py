from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from inevent.api.deps import load_event, raise_for_code
from inevent.database import get_db
from inevent.security.rbac import load_access
from inevent.schemas.appointment import (
    AppointmentSchema,
    AppointmentCreateSchema,
    AppointmentUpdateSchema,
    AppointmentSummarySchema,
)
from inevent.services.appointments import (
    DIRECTIONS,
    list_appointments,
    filter_appointments,
    summarize,
    get_appointment,
    create_appointment,
    update_appointment,
    find_user_registration,
)


router = APIRouter(prefix="/api/events/{event_id}/appointments", tags=["Rendez-vous"])

_ERRORS = {
    "appointment_not_found": (404, "Rendez-vous non trouvé"),
    "participants_required": (400, "Les IDs du demandeur et du destinataire sont requis"),
    "self_appointment": (400, "Impossible de demander un rendez-vous avec soi-même"),
    "participant_not_in_event": (400, "Demandeur ou destinataire invalide pour cet événement"),
    "duplicate_appointment": (409, "Une demande de rendez-vous similaire existe déjà"),
    "invalid_status": (400, "Statut de rendez-vous inconnu"),
    "invalid_transition": (400, "Transition de statut interdite"),
    "not_a_party": (403, "Vous ne participez pas à ce rendez-vous"),
    "recipient_only": (403, "Seul le destinataire peut accepter ou refuser ce rendez-vous"),
    "not_requester": (403, "Vous ne pouvez demander un rendez-vous qu'en votre nom"),
}


def _current_participant_id(db: Session, event_id: int, user_id: int) -> int | None:
    reg = find_user_registration(db, event_id, user_id)
    return reg.id if reg else None


@router.get("", response_model=list[AppointmentSchema])
def api_list_appointments(
    event_id: int,
    request: Request,
    db: Session = Depends(get_db),
    status: str | None = Query(None),
    participant_id: int | None = Query(None, alias="participantId"),
    search: str | None = Query(None),
    direction: str = Query("all"),
):
    access = load_access(request)
    load_event(db, event_id)
    if direction not in DIRECTIONS:
        raise HTTPException(status_code=400, detail="Filtre de direction inconnu")
    if status == "all":
        status = None
    items = list_appointments(db, event_id, status=status, participant_id=participant_id)
    current = participant_id if participant_id is not None else _current_participant_id(db, event_id, access.user_id)
    return filter_appointments(items, search=search, direction=direction, current_participant_id=current)


@router.get("/summary", response_model=AppointmentSummarySchema)
def api_appointments_summary(event_id: int, request: Request, db: Session = Depends(get_db)):
    access = load_access(request)
    load_event(db, event_id)
    current = _current_participant_id(db, event_id, access.user_id)
    return summarize(list_appointments(db, event_id), current)


@router.get("/{appointment_id}", response_model=AppointmentSchema)
def api_get_appointment(event_id: int, appointment_id: int, request: Request, db: Session = Depends(get_db)):
    load_access(request)
    ap = get_appointment(db, event_id, appointment_id)
    if not ap:
        raise HTTPException(status_code=404, detail="Rendez-vous non trouvé")
    return ap


@router.post("", response_model=AppointmentSchema, status_code=201, summary="Demander un rendez-vous")
def api_create_appointment(
    event_id: int, payload: AppointmentCreateSchema, request: Request, db: Session = Depends(get_db)
):
    access = load_access(request)
    load_event(db, event_id)
    actor_id = _current_participant_id(db, event_id, access.user_id)
    res = create_appointment(db, event_id, payload, actor_id)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.put("/{appointment_id}", response_model=AppointmentSchema, summary="Accepter, refuser ou terminer")
def api_update_appointment(
    event_id: int,
    appointment_id: int,
    payload: AppointmentUpdateSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    access = load_access(request)
    actor_id = _current_participant_id(db, event_id, access.user_id)
    res = update_appointment(db, event_id, appointment_id, payload, actor_id)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res
