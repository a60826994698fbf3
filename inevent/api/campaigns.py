from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from inevent.api.deps import event_for_organizer, raise_for_code
from inevent.database import get_db
from inevent.schemas.email_campaign import (
    EmailCampaignSchema,
    EmailCampaignCreateSchema,
    CampaignFromTemplateSchema,
    CampaignSendResultSchema,
    EmailLogSchema,
)
from inevent.services.campaigns import (
    list_campaigns,
    get_campaign,
    create_campaign,
    send_campaign,
    send_from_template,
    list_campaign_logs,
)
from inevent.services.events import recipient_counts


router = APIRouter(prefix="/api/events/{event_id}", tags=["Campagnes"])

_ERRORS = {
    "campaign_not_found": (404, "Campagne non trouvée"),
    "template_not_found": (404, "Template non trouvé"),
    "missing_fields": (400, "Nom, sujet et contenu HTML sont requis"),
    "unsupported_recipient_type": (400, "Type de destinataire non supporté"),
    "campaign_already_sent": (400, "Cette campagne a déjà été envoyée"),
    "no_recipients": (400, "Aucun destinataire trouvé"),
    "schedule_required": (400, "Date d'envoi programmé requise"),
}


@router.get("/campaigns", response_model=list[EmailCampaignSchema])
def api_list_campaigns(event_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    return list_campaigns(db, event_id)


@router.post("/campaigns", response_model=EmailCampaignSchema, status_code=201, summary="Créer une campagne")
def api_create_campaign(
    event_id: int, payload: EmailCampaignCreateSchema, request: Request, db: Session = Depends(get_db)
):
    event_for_organizer(request, db, event_id)
    res = create_campaign(db, event_id, payload)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.post("/campaigns/send", response_model=CampaignSendResultSchema, summary="Envoyer un template")
def api_send_from_template(
    event_id: int, payload: CampaignFromTemplateSchema, request: Request, db: Session = Depends(get_db)
):
    _, event = event_for_organizer(request, db, event_id)
    res = send_from_template(db, event, payload)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.get("/campaigns/{campaign_id}", response_model=EmailCampaignSchema)
def api_get_campaign(event_id: int, campaign_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    campaign = get_campaign(db, event_id, campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campagne non trouvée")
    return campaign


@router.get("/campaigns/{campaign_id}/logs", response_model=list[EmailLogSchema])
def api_campaign_logs(event_id: int, campaign_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    if not get_campaign(db, event_id, campaign_id):
        raise HTTPException(status_code=404, detail="Campagne non trouvée")
    return list_campaign_logs(db, campaign_id)


@router.post("/campaigns/{campaign_id}/send", response_model=CampaignSendResultSchema)
def api_send_campaign(event_id: int, campaign_id: int, request: Request, db: Session = Depends(get_db)):
    _, event = event_for_organizer(request, db, event_id)
    res = send_campaign(db, event, campaign_id)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.get("/recipients-count")
def api_recipients_count(event_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    return recipient_counts(db, event_id)
