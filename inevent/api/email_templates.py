from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from inevent.api.deps import event_for_organizer, raise_for_code
from inevent.database import get_db
from inevent.schemas.email_template import (
    EmailTemplateSchema,
    EmailTemplateCreateSchema,
    EmailTemplateUpdateSchema,
    TemplatePreviewRequestSchema,
    TemplatePreviewSchema,
    SendTestEmailSchema,
)
from inevent.schemas.email_campaign import EmailCampaignSchema
from inevent.services.templates import (
    list_templates,
    get_template,
    create_template,
    update_template,
    preview_template,
    send_test_email,
    latest_campaign_for_template,
)


router = APIRouter(prefix="/api/events/{event_id}/templates", tags=["Templates email"])

_ERRORS = {
    "template_not_found": (404, "Template non trouvé"),
    "missing_fields": (400, "Données manquantes"),
    "invalid_email": (400, "Adresse email invalide"),
    "send_failed": (502, "Erreur lors de l'envoi de l'email de test"),
}


@router.get("", response_model=list[EmailTemplateSchema])
def api_list_templates(event_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    return list_templates(db, event_id)


@router.post("", response_model=EmailTemplateSchema, status_code=201, summary="Créer un template d'événement")
def api_create_template(
    event_id: int, payload: EmailTemplateCreateSchema, request: Request, db: Session = Depends(get_db)
):
    event_for_organizer(request, db, event_id)
    res = create_template(db, event_id, payload)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.get("/{template_id}", response_model=EmailTemplateSchema)
def api_get_template(event_id: int, template_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    tpl = get_template(db, event_id, template_id)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template non trouvé")
    return tpl


@router.patch("/{template_id}", response_model=EmailTemplateSchema, summary="Modifier ou activer un template")
def api_update_template(
    event_id: int,
    template_id: int,
    payload: EmailTemplateUpdateSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    event_for_organizer(request, db, event_id)
    tpl = update_template(db, event_id, template_id, payload)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template non trouvé")
    return tpl


@router.post("/{template_id}/preview", response_model=TemplatePreviewSchema)
def api_preview_template(
    event_id: int,
    template_id: int,
    request: Request,
    payload: TemplatePreviewRequestSchema | None = None,
    db: Session = Depends(get_db),
):
    _, event = event_for_organizer(request, db, event_id)
    res = preview_template(db, event, template_id, payload)
    if res is None:
        raise HTTPException(status_code=404, detail="Template non trouvé")
    return res


@router.post("/{template_id}/test", summary="Envoyer un email de test")
def api_send_test_email(
    event_id: int,
    template_id: int,
    payload: SendTestEmailSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    _, event = event_for_organizer(request, db, event_id)
    res = send_test_email(db, event, template_id, payload)
    if isinstance(res, str):
        raise_for_code(res, _ERRORS)
    return res


@router.get("/{template_id}/campaign", response_model=EmailCampaignSchema | None)
def api_template_campaign(event_id: int, template_id: int, request: Request, db: Session = Depends(get_db)):
    event_for_organizer(request, db, event_id)
    tpl = get_template(db, event_id, template_id)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template non trouvé")
    return latest_campaign_for_template(db, event_id, tpl)
