from datetime import datetime
from typing import Iterable
import logging

from sqlalchemy.orm import Session

from inevent.models.event import Event
from inevent.models.registration import Registration
from inevent.models.email_campaign import EmailCampaign
from inevent.models.email_log import EmailLog
from inevent.schemas.email_campaign import EmailCampaignCreateSchema, CampaignFromTemplateSchema
from inevent.services.events import RECIPIENT_TYPES, list_recipients
from inevent.services.mailer import send_email
from inevent.services.template_render import build_merge_fields, render_text
from inevent.services.templates import get_template

logger = logging.getLogger("uvicorn.error")

CAMPAIGN_STATUSES = ("DRAFT", "SCHEDULED", "SENDING", "SENT", "FAILED")


def list_campaigns(db: Session, event_id: int) -> list[EmailCampaign]:
    return (
        db.query(EmailCampaign)
        .filter(EmailCampaign.event_id == event_id)
        .order_by(EmailCampaign.created_at.desc(), EmailCampaign.id.desc())
        .all()
    )


def get_campaign(db: Session, event_id: int, campaign_id: int) -> EmailCampaign | None:
    return (
        db.query(EmailCampaign)
        .filter(EmailCampaign.id == campaign_id, EmailCampaign.event_id == event_id)
        .first()
    )


def create_campaign(db: Session, event_id: int, payload: EmailCampaignCreateSchema) -> EmailCampaign | str:
    name, subject, html_content = payload.name, payload.subject, payload.html_content
    text_content = payload.text_content
    if payload.template_id is not None:
        tpl = get_template(db, event_id, payload.template_id)
        if not tpl:
            return "template_not_found"
        name = name or tpl.name
        subject = subject or tpl.subject
        html_content = html_content or tpl.html_content
        text_content = text_content or tpl.text_content
    if not name or not subject or not html_content:
        return "missing_fields"
    recipient_type = payload.recipient_type or "ALL_PARTICIPANTS"
    if recipient_type not in RECIPIENT_TYPES:
        return "unsupported_recipient_type"

    campaign = EmailCampaign(
        event_id=event_id,
        template_id=payload.template_id,
        name=name,
        description=payload.description,
        type=payload.type or "CUSTOM",
        recipient_type=recipient_type,
        subject=subject,
        html_content=html_content,
        text_content=text_content,
        scheduled_at=payload.scheduled_at,
        status="SCHEDULED" if payload.scheduled_at else "DRAFT",
    )
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    logger.info("create_campaign success id=%s event_id=%s", campaign.id, event_id)
    return campaign


def _deliver(db: Session, event: Event, campaign: EmailCampaign, recipients: Iterable[Registration]) -> tuple[int, int]:
    """Un envoi par destinataire, un EmailLog par tentative. Les échecs n'interrompent pas la boucle."""
    sent = failed = 0
    for reg in recipients:
        fields = build_merge_fields(event, participant_name=reg.full_name, extra={"name": reg.full_name})
        ok = send_email(
            reg.email,
            render_text(campaign.subject, fields),
            render_text(campaign.text_content, fields),
            html=render_text(campaign.html_content, fields),
        )
        db.add(
            EmailLog(
                campaign_id=campaign.id,
                recipient_email=reg.email,
                recipient_name=reg.full_name,
                status="SENT" if ok else "FAILED",
                sent_at=datetime.utcnow() if ok else None,
                error_message=None if ok else "Échec de l'envoi SMTP",
            )
        )
        if ok:
            sent += 1
        else:
            failed += 1
    return sent, failed


def send_campaign(db: Session, event: Event, campaign_id: int) -> dict | str:
    campaign = get_campaign(db, event.id, campaign_id)
    if not campaign:
        return "campaign_not_found"
    if campaign.status in ("SENT", "SENDING"):
        return "campaign_already_sent"

    recipients = list_recipients(db, event.id, campaign.recipient_type)
    if recipients is None:
        return "unsupported_recipient_type"
    if not recipients:
        campaign.status = "FAILED"
        campaign.total_recipients = 0
        campaign.failure_count = 0
        db.commit()
        return "no_recipients"

    campaign.status = "SENDING"
    campaign.total_recipients = len(recipients)
    db.commit()

    try:
        sent, failed = _deliver(db, event, campaign, recipients)
        campaign.status = "SENT"
        campaign.sent_at = datetime.utcnow()
        campaign.success_count = sent
        campaign.failure_count = failed
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("send_campaign failed id=%s", campaign_id)
        campaign.status = "FAILED"
        db.commit()
        raise

    logger.info("send_campaign id=%s sent=%s failed=%s", campaign.id, sent, failed)
    return {
        "campaign_id": campaign.id,
        "recipient_count": len(recipients),
        "emails_sent": sent,
        "emails_failed": failed,
        "message": f"{sent} emails envoyés, {failed} échecs",
    }


def send_from_template(db: Session, event: Event, payload: CampaignFromTemplateSchema) -> dict | str:
    """Crée une campagne depuis un template puis l'envoie immédiatement ou la programme."""
    tpl = get_template(db, event.id, payload.template_id)
    if not tpl:
        return "template_not_found"
    recipients = list_recipients(db, event.id, payload.recipient_type)
    if recipients is None:
        return "unsupported_recipient_type"
    if not recipients:
        return "no_recipients"
    if payload.send_type == "scheduled" and not payload.scheduled_at:
        return "schedule_required"

    campaign = EmailCampaign(
        event_id=event.id,
        template_id=tpl.id,
        name=payload.name or tpl.name,
        description=payload.description or tpl.description,
        type=tpl.type,
        recipient_type=payload.recipient_type,
        subject=tpl.subject,
        html_content=tpl.html_content,
        text_content=tpl.text_content,
        status="SENDING" if payload.send_type == "immediate" else "SCHEDULED",
        scheduled_at=payload.scheduled_at,
        total_recipients=len(recipients),
    )
    db.add(campaign)
    db.flush()

    sent = failed = 0
    if payload.send_type == "immediate":
        sent, failed = _deliver(db, event, campaign, recipients)
        campaign.status = "SENT"
        campaign.sent_at = datetime.utcnow()
        campaign.success_count = sent
        campaign.failure_count = failed
        message = f"{sent} emails envoyés, {failed} échecs"
    else:
        for reg in recipients:
            db.add(
                EmailLog(
                    campaign_id=campaign.id,
                    recipient_email=reg.email,
                    recipient_name=reg.full_name,
                    status="PENDING",
                )
            )
        message = f"Campagne programmée pour {len(recipients)} destinataires"
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("send_from_template failed template_id=%s", tpl.id)
        raise
    return {
        "campaign_id": campaign.id,
        "recipient_count": len(recipients),
        "emails_sent": sent,
        "emails_failed": failed,
        "message": message,
    }


def list_campaign_logs(db: Session, campaign_id: int) -> list[EmailLog]:
    return db.query(EmailLog).filter(EmailLog.campaign_id == campaign_id).order_by(EmailLog.id.asc()).all()
