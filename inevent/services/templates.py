from pathlib import Path
from typing import Iterable
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy import or_
from sqlalchemy.orm import Session

from inevent.models.event import Event
from inevent.models.email_template import EmailTemplate
from inevent.models.email_campaign import EmailCampaign
from inevent.schemas.email_template import (
    EmailTemplateCreateSchema,
    EmailTemplateUpdateSchema,
    TemplatePreviewRequestSchema,
    SendTestEmailSchema,
)
from inevent.schemas.validators import is_valid_email
from inevent.services.mailer import send_email
from inevent.services.template_render import SAMPLE_PARTICIPANT_NAME, build_merge_fields, render_text, render_preview

logger = logging.getLogger("uvicorn.error")

_mail_env = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent / "mail_templates")),
    autoescape=select_autoescape(["html"]),
)

TEST_SUBJECT_PREFIX = "[TEST] "


# -------------------- Lecture --------------------
def list_templates(db: Session, event_id: int) -> list[EmailTemplate]:
    """Templates globaux + templates de l'événement ; une copie d'événement masque son global."""
    rows = (
        db.query(EmailTemplate)
        .filter(or_(EmailTemplate.is_global.is_(True), EmailTemplate.event_id == event_id))
        .order_by(EmailTemplate.name.asc(), EmailTemplate.id.asc())
        .all()
    )
    shadowed = {t.base_template_id for t in rows if t.event_id == event_id and t.base_template_id}
    return [t for t in rows if t.id not in shadowed]


def get_template(db: Session, event_id: int, template_id: int) -> EmailTemplate | None:
    return (
        db.query(EmailTemplate)
        .filter(
            EmailTemplate.id == template_id,
            or_(EmailTemplate.is_global.is_(True), EmailTemplate.event_id == event_id),
        )
        .first()
    )


# -------------------- Écriture --------------------
def create_template(db: Session, event_id: int, payload: EmailTemplateCreateSchema) -> EmailTemplate | str:
    if not payload.name.strip() or not payload.subject.strip() or not payload.html_content.strip():
        return "missing_fields"
    tpl = EmailTemplate(
        name=payload.name.strip(),
        description=payload.description,
        subject=payload.subject,
        category=payload.category or "CUSTOM",
        type=payload.type or "ANNOUNCEMENT",
        html_content=payload.html_content,
        text_content=payload.text_content,
        is_active=bool(payload.is_active),
        is_default=False,
        is_global=False,
        event_id=event_id,
    )
    db.add(tpl)
    db.commit()
    db.refresh(tpl)
    logger.info("create_template success id=%s event_id=%s", tpl.id, event_id)
    return tpl


def _event_copy(db: Session, event_id: int, base: EmailTemplate) -> EmailTemplate:
    existing = (
        db.query(EmailTemplate)
        .filter(EmailTemplate.event_id == event_id, EmailTemplate.base_template_id == base.id)
        .first()
    )
    if existing:
        return existing
    copy = EmailTemplate(
        name=base.name,
        description=base.description,
        subject=base.subject,
        category=base.category,
        type=base.type,
        html_content=base.html_content,
        text_content=base.text_content,
        is_active=base.is_active,
        is_default=False,
        is_global=False,
        event_id=event_id,
        base_template_id=base.id,
    )
    db.add(copy)
    logger.info("template copy created from global id=%s for event_id=%s", base.id, event_id)
    return copy


def update_template(
    db: Session, event_id: int, template_id: int, payload: EmailTemplateUpdateSchema
) -> EmailTemplate | None:
    """PATCH partiel. Un template global n'est jamais modifié : la modification va sur la copie de l'événement."""
    tpl = get_template(db, event_id, template_id)
    if not tpl:
        return None
    target = _event_copy(db, event_id, tpl) if tpl.is_global and tpl.event_id is None else tpl
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(target, k, v)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("update_template failed id=%s", template_id)
        raise
    db.refresh(target)
    return target


# -------------------- Aperçu / test --------------------
def preview_template(
    db: Session, event: Event, template_id: int, payload: TemplatePreviewRequestSchema | None = None
) -> dict | None:
    tpl = get_template(db, event.id, template_id)
    if not tpl:
        return None
    payload = payload or TemplatePreviewRequestSchema()
    return render_preview(tpl, event, subject=payload.subject, html_content=payload.html_content)


def render_test_email(event: Event, subject: str, preview_content: str) -> tuple[str, str]:
    fields = build_merge_fields(event, participant_name=SAMPLE_PARTICIPANT_NAME)
    processed_subject = TEST_SUBJECT_PREFIX + render_text(subject, fields)
    html = _mail_env.get_template("test_email.html").render(
        event_name=event.name,
        content=render_text(preview_content, fields),
    )
    return processed_subject, html


def send_test_email(db: Session, event: Event, template_id: int, payload: SendTestEmailSchema) -> dict | str:
    if not get_template(db, event.id, template_id):
        return "template_not_found"
    if not payload.email or not payload.preview_content or not payload.subject:
        return "missing_fields"
    if not is_valid_email(payload.email):
        return "invalid_email"

    logger.info("send_test_email event_id=%s template_id=%s", event.id, template_id)
    subject, html = render_test_email(event, payload.subject, payload.preview_content)
    if not send_email(payload.email.strip(), subject, None, html=html):
        return "send_failed"
    return {"success": True, "message": "Email de test envoyé avec succès!"}


# -------------------- Campagnes liées --------------------
def latest_campaign_for_template(db: Session, event_id: int, template: EmailTemplate) -> EmailCampaign | None:
    """Campagne la plus récente rattachée au template (ou au global dont il est la copie)."""
    ids = {template.id}
    if template.base_template_id:
        ids.add(template.base_template_id)
    return (
        db.query(EmailCampaign)
        .filter(EmailCampaign.event_id == event_id, EmailCampaign.template_id.in_(ids))
        .order_by(EmailCampaign.created_at.desc(), EmailCampaign.id.desc())
        .first()
    )


# -------------------- Catalogue par défaut --------------------
def seed_default_templates(db: Session, catalog: Iterable[dict]) -> int:
    """Remplace les templates par défaut : suppression puis insertion (inactifs, globaux, par défaut)."""
    try:
        old_categories = {
            t.id: t.category for t in db.query(EmailTemplate).filter(EmailTemplate.is_default.is_(True)).all()
        }
        db.query(EmailTemplate).filter(EmailTemplate.is_default.is_(True)).delete(synchronize_session=False)
        inserted: list[EmailTemplate] = []
        for entry in catalog:
            tpl = EmailTemplate(
                name=entry["name"],
                description=entry.get("description"),
                subject=entry["subject"],
                category=entry["category"],
                type=entry["type"],
                html_content=entry["html_content"],
                text_content=entry.get("text_content"),
                is_default=True,
                is_global=True,
                is_active=False,
            )
            db.add(tpl)
            inserted.append(tpl)
        db.flush()
        # Rattacher les copies d'événement au nouveau global de même catégorie
        if old_categories:
            by_category = {t.category: t.id for t in inserted}
            copies = db.query(EmailTemplate).filter(EmailTemplate.base_template_id.in_(list(old_categories))).all()
            for copy in copies:
                copy.base_template_id = by_category.get(old_categories[copy.base_template_id])
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("seed_default_templates failed")
        raise
    logger.info("seed_default_templates inserted=%s", len(inserted))
    return len(inserted)
