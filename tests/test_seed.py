from inevent.models.email_template import EmailTemplate
from inevent.services.default_templates import DEFAULT_TEMPLATES
from inevent.services.templates import seed_default_templates


def test_catalog_shape():
    assert len(DEFAULT_TEMPLATES) == 13
    categories = [t["category"] for t in DEFAULT_TEMPLATES]
    assert len(set(categories)) == 13
    assert "CUSTOM" not in categories
    for entry in DEFAULT_TEMPLATES:
        assert entry["name"] and entry["subject"] and entry["html_content"]


def test_seed_is_idempotent(db):
    assert seed_default_templates(db, DEFAULT_TEMPLATES) == 13
    assert seed_default_templates(db, DEFAULT_TEMPLATES) == 13

    rows = db.query(EmailTemplate).filter(EmailTemplate.is_default.is_(True)).all()
    assert len(rows) == 13
    assert all(t.is_global and not t.is_active and t.event_id is None for t in rows)


def test_seed_keeps_custom_templates_and_relinks_copies(db, event):
    seed_default_templates(db, DEFAULT_TEMPLATES)
    first = db.query(EmailTemplate).filter(EmailTemplate.is_default.is_(True)).first()
    copy = EmailTemplate(
        name=first.name,
        subject="Sujet personnalisé",
        category=first.category,
        type=first.type,
        html_content=first.html_content,
        is_active=True,
        event_id=event.id,
        base_template_id=first.id,
    )
    custom = EmailTemplate(name="Perso", subject="s", html_content="h", event_id=event.id)
    db.add_all([copy, custom])
    db.commit()
    category, old_base_id = first.category, first.id

    seed_default_templates(db, DEFAULT_TEMPLATES)
    db.expire_all()

    assert db.get(EmailTemplate, custom.id) is not None
    kept = db.get(EmailTemplate, copy.id)
    assert kept.subject == "Sujet personnalisé"
    new_base = db.get(EmailTemplate, kept.base_template_id)
    assert new_base is not None
    assert new_base.is_default and new_base.category == category
    assert kept.base_template_id != old_base_id
    assert db.query(EmailTemplate).filter(EmailTemplate.id == old_base_id).count() == 0


def test_catalog_uses_known_types_and_categories():
    from typing import get_args

    from inevent.schemas.email_template import TemplateCategory, TemplateType

    for entry in DEFAULT_TEMPLATES:
        assert entry["type"] in get_args(TemplateType)
        assert entry["category"] in get_args(TemplateCategory)
