from datetime import datetime

import pytest

from conftest import ORGANIZER
from inevent.models.email_log import EmailLog
from inevent.models.email_template import EmailTemplate


@pytest.fixture
def template(db, event):
    tpl = EmailTemplate(
        name="Rappel",
        subject="{{eventName}} approche",
        category="RAPPEL_EVENEMENT",
        type="REMINDER",
        html_content="<p>Bonjour {{participantName}}</p>",
        is_global=True,
        is_default=True,
    )
    db.add(tpl)
    db.commit()
    db.refresh(tpl)
    return tpl


@pytest.fixture
def outbox(monkeypatch):
    calls = []

    def _fake_send(to_email, subject, body, html=None):
        calls.append((to_email, subject, html))
        return not to_email.startswith("bruno")

    monkeypatch.setattr("inevent.services.campaigns.send_email", _fake_send)
    return calls


def _create(client, event, **body):
    payload = {"name": "Relance", "subject": "Bonjour {{name}}", "htmlContent": "<p>{{eventName}}</p>"}
    payload.update(body)
    return client.post(f"/api/events/{event.id}/campaigns", json=payload, headers=ORGANIZER)


def test_create_campaign_status(client, event, template):
    r = _create(client, event)
    assert r.status_code == 201
    assert r.json()["status"] == "DRAFT"

    r = _create(client, event, scheduledAt="2025-06-01T08:00:00")
    assert r.json()["status"] == "SCHEDULED"
    assert r.json()["scheduledAt"] == "2025-06-01T08:00:00"

    r = client.post(f"/api/events/{event.id}/campaigns", json={"templateId": template.id}, headers=ORGANIZER)
    assert r.status_code == 201
    assert r.json()["subject"] == template.subject
    assert r.json()["templateId"] == template.id

    assert _create(client, event, recipientType="VIP").status_code == 400
    assert client.post(f"/api/events/{event.id}/campaigns", json={"name": "x"}, headers=ORGANIZER).status_code == 400

    listed = client.get(f"/api/events/{event.id}/campaigns", headers=ORGANIZER).json()
    assert len(listed) == 3


def test_send_campaign_logs_every_recipient(client, db, event, participants, outbox):
    campaign_id = _create(client, event).json()["id"]
    r = client.post(f"/api/events/{event.id}/campaigns/{campaign_id}/send", headers=ORGANIZER)
    assert r.status_code == 200
    result = r.json()
    assert result["recipientCount"] == 3
    assert result["emailsSent"] == 2
    assert result["emailsFailed"] == 1

    assert ("alice.martin@example.com", "Bonjour Alice Martin", "<p>Summit</p>") in outbox

    campaign = client.get(f"/api/events/{event.id}/campaigns/{campaign_id}", headers=ORGANIZER).json()
    assert campaign["status"] == "SENT"
    assert campaign["successCount"] == 2
    assert campaign["failureCount"] == 1
    assert campaign["sentAt"] is not None

    logs = client.get(f"/api/events/{event.id}/campaigns/{campaign_id}/logs", headers=ORGANIZER).json()
    assert {log["recipientEmail"]: log["status"] for log in logs} == {
        "alice.martin@example.com": "SENT",
        "bruno.diallo@example.com": "FAILED",
        "chloe.ndiaye@example.com": "SENT",
    }

    r = client.post(f"/api/events/{event.id}/campaigns/{campaign_id}/send", headers=ORGANIZER)
    assert r.status_code == 400
    assert len(outbox) == 3


def test_send_campaign_targets_recipient_type(client, event, participants, outbox):
    campaign_id = _create(client, event, recipientType="SPEAKERS").json()["id"]
    r = client.post(f"/api/events/{event.id}/campaigns/{campaign_id}/send", headers=ORGANIZER)
    assert r.json()["recipientCount"] == 1
    assert [c[0] for c in outbox] == ["chloe.ndiaye@example.com"]


def test_send_without_recipients_marks_failed(client, event, participants, outbox):
    campaign_id = _create(client, event, recipientType="EXHIBITORS").json()["id"]
    r = client.post(f"/api/events/{event.id}/campaigns/{campaign_id}/send", headers=ORGANIZER)
    assert r.status_code == 400
    campaign = client.get(f"/api/events/{event.id}/campaigns/{campaign_id}", headers=ORGANIZER).json()
    assert campaign["status"] == "FAILED"
    assert outbox == []


def test_send_unknown_campaign(client, event):
    assert client.post(f"/api/events/{event.id}/campaigns/999/send", headers=ORGANIZER).status_code == 404


def test_recipients_count(client, event, participants):
    r = client.get(f"/api/events/{event.id}/recipients-count", headers=ORGANIZER)
    assert r.status_code == 200
    assert r.json() == {"ALL_PARTICIPANTS": 3, "PARTICIPANTS": 2, "SPEAKERS": 1, "EXHIBITORS": 0}


def test_send_from_template_immediately(client, event, participants, template, outbox):
    r = client.post(
        f"/api/events/{event.id}/campaigns/send",
        json={"templateId": template.id, "recipientType": "PARTICIPANTS"},
        headers=ORGANIZER,
    )
    assert r.status_code == 200
    assert r.json()["recipientCount"] == 2
    assert ("alice.martin@example.com", "Summit approche", "<p>Bonjour Alice Martin</p>") in outbox

    campaign = client.get(f"/api/events/{event.id}/templates/{template.id}/campaign", headers=ORGANIZER).json()
    assert campaign["id"] == r.json()["campaignId"]
    assert campaign["status"] == "SENT"


def test_send_from_template_scheduled(client, db, event, participants, template, outbox):
    url = f"/api/events/{event.id}/campaigns/send"
    r = client.post(url, json={"templateId": template.id, "sendType": "scheduled"}, headers=ORGANIZER)
    assert r.status_code == 400

    r = client.post(
        url,
        json={"templateId": template.id, "sendType": "scheduled", "scheduledAt": "2025-06-10T08:00:00"},
        headers=ORGANIZER,
    )
    assert r.status_code == 200
    assert r.json()["emailsSent"] == 0
    assert outbox == []

    logs = db.query(EmailLog).filter(EmailLog.campaign_id == r.json()["campaignId"]).all()
    assert len(logs) == 3
    assert {log.status for log in logs} == {"PENDING"}

    campaign = client.get(f"/api/events/{event.id}/campaigns/{r.json()['campaignId']}", headers=ORGANIZER).json()
    assert campaign["status"] == "SCHEDULED"
    assert campaign["scheduledAt"] == datetime(2025, 6, 10, 8, 0).isoformat()
