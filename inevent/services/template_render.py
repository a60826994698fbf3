import base64
import os
import re

from inevent.models.event import Event
from inevent.models.email_template import EmailTemplate

SAMPLE_PARTICIPANT_NAME = "Jean Dupont"
DEFAULT_EVENT_TIME = "14h00"

_IF_BLOCK_RE = re.compile(r"\{\{#if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL)

_LOGO_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="100" viewBox="0 0 400 100">'
    '<rect width="400" height="100" fill="#81B441"/>'
    '<text x="200" y="60" font-family="Arial" font-size="24" font-weight="bold" '
    'text-anchor="middle" fill="white">InEvent App</text></svg>'
)
DEFAULT_BANNER = "data:image/svg+xml;base64," + base64.b64encode(_LOGO_SVG.encode("utf-8")).decode("ascii")


def render_text(text: str | None, fields: dict | None) -> str | None:
    """Substitue les jetons {{cle}} par les valeurs fournies.

    Les blocs {{#if cle}}...{{/if}} sont conservés si la valeur existe et n'est pas
    vide, supprimés sinon. Un jeton sans valeur reste tel quel.
    """
    if not text:
        return text
    fields = fields or {}

    def _keep_block(match: re.Match) -> str:
        value = fields.get(match.group(1))
        return match.group(2) if value not in (None, "") else ""

    out = _IF_BLOCK_RE.sub(_keep_block, text)
    for k, v in fields.items():
        out = out.replace("{{" + str(k) + "}}", "" if v is None else str(v))
    return out


def build_merge_fields(event: Event, participant_name: str | None = None, extra: dict | None = None) -> dict:
    base_url = os.getenv("PUBLIC_BASE_URL", "https://ineventapp.com").rstrip("/")
    fields = {
        "eventName": event.name,
        "eventDate": event.start_date.strftime("%d/%m/%Y") if event.start_date else "",
        "eventTime": event.start_time or DEFAULT_EVENT_TIME,
        "eventLocation": event.location or "",
        "eventBanner": event.banner or DEFAULT_BANNER,
        "eventUrl": f"{base_url}/event/{event.slug}",
        "organizerName": event.organizer_name or os.getenv("ORGANIZER_NAME", "Organisateur"),
        "supportEmail": event.support_email or os.getenv("SUPPORT_EMAIL", "support@ineventapp.com"),
    }
    if participant_name is not None:
        fields["participantName"] = participant_name
    if extra:
        fields.update(extra)
    return fields


def render_template(
    template: EmailTemplate,
    fields: dict,
    subject: str | None = None,
    html_content: str | None = None,
) -> dict:
    return {
        "subject": render_text(subject if subject is not None else template.subject, fields),
        "html_content": render_text(html_content if html_content is not None else template.html_content, fields),
        "text_content": render_text(template.text_content, fields),
    }


def render_preview(
    template: EmailTemplate,
    event: Event,
    subject: str | None = None,
    html_content: str | None = None,
) -> dict:
    """Aperçu avec le participant fictif et les vraies données de l'événement (jamais envoyé)."""
    fields = build_merge_fields(event, participant_name=SAMPLE_PARTICIPANT_NAME)
    return render_template(template, fields, subject=subject, html_content=html_content)
