from __future__ import annotations

import logging
import os
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "InEvent"
DEFAULT_SENDER_ADDRESS = "noreply@ineventapp.com"
HTML_ONLY_NOTICE = "Ce message est au format HTML. Ouvrez-le dans un client compatible."


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class SmtpSettings:
    host: str
    port: int
    username: str | None
    password: str | None
    sender: str
    use_ssl: bool
    use_tls: bool

    @classmethod
    def from_env(cls) -> "SmtpSettings | None":
        host = os.getenv("SMTP_HOST")
        if not host:
            return None
        use_ssl = _flag("SMTP_USE_SSL", False)
        sender = os.getenv("SMTP_FROM") or formataddr(
            (os.getenv("SMTP_FROM_NAME", DEFAULT_SENDER_NAME), os.getenv("SMTP_USERNAME") or DEFAULT_SENDER_ADDRESS)
        )
        return cls(
            host=host,
            port=int(os.getenv("SMTP_PORT", "465" if use_ssl else "587")),
            username=os.getenv("SMTP_USERNAME"),
            password=os.getenv("SMTP_PASSWORD"),
            sender=sender,
            use_ssl=use_ssl,
            use_tls=_flag("SMTP_USE_TLS", not use_ssl),
        )


def build_message(sender: str, to_email: str, subject: str, body: str | None, html: str | None = None) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = to_email
    message["Subject"] = subject
    message["Message-ID"] = make_msgid(domain=sender.rsplit("@", 1)[-1].strip(">") or None)
    # Partie texte toujours présente, HTML en alternative
    message.set_content(body or HTML_ONLY_NOTICE)
    if html:
        message.add_alternative(html, subtype="html")
    return message


def _open(settings: SmtpSettings) -> smtplib.SMTP:
    if settings.use_ssl:
        return smtplib.SMTP_SSL(settings.host, settings.port, timeout=15)
    server = smtplib.SMTP(settings.host, settings.port, timeout=15)
    if settings.use_tls:
        try:
            server.starttls(context=ssl.create_default_context())
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
    return server


def send_email(to_email: str, subject: str, body: str | None, html: str | None = None) -> bool:
    """Envoie un email (texte + HTML optionnel). Retourne False sans lever en cas d'échec."""
    try:
        settings = SmtpSettings.from_env()
    except ValueError:
        logger.error("Configuration SMTP invalide (SMTP_PORT=%r) : email pour %s non envoyé.", os.getenv("SMTP_PORT"), to_email)
        return False
    if settings is None:
        logger.warning("SMTP désactivé : variable SMTP_HOST absente (email pour %s ignoré).", to_email)
        return False

    message = build_message(settings.sender, to_email, subject, body, html)
    try:
        with _open(settings) as server:
            if settings.username and settings.password:
                server.login(settings.username, settings.password)
            server.send_message(message)
    except (smtplib.SMTPException, OSError):
        logger.exception("Échec de l'envoi de l'email à %s", to_email)
        return False

    logger.info("Email envoyé à %s (%s)", to_email, subject)
    return True
