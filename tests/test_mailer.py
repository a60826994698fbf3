import smtplib

from inevent.services import mailer


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.logged_in = None
        self.sent = []
        self.tls = False
        FakeSMTP.instances.append(self)

    def starttls(self, context=None):
        self.tls = True

    def login(self, username, password):
        self.logged_in = username

    def send_message(self, message):
        self.sent.append(message)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_disabled_without_host(monkeypatch):
    monkeypatch.delenv("SMTP_HOST", raising=False)
    assert mailer.send_email("a@example.com", "s", "b") is False


def test_build_message_has_html_alternative():
    msg = mailer.build_message("InEvent <noreply@ineventapp.com>", "a@example.com", "Sujet", None, html="<p>Hi</p>")
    assert msg["Subject"] == "Sujet"
    assert msg.is_multipart()
    assert msg.get_body(preferencelist=("html",)).get_content().strip() == "<p>Hi</p>"
    assert mailer.HTML_ONLY_NOTICE in msg.get_body(preferencelist=("plain",)).get_content()


def test_send_with_starttls_and_login(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_USERNAME", "bot@example.com")
    monkeypatch.setenv("SMTP_PASSWORD", "secret")
    monkeypatch.delenv("SMTP_USE_SSL", raising=False)
    monkeypatch.delenv("SMTP_PORT", raising=False)
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)

    assert mailer.send_email("a@example.com", "Sujet", "Texte", html="<p>x</p>") is True
    server = FakeSMTP.instances[0]
    assert (server.host, server.port) == ("smtp.example.com", 587)
    assert server.tls is True
    assert server.logged_in == "bot@example.com"
    assert server.sent[0]["To"] == "a@example.com"


def test_transport_error_returns_false(monkeypatch):
    class Broken(FakeSMTP):
        def send_message(self, message):
            raise smtplib.SMTPServerDisconnected("bye")

    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.delenv("SMTP_USE_SSL", raising=False)
    monkeypatch.setenv("SMTP_USE_TLS", "false")
    monkeypatch.setattr(mailer.smtplib, "SMTP", Broken)
    assert mailer.send_email("a@example.com", "s", "b") is False


def test_invalid_port_returns_false(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "not-a-port")
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    assert mailer.send_email("a@example.com", "s", "b") is False


def test_starttls_failure_closes_connection(monkeypatch):
    class NoTLS(FakeSMTP):
        closed = False

        def starttls(self, context=None):
            raise smtplib.SMTPNotSupportedError("STARTTLS non supporté")

        def close(self):
            self.closed = True

    NoTLS.instances.clear()
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.delenv("SMTP_PORT", raising=False)
    monkeypatch.delenv("SMTP_USE_SSL", raising=False)
    monkeypatch.setenv("SMTP_USE_TLS", "true")
    monkeypatch.setattr(mailer.smtplib, "SMTP", NoTLS)

    assert mailer.send_email("a@example.com", "s", "b") is False
    assert NoTLS.instances[-1].closed is True
    assert NoTLS.instances[-1].sent == []
