# =============================================================================
# PIATTAFORMA B2B - EMAIL TESTS
# =============================================================================

import smtplib

import pytest

from piattaforma.config import Settings
from piattaforma.services.email import EmailSender, EmailType, render_template
from piattaforma.services.email.providers import SmtpProvider


pytestmark = pytest.mark.unit


def _settings(**overrides) -> Settings:
    s = Settings()
    s.SMTP_HOST = "smtp.test.local"
    s.SMTP_USER = "noreply@test.local"
    s.SMTP_PASSWORD = "secret"
    s.SMTP_FROM = "noreply@test.local"
    for key, value in overrides.items():
        setattr(s, key, value)
    return s


class _ProviderStub:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send_email(self, to, subject, body_html, body_text=None, timeout=None):
        if self.error:
            raise self.error
        self.sent.append({'to': to, 'subject': subject, 'html': body_html,
                          'text': body_text, 'timeout': timeout})
        return True


DATA = {
    'userName': 'Mario Rossi',
    'brandName': 'Acme',
    'catalogName': 'Uomo FW',
    'catalogCode': 'CATG000000001',
}


class TestTemplates:

    def test_catalog_published(self):
        subject, html, text = render_template(EmailType.CATALOG_PUBLISHED, DATA)

        assert subject == "New catalog available for Acme"
        assert "Hello Mario Rossi," in text
        assert "A new catalog is available for Acme." in text
        assert "Name: Uomo FW" in text
        assert "Code: CATG000000001" in text
        assert "CATG000000001" in html

    def test_catalog_name_vuoto(self):
        _, _, text = render_template(EmailType.CATALOG_PUBLISHED, {**DATA, 'catalogName': ''})
        assert "Name: N/A" in text

    def test_html_escaped(self):
        _, html, text = render_template(
            EmailType.CATALOG_PUBLISHED, {**DATA, 'brandName': '<b>Acme & Co</b>'}
        )
        assert "&lt;b&gt;Acme &amp; Co&lt;/b&gt;" in html
        assert "<b>Acme & Co</b>" in text

    def test_placeholder_mancante(self):
        _, _, text = render_template(EmailType.CATALOG_PUBLISHED, {'brandName': 'Acme'})
        assert "Hello ," in text

    def test_template_inesistente(self):
        with pytest.raises(ValueError):
            render_template('inesistente', {})


class TestEmailSender:

    def test_non_configurato(self):
        sender = EmailSender(_settings(SMTP_PASSWORD=""))

        result = sender.send_email("a@test.local", "Oggetto", EmailType.CATALOG_PUBLISHED, DATA)

        assert result['success'] is False
        assert result['skipped'] is True

    def test_invio(self):
        sender = EmailSender(_settings())
        sender._provider = _ProviderStub()

        result = sender.send_email(
            "a@test.local", "Acme FW25 Preorders Open Now!",
            EmailType.CATALOG_PUBLISHED, DATA, timeout=3
        )

        assert result == {'success': True, 'status': 'sent'}
        inviata = sender._provider.sent[0]
        assert inviata['subject'] == "Acme FW25 Preorders Open Now!"
        assert inviata['timeout'] == 3
        assert "Mario Rossi" in inviata['text']

    def test_oggetto_default_template(self):
        sender = EmailSender(_settings())
        sender._provider = _ProviderStub()

        sender.send_email("a@test.local", None, EmailType.CATALOG_PUBLISHED, DATA)

        assert sender._provider.sent[0]['subject'] == "New catalog available for Acme"

    @pytest.mark.parametrize("error", [
        smtplib.SMTPRecipientsRefused({'a@test.local': (550, b'no such user')}),
        TimeoutError("timed out"),
        ConnectionRefusedError("refused"),
    ])
    def test_errore_trasporto(self, error):
        sender = EmailSender(_settings())
        sender._provider = _ProviderStub(error=error)

        result = sender.send_email("a@test.local", "Oggetto", EmailType.CATALOG_PUBLISHED, DATA)

        assert result['success'] is False
        assert result['status'] == 'failed'
        assert result['error']

    def test_template_inesistente(self):
        sender = EmailSender(_settings())
        sender._provider = _ProviderStub()

        result = sender.send_email("a@test.local", "Oggetto", "inesistente", {})

        assert result['success'] is False
        assert sender._provider.sent == []

    def test_send_test_email(self):
        sender = EmailSender(_settings())
        sender._provider = _ProviderStub()

        assert sender.send_test_email("a@test.local")['success'] is True
        assert sender._provider.sent[0]['subject'] == "Email di test"


class TestSmtpProvider:

    def test_config_incompleta(self):
        with pytest.raises(ValueError):
            SmtpProvider({'smtp_host': 'smtp.test.local', 'smtp_user': 'x'})

    def test_ssl_con_timeout(self, monkeypatch):
        creati = []

        class _SMTP:
            def __init__(self, host, port, timeout=None):
                creati.append((host, port, timeout))
                self.messages = []

            def login(self, user, password):
                pass

            def send_message(self, msg):
                self.messages.append(msg)

            def quit(self):
                pass

        monkeypatch.setattr(smtplib, 'SMTP_SSL', _SMTP)
        provider = SmtpProvider({
            'smtp_host': 'smtp.test.local',
            'smtp_port': 465,
            'smtp_user': 'noreply@test.local',
            'smtp_password': 'secret',
            'smtp_sender_name': 'ARTEXMODA',
            'smtp_use_ssl': True,
            'timeout': 20,
        })

        assert provider.send_email("a@test.local", "Oggetto", "<p>x</p>", "x", timeout=7)
        assert creati == [('smtp.test.local', 465, 7)]
