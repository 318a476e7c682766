"""
Costanti sistema email - Centralizzate per manutenibilità
"""

# Porta SMTPS di default
SMTP_SSL_PORT = 465

# Timeout connessione SMTP (secondi), sovrascritto da EMAIL_SEND_TIMEOUT
SMTP_TIMEOUT = 20


class EmailStatus:
    """Esito invio email"""
    SENT = 'sent'
    FAILED = 'failed'
    SKIPPED = 'skipped'

    ALL = [SENT, FAILED, SKIPPED]


class EmailType:
    """Template disponibili"""
    CATALOG_PUBLISHED = 'catalog-published'
    TEST = 'test'

    ALL = [CATALOG_PUBLISHED, TEST]
