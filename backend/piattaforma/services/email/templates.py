"""
Template email - Centralizzati e manutenibili.

Ogni template ha:
- subject: Oggetto di default (il chiamante può sovrascriverlo)
- html: Corpo HTML con placeholder
- text: Corpo testo con placeholder
- defaults: Valori usati quando il placeholder è vuoto (opzionale)

Placeholder usano formato {nome} per str.format_map(); i valori sono
escapati nel corpo HTML.
"""

import html
from typing import Tuple, Dict, Any

from .constants import EmailType

# Stile base condiviso
_BASE_STYLE = """
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    max-width: 600px;
    margin: 0 auto;
    padding: 20px;
"""

_HEADER_STYLE = "color: #2563eb; margin-bottom: 20px;"
_TEXT_STYLE = "color: #374151; line-height: 1.6;"
_LABEL_STYLE = "color: #6b7280; font-weight: 600;"
_VALUE_STYLE = "color: #111827;"
_FOOTER_STYLE = "color: #9ca3af; font-size: 12px; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;"

TEMPLATES = {
    EmailType.CATALOG_PUBLISHED: {
        'subject': 'New catalog available for {brandName}',
        'html': f'''
        <div style="{_BASE_STYLE}">
            <h2 style="{_HEADER_STYLE}">New Catalog Available</h2>
            <div style="{_TEXT_STYLE}">
                <p>Hello {{userName}},</p>
                <p>A new catalog is available for <strong>{{brandName}}</strong>.</p>
                <p style="{_LABEL_STYLE}">Catalog details:</p>
                <p><span style="{_LABEL_STYLE}">Name:</span> <span style="{_VALUE_STYLE}">{{catalogName}}</span></p>
                <p><span style="{_LABEL_STYLE}">Code:</span> <span style="{_VALUE_STYLE}">{{catalogCode}}</span></p>
                <p>You can view it in your dashboard.</p>
            </div>
            <p style="{_FOOTER_STYLE}">
                Automatic email. Please do not reply.
            </p>
        </div>
        ''',
        'text': (
            "Hello {userName},\n\n"
            "A new catalog is available for {brandName}.\n\n"
            "Catalog details:\n"
            "Name: {catalogName}\n"
            "Code: {catalogCode}\n\n"
            "You can view it in your dashboard.\n"
        ),
        'defaults': {'catalogName': 'N/A'},
    },

    EmailType.TEST: {
        'subject': 'Email di test',
        'html': f'''
        <div style="{_BASE_STYLE}">
            <h2 style="{_HEADER_STYLE}">Email di Test</h2>
            <div style="{_TEXT_STYLE}">
                <p>Se stai leggendo questo messaggio, la configurazione SMTP funziona correttamente.</p>
            </div>
        </div>
        ''',
        'text': "Se stai leggendo questo messaggio, la configurazione SMTP funziona correttamente.\n",
    },
}


class _Context(dict):
    """Placeholder mancanti resi come stringa vuota."""

    def __missing__(self, key):
        return ''


def _build_context(template: Dict[str, Any], context: Dict[str, Any]) -> _Context:
    values = _Context(context or {})
    for key, default in template.get('defaults', {}).items():
        if not values.get(key):
            values[key] = default
    return values


def render_template(name: str, context: Dict[str, Any]) -> Tuple[str, str, str]:
    """
    Renderizza template con contesto.

    Args:
        name: Nome template (chiave in TEMPLATES)
        context: Dict con valori per placeholder

    Returns:
        Tuple (subject, body_html, body_text)

    Raises:
        ValueError: Se template non trovato
    """
    template = TEMPLATES.get(name)
    if not template:
        raise ValueError(f"Template non trovato: {name}")

    values = _build_context(template, context)
    escaped = _Context({k: html.escape(str(v)) for k, v in values.items()})

    subject = template['subject'].format_map(values)
    body_html = template['html'].format_map(escaped)
    body_text = template['text'].format_map(values)

    return subject, body_html, body_text

