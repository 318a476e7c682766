"""
Inbox notifiche utente: lista paginata, contatore non lette, lettura.
"""

import logging
from typing import Dict, Any

from .constants import INBOX_PAGE_SIZE
from ...exceptions import NotificaNotFoundError
from ...persistence.repositories import NotificheRepository
from ...utils.response import paginazione_pagina

logger = logging.getLogger(__name__)


def list_notifiche(db, user_id: int, page: int = 1, limit: int = INBOX_PAGE_SIZE) -> Dict[str, Any]:
    """
    Notifiche dell'utente, più recenti prima.

    Returns:
        {'notifiche': [...], 'pagination': {'total', 'pages', 'current', 'limit'}}
    """
    page = max(page, 1)
    repo = NotificheRepository(db)
    total = repo.count_by_user(user_id)
    notifiche = repo.list_by_user(user_id, limit=limit, offset=(page - 1) * limit)

    for n in notifiche:
        n['read'] = bool(n['read'])

    return {
        'notifiche': notifiche,
        'pagination': paginazione_pagina(total, page, limit),
    }


def count_non_lette(db, user_id: int) -> int:
    """Numero notifiche non lette."""
    return NotificheRepository(db).count_unread(user_id)


def segna_come_letta(db, notifica_id: int, user_id: int) -> Dict[str, Any]:
    """
    Segna la notifica come letta (idempotente).

    Raises:
        NotificaNotFoundError: notifica inesistente o di altro utente
    """
    with db.transaction():
        row = NotificheRepository(db).mark_read(notifica_id, user_id)
    if not row:
        raise NotificaNotFoundError()

    row['read'] = bool(row['read'])
    logger.debug("Notifica %s letta da utente %s", notifica_id, user_id)
    return row
