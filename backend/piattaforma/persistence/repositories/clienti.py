# =============================================================================
# PIATTAFORMA B2B - CLIENTI REPOSITORY
# =============================================================================

from typing import List, Dict, Any

from .base import BaseRepository


class ClientiRepository(BaseRepository[Dict[str, Any]]):
    """Repository per clienti e associazioni cliente-brand."""

    table_name = 'clients'

    def get_attivi_per_brand(self, brand_id: str) -> List[Dict[str, Any]]:
        """
        Utenti dei clienti attivi associati al brand.

        Cliente con stato 'attivo' e utente con attivo = TRUE.
        Un utente compare una sola volta anche se ha più clienti associati.
        """
        return self._execute_query("""
            SELECT
                u.id AS user_id,
                u.email,
                u.nome,
                u.cognome,
                c.id AS client_id,
                c.company_name
            FROM clients c
            JOIN users u ON u.id = c.user_id
            WHERE c.id IN (
                SELECT MIN(c2.id)
                FROM client_brands cb
                JOIN clients c2 ON c2.id = cb.client_id
                JOIN users u2 ON u2.id = c2.user_id
                WHERE cb.brand_id = %s
                  AND c2.stato = 'attivo'
                  AND u2.attivo = TRUE
                GROUP BY c2.user_id
            )
            ORDER BY u.id
        """, (brand_id,))
