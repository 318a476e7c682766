# =============================================================================
# PIATTAFORMA B2B - CATALOGHI REPOSITORY
# =============================================================================
# Repository per cataloghi e brand
# =============================================================================

from typing import Optional, List, Dict, Any, Tuple

from .base import BaseRepository
from ...utils.codes import CODICE_PREFIX
from ...utils.db_helpers import QueryFilters


CATALOGHI_FILTERS = QueryFilters({
    'brand_id': 'c.brand_id = %s',
    'stato': 'c.stato = %s',
    'tipo': 'c.tipo = %s',
    'stagione': 'c.stagione = %s',
    'anno': 'c.anno = %s',
    'search': (
        "(LOWER(COALESCE(c.nome, '')) LIKE %s OR LOWER(c.codice) LIKE %s)",
        lambda v: f"%{str(v).strip().lower()}%",
    ),
})

# Colonne scrivibili in INSERT/UPDATE
COLONNE_CATALOGO = (
    'codice', 'nome', 'brand_id', 'tipo', 'stagione', 'anno',
    'data_inizio_ordini', 'data_fine_ordini', 'data_consegna',
    'note', 'condizioni', 'cover_url', 'stato',
)


class BrandRepository(BaseRepository[Dict[str, Any]]):
    """Repository per brands."""

    table_name = 'brands'


class CataloghiRepository(BaseRepository[Dict[str, Any]]):
    """Repository per cataloghi."""

    table_name = 'cataloghi'

    def get_for_update(self, id_catalogo: int) -> Optional[Dict[str, Any]]:
        """Legge il catalogo bloccando la riga fino a fine transazione."""
        return self._execute_one(
            "SELECT * FROM cataloghi WHERE id = %s FOR UPDATE",
            (id_catalogo,)
        )

    def get_con_brand(self, id_catalogo: int) -> Optional[Dict[str, Any]]:
        """Catalogo con nome brand."""
        return self._execute_one("""
            SELECT c.*, b.name AS brand_name
            FROM cataloghi c
            LEFT JOIN brands b ON c.brand_id = b.id
            WHERE c.id = %s
        """, (id_catalogo,))

    def get_dettaglio_pubblicazione(self, id_catalogo: int) -> Optional[Dict[str, Any]]:
        """Campi necessari a oggetto/messaggio di pubblicazione."""
        return self._execute_one("""
            SELECT
                c.id,
                c.nome,
                c.codice,
                c.tipo,
                c.stagione,
                c.anno,
                c.brand_id,
                b.name AS brand_name
            FROM cataloghi c
            JOIN brands b ON c.brand_id = b.id
            WHERE c.id = %s
        """, (id_catalogo,))

    def list_cataloghi(
        self,
        filtri: Dict[str, Any] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Lista cataloghi con filtri.

        Args:
            filtri: brand_id, stato, tipo, stagione, anno, search
                (chiavi sconosciute ignorate)
            limit: Max record
            offset: Offset paginazione

        Returns:
            (righe, totale)
        """
        where_clause, params = CATALOGHI_FILTERS.build(filtri)

        totale = self._execute_scalar(f"""
            SELECT COUNT(*) AS cnt
            FROM cataloghi c
            WHERE {where_clause}
        """, tuple(params))

        righe = self._execute_query(f"""
            SELECT c.*, b.name AS brand_name
            FROM cataloghi c
            LEFT JOIN brands b ON c.brand_id = b.id
            WHERE {where_clause}
            ORDER BY c.created_at DESC, c.id DESC
            LIMIT %s OFFSET %s
        """, tuple(params + [limit, offset]))

        return righe, int(totale or 0)

    def get_ultimo_codice(self) -> Optional[str]:
        """Codice CATG più alto assegnato."""
        return self._execute_scalar("""
            SELECT codice
            FROM cataloghi
            WHERE codice LIKE %s
            ORDER BY codice DESC
            LIMIT 1
        """, (f"{CODICE_PREFIX}%",))

    def insert(self, dati: Dict[str, Any]) -> Dict[str, Any]:
        colonne = [c for c in COLONNE_CATALOGO if c in dati]
        placeholders = ", ".join(["%s"] * len(colonne))
        return self._execute_one(f"""
            INSERT INTO cataloghi ({', '.join(colonne)})
            VALUES ({placeholders})
            RETURNING *
        """, tuple(dati[c] for c in colonne))

    def update_campi(self, id_catalogo: int, campi: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Aggiorna i campi indicati (codice mai modificabile).

        Returns:
            Riga aggiornata o None se il catalogo non esiste
        """
        colonne = [c for c in COLONNE_CATALOGO if c in campi and c != 'codice']
        set_clauses = [f"{c} = %s" for c in colonne]
        set_clauses.append("updated_at = CURRENT_TIMESTAMP")
        params = [campi[c] for c in colonne] + [id_catalogo]

        return self._execute_one(f"""
            UPDATE cataloghi
            SET {', '.join(set_clauses)}
            WHERE id = %s
            RETURNING *
        """, tuple(params))

    def update_stato(self, id_catalogo: int, nuovo_stato: str) -> Optional[Dict[str, Any]]:
        return self.update_campi(id_catalogo, {'stato': nuovo_stato})

    def delete(self, id_catalogo: int) -> bool:
        row = self._execute_one(
            "DELETE FROM cataloghi WHERE id = %s RETURNING id",
            (id_catalogo,)
        )
        return row is not None
