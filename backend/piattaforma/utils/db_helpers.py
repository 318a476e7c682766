# =============================================================================
# PIATTAFORMA B2B - UTILS/DB_HELPERS
# =============================================================================
# Helper per composizione query parametrizzate
# =============================================================================

from typing import Any, Callable, Dict, List, Optional, Tuple


class QueryFilters:
    """
    Assembla clausole WHERE da filtri dinamici.

    Ogni filtro noto è dichiarato con il frammento SQL da usare (il valore
    viene ripetuto per ogni placeholder %s) e una trasformazione opzionale del valore.
    Filtri sconosciuti o vuoti vengono ignorati, mai concatenati in SQL.

    Uso:
        qf = QueryFilters({
            'stato': 'c.stato = %s',
            'search': ('LOWER(c.nome) LIKE %s', lambda v: f"%{v.lower()}%"),
        })
        where, params = qf.build({'stato': 'bozza', 'foo': 1})
        # where = "c.stato = %s", params = ['bozza']
    """

    def __init__(self, allowed: Dict[str, Any]):
        self._allowed: Dict[str, Tuple[str, Optional[Callable[[Any], Any]]]] = {}
        for name, spec in allowed.items():
            if isinstance(spec, tuple):
                self._allowed[name] = spec
            else:
                self._allowed[name] = (spec, None)

    @property
    def names(self) -> List[str]:
        return list(self._allowed)

    def build(self, filters: Optional[Dict[str, Any]]) -> Tuple[str, List[Any]]:
        """Ritorna (where_clause, params). Senza filtri validi: '1=1'."""
        conditions = []
        params: List[Any] = []

        for name, value in (filters or {}).items():
            if name not in self._allowed:
                continue
            if value is None or value == '':
                continue
            fragment, transform = self._allowed[name]
            conditions.append(fragment)
            value = transform(value) if transform else value
            # stesso valore per ogni placeholder del frammento
            params.extend([value] * fragment.count("%s"))

        where_clause = " AND ".join(conditions) if conditions else "1=1"
        return where_clause, params

