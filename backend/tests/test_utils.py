# =============================================================================
# PIATTAFORMA B2B - UTILS TESTS
# =============================================================================

import pytest

from piattaforma.utils import (
    format_codice_catalogo,
    parse_numero_catalogo,
    next_codice_catalogo,
    QueryFilters,
    success_response,
    paginated_response,
    paginazione_pagina,
)


@pytest.mark.unit
class TestCodiciCatalogo:

    def test_formato(self):
        assert format_codice_catalogo(42) == "CATG000000042"
        assert len(format_codice_catalogo(1)) == 13

    @pytest.mark.parametrize("numero", [0, -1, 10 ** 9])
    def test_fuori_range(self, numero):
        with pytest.raises(ValueError):
            format_codice_catalogo(numero)

    def test_parse(self):
        assert parse_numero_catalogo("CATG000000042") == 42
        assert parse_numero_catalogo("CATG42") is None
        assert parse_numero_catalogo("XYZ000000042") is None
        assert parse_numero_catalogo(None) is None

    def test_primo_codice(self):
        assert next_codice_catalogo(None) == "CATG000000001"

    def test_successivo(self):
        assert next_codice_catalogo("CATG000000099") == "CATG000000100"


@pytest.mark.unit
class TestQueryFilters:

    @pytest.fixture
    def filters(self):
        return QueryFilters({
            'stato': 'c.stato = %s',
            'anno': 'c.anno = %s',
            'search': ('(LOWER(c.nome) LIKE %s OR LOWER(c.codice) LIKE %s)',
                       lambda v: f"%{v.lower()}%"),
        })

    def test_nessun_filtro(self, filters):
        assert filters.build({}) == ("1=1", [])
        assert filters.build(None) == ("1=1", [])

    def test_filtri_sconosciuti_ignorati(self, filters):
        where, params = filters.build({'stato': 'bozza', "1=1; DROP TABLE cataloghi": 'x'})
        assert where == "c.stato = %s"
        assert params == ['bozza']

    def test_valori_vuoti_ignorati(self, filters):
        assert filters.build({'stato': '', 'anno': None}) == ("1=1", [])

    def test_combinazione(self, filters):
        where, params = filters.build({'stato': 'bozza', 'anno': 2025})
        assert where == "c.stato = %s AND c.anno = %s"
        assert params == ['bozza', 2025]

    def test_placeholder_multipli(self, filters):
        where, params = filters.build({'search': 'Acme'})
        assert where.count('%s') == 2
        assert params == ['%acme%', '%acme%']

    def test_names(self, filters):
        assert filters.names == ['stato', 'anno', 'search']


@pytest.mark.unit
class TestResponse:

    def test_success_response(self):
        assert success_response({'id': 1}, "ok", extra=True) == {
            "success": True, "data": {'id': 1}, "message": "ok", "extra": True
        }

    def test_paginated_response(self):
        response = paginated_response([1, 2], 45, limit=20, offset=40)
        assert response["pagination"] == {
            "totale": 45, "limit": 20, "offset": 40, "pages": 3
        }

    def test_paginazione_pagina(self):
        assert paginazione_pagina(41, page=3, limit=20) == {
            'total': 41, 'pages': 3, 'current': 3, 'limit': 20
        }
