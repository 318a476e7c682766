# =============================================================================
# PIATTAFORMA B2B - STATE MACHINE TESTS
# =============================================================================
# Unit tests per transizioni di stato catalogo
# =============================================================================

import pytest

from piattaforma.exceptions import InvalidTransitionError, CatalogImmutableError
from piattaforma.services.cataloghi import (
    StatoCatalogo,
    allowed_targets,
    is_valid_transition,
    validate_transition,
    ensure_mutable,
    became_published,
)

BOZZA = StatoCatalogo.BOZZA.value
PUBBLICATO = StatoCatalogo.PUBBLICATO.value
ARCHIVIATO = StatoCatalogo.ARCHIVIATO.value
TUTTI = [BOZZA, PUBBLICATO, ARCHIVIATO]


@pytest.mark.unit
class TestTransizioni:
    """Tabella transizioni."""

    @pytest.mark.parametrize("da,a", [
        (BOZZA, PUBBLICATO),
        (BOZZA, ARCHIVIATO),
        (PUBBLICATO, ARCHIVIATO),
    ])
    def test_transizioni_ammesse(self, da, a):
        assert is_valid_transition(da, a)
        validate_transition(da, a)

    @pytest.mark.parametrize("da,a", [
        (BOZZA, BOZZA),
        (PUBBLICATO, PUBBLICATO),
        (PUBBLICATO, BOZZA),
        (ARCHIVIATO, BOZZA),
        (ARCHIVIATO, PUBBLICATO),
        (ARCHIVIATO, ARCHIVIATO),
    ])
    def test_transizioni_rifiutate(self, da, a):
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition(da, a)

        assert exc_info.value.from_stato == da
        assert exc_info.value.to_stato == a
        assert exc_info.value.extra == {"from": da, "to": a}

    def test_archiviato_terminale(self):
        assert allowed_targets(ARCHIVIATO) == frozenset()

    def test_stato_sconosciuto_rifiutato(self):
        with pytest.raises(InvalidTransitionError):
            validate_transition("cancellato", PUBBLICATO)

    def test_accetta_enum(self):
        validate_transition(StatoCatalogo.BOZZA, StatoCatalogo.PUBBLICATO)

    def test_errore_mappato_a_400(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition(PUBBLICATO, BOZZA)

        http_exc = exc_info.value.to_http_exception()
        assert http_exc.status_code == 400
        assert http_exc.detail["code"] == "INVALID_TRANSITION"
        assert http_exc.detail["from"] == PUBBLICATO
        assert http_exc.detail["to"] == BOZZA


@pytest.mark.unit
class TestImmutabilita:

    @pytest.mark.parametrize("stato", [BOZZA, PUBBLICATO])
    def test_modificabile(self, stato):
        ensure_mutable(stato)

    def test_archiviato_immutabile(self):
        with pytest.raises(CatalogImmutableError) as exc_info:
            ensure_mutable(ARCHIVIATO)
        assert exc_info.value.status_code == 400


@pytest.mark.unit
class TestBecamePublished:

    @pytest.mark.parametrize("precedente", [BOZZA, ARCHIVIATO])
    def test_passaggio_a_pubblicato(self, precedente):
        assert became_published(precedente, PUBBLICATO)

    def test_risalvataggio_pubblicato(self):
        """Già pubblicato -> pubblicato non è un nuovo evento."""
        assert not became_published(PUBBLICATO, PUBBLICATO)

    @pytest.mark.parametrize("precedente", TUTTI)
    @pytest.mark.parametrize("nuovo", [BOZZA, ARCHIVIATO])
    def test_altri_stati(self, precedente, nuovo):
        assert not became_published(precedente, nuovo)
