# =============================================================================
# PIATTAFORMA B2B - API MODELS
# =============================================================================
# Modelli Pydantic per request delle API cataloghi.
# =============================================================================

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .services.cataloghi.constants import StatoCatalogo, TipoCatalogo, Stagione


def _check_date_ordini(model):
    inizio, fine = model.data_inizio_ordini, model.data_fine_ordini
    if inizio and fine and fine < inizio:
        raise ValueError("data_fine_ordini precedente a data_inizio_ordini")
    return model


class CatalogoCreate(BaseModel):
    """
    Request body per POST /cataloghi.

    Il codice è generato dal server e il catalogo nasce sempre in bozza.
    """
    nome: Optional[str] = Field(None, max_length=255)
    brand_id: str = Field(..., min_length=1, max_length=64)
    tipo: TipoCatalogo
    stagione: Stagione
    anno: int = Field(..., ge=2000, le=2100)
    data_inizio_ordini: Optional[date] = None
    data_fine_ordini: Optional[date] = None
    data_consegna: Optional[date] = None
    note: Optional[str] = None
    condizioni: Optional[str] = None
    cover_url: Optional[str] = None

    @model_validator(mode='after')
    def date_ordini_coerenti(self):
        return _check_date_ordini(self)


class CatalogoUpdate(BaseModel):
    """
    Request body per PUT /cataloghi/{id} (aggiornamento parziale).

    Solo i campi presenti nel body vengono modificati. stato uguale a
    quello attuale non è una transizione.
    """
    nome: Optional[str] = Field(None, max_length=255)
    brand_id: Optional[str] = Field(None, min_length=1, max_length=64)
    tipo: Optional[TipoCatalogo] = None
    stagione: Optional[Stagione] = None
    anno: Optional[int] = Field(None, ge=2000, le=2100)
    data_inizio_ordini: Optional[date] = None
    data_fine_ordini: Optional[date] = None
    data_consegna: Optional[date] = None
    note: Optional[str] = None
    condizioni: Optional[str] = None
    cover_url: Optional[str] = None
    stato: Optional[StatoCatalogo] = None

    @field_validator('brand_id', 'tipo', 'stagione', 'anno')
    @classmethod
    def non_nullo(cls, v):
        """Campi obbligatori: omettibili ma non annullabili."""
        if v is None:
            raise ValueError("il campo non può essere null")
        return v

    @model_validator(mode='after')
    def date_ordini_coerenti(self):
        return _check_date_ordini(self)


class CambioStatoRequest(BaseModel):
    """Request body per PATCH /cataloghi/{id}/stato."""
    stato: StatoCatalogo
