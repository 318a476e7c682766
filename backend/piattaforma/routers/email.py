# =============================================================================
# PIATTAFORMA B2B - EMAIL ROUTER
# =============================================================================
# Verifica configurazione SMTP con invio di un'email di test
# =============================================================================

from typing import Dict, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from ..dependencies import get_email_sender
from ..services.email import EmailSender


router = APIRouter(prefix="/email")


class TestEmailRequest(BaseModel):
    """Request per invio email di test"""
    destinatario: EmailStr


@router.post("/test")
def invia_email_test(
    data: TestEmailRequest,
    sender: EmailSender = Depends(get_email_sender)
) -> Dict[str, Any]:
    """
    Invia l'email di test al destinatario.

    Con SMTP non configurato l'esito è skipped, senza errore HTTP.
    """
    result = sender.send_test_email(data.destinatario)
    if result['success']:
        result['message'] = f"Email di test inviata a {data.destinatario}"
    return result
