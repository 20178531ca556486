"""
Adaptateur Stripe: centralise les appels PaymentIntent et la configuration Stripe.
"""
from typing import Any, Dict
import logging
import stripe

from fithub import config
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

# module fithub.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - Lève UpstreamError si la clé est absente.
    """
    if not config.STRIPE_SECRET_KEY:
        raise UpstreamError("STRIPE_SECRET_KEY manquant")
    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def _field(obj: Any, name: str) -> Any:
    # Les objets Stripe exposent les champs en attributs; les mocks de tests sont parfois des dicts
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)

def to_cents(price: Any) -> int:
    """Convertit un prix (str|float|int) en centimes; 0 si non interprétable."""
    try:
        return int(round(float(price) * 100))
    except (TypeError, ValueError):
        return 0

def create_payment_intent(*, amount: int, currency: str | None = None) -> Dict[str, Any]:
    """
    Crée un PaymentIntent carte.
    - amount: montant en centimes (> 0)
    Retour: {"id": "pi_...", "client_secret": "..."}
    """
    client = require_stripe()
    try:
        intent = client.PaymentIntent.create(
            amount=amount,
            currency=currency or config.STRIPE_CURRENCY,
            payment_method_types=["card"],
        )
    except Exception as e:
        logger.exception("payments.stripe_client.create_payment_intent failed amount=%s", amount)
        raise UpstreamError("Création du paiement impossible") from e
    return {"id": _field(intent, "id"), "client_secret": _field(intent, "client_secret")}

def get_payment_intent(intent_id: str) -> Dict[str, Any]:
    """
    Récupère un PaymentIntent par identifiant.
    Retour: {"id", "status", "amount", "currency"}
    """
    client = require_stripe()
    try:
        intent = client.PaymentIntent.retrieve(intent_id)
    except Exception as e:
        logger.exception("payments.stripe_client.get_payment_intent failed id=%s", intent_id)
        raise UpstreamError("Lecture du paiement impossible") from e
    return {
        "id": _field(intent, "id"),
        "status": _field(intent, "status"),
        "amount": _field(intent, "amount"),
        "currency": _field(intent, "currency"),
    }
