"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le client Stripe (PaymentIntent), le repository des reçus/marqueurs et le règlement.
"""

from .stripe_client import require_stripe, create_payment_intent, get_payment_intent, to_cents
from .service import create_intent, settle

__all__ = [
    # stripe
    "require_stripe",
    "create_payment_intent",
    "get_payment_intent",
    "to_cents",
    # services
    "create_intent",
    "settle",
]
