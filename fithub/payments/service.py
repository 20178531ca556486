"""
Cas d'usage 'payments': intention de paiement et règlement d'un achat de classes.

Le règlement (settle) transforme un paiement réussi en inscription:
  1) compteurs de chaque classe (+1 inscrit, -1 place) par incrément atomique
  2) ligne 'enrolled'
  3) suppression des lignes du panier achetées
  4) reçu 'payments'
Le store n'offre pas de transaction multi-documents côté client: chaque étape enregistre
son action inverse, rejouée en ordre inverse si une étape suivante échoue. Un marqueur
'settlements' indexé par transaction_id est posé avant toute mutation, ce qui rend un
second appel avec la même transaction sans effet.
"""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging

from fithub import config
from fithub.app_setup.errors import (
    ForbiddenError,
    NotFoundError,
    SeatsUnavailableError,
    ServiceError,
    SettlementFailed,
    ValidationError,
)
from fithub.cart import repository as cart_repo
from fithub.classes import repository as classes_repo
from fithub.enrollments import repository as enrollments_repo
from . import repository
from . import stripe_client

logger = logging.getLogger(__name__)

def create_intent(price: Any) -> Dict[str, Any]:
    """
    Crée le PaymentIntent Stripe pour un montant exprimé en unité monétaire.
    Retour: {"clientSecret": "..."}
    """
    amount = stripe_client.to_cents(price)
    if amount <= 0:
        raise ValidationError("price doit être un montant positif")
    intent = stripe_client.create_payment_intent(amount=amount)
    return {"clientSecret": intent.get("client_secret")}

class _Compensations:
    """Pile des actions inverses des étapes déjà appliquées."""

    def __init__(self):
        self._steps: List[tuple[str, Callable[[], Any]]] = []

    def push(self, label: str, action: Callable[[], Any]) -> None:
        self._steps.append((label, action))

    def run(self) -> bool:
        ok = True
        for label, action in reversed(self._steps):
            try:
                action()
            except Exception:
                ok = False
                logger.exception("payments.settle compensation failed step=%s", label)
        self._steps.clear()
        return ok

def _unique(ids: List[Any]) -> List[str]:
    seen: List[str] = []
    for raw in ids or []:
        cid = str(raw or "").strip()
        if cid and cid not in seen:
            seen.append(cid)
    return seen

def _verify_payment(transaction_id: str, classes_id: List[str]) -> None:
    """
    Confirme le PaymentIntent avant toute écriture:
    - status 'succeeded'
    - montant égal au total des classes existantes (le prix envoyé par le client ne fait pas foi)
    """
    intent = stripe_client.get_payment_intent(transaction_id)
    status = intent.get("status") or ""
    if status != "succeeded":
        raise ValidationError(f"Paiement non confirmé (status={status})")
    classes = classes_repo.fetch_classes_by_ids(classes_id)
    expected = sum(stripe_client.to_cents(c.get("price")) for c in classes)
    if intent.get("amount") != expected:
        raise ValidationError("Montant du paiement incohérent")

def _apply(
    saga: _Compensations,
    *,
    user_email: str,
    classes_id: List[str],
    transaction_id: str,
    price: Any,
    single_class_id: Optional[str],
) -> Dict[str, Any]:
    classes = classes_repo.fetch_classes_by_ids(classes_id)
    found = {str(c.get("id")) for c in classes}
    resolved = [cid for cid in classes_id if cid in found]
    missing = [cid for cid in classes_id if cid not in found]
    if missing:
        logger.warning("payments.settle missing classes tx=%s ids=%s", transaction_id, missing)
    if not resolved:
        raise NotFoundError("Aucune des classes demandées n'existe")

    updated: List[dict] = []
    for class_id in resolved:
        row = classes_repo.adjust_counters(class_id, 1, -1)
        if row is None:
            raise SeatsUnavailableError(f"Plus de place disponible pour la classe {class_id}")
        saga.push(f"counters:{class_id}", lambda cid=class_id: classes_repo.adjust_counters(cid, -1, 1))
        updated.append(row)

    enrollment = enrollments_repo.insert_enrollment({
        "user_email": user_email,
        "classes_id": resolved,
        "transaction_id": transaction_id,
    })
    if enrollment.get("id"):
        saga.push("enrollment", lambda: enrollments_repo.delete_enrollment(enrollment["id"]))

    # Mode "un seul article" vs "tout le panier"; toujours restreint au panier de l'acheteur
    cart_scope = [single_class_id] if single_class_id else classes_id
    deleted = cart_repo.delete_items(user_email, cart_scope)
    if deleted:
        saga.push("cart", lambda: cart_repo.restore_items(deleted))

    payment = repository.insert_payment({
        "user_email": user_email,
        "transaction_id": transaction_id,
        "price": price,
        "classes_id": classes_id,
        "date": datetime.now(timezone.utc).isoformat(),
    })

    return {
        "paymentResult": payment,
        "deletedResult": {"deletedCount": len(deleted)},
        "enrolledResult": enrollment,
        "updatedResult": {"matchedCount": len(resolved), "modifiedCount": len(updated), "classes": updated},
    }

def settle(
    *,
    caller_email: str,
    user_email: str,
    classes_id: List[Any],
    transaction_id: str,
    price: Any,
    single_class_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Règle un paiement réussi pour un ou plusieurs cours.
    - caller_email doit être user_email, sans tenir compte de la casse (on ne règle que son propre panier);
      les écritures utilisent caller_email, la forme sous laquelle le panier est enregistré
    - single_class_id: mode "un seul article", doit appartenir à classes_id
    - Classes inexistantes ignorées; 404 si aucune n'existe
    - 409 si une classe n'a plus de place; tout est compensé
    - Rejeu avec le même transaction_id: aucune mutation, {"replayed": true, ...}
    Erreurs: ValidationError (400), ForbiddenError (403), NotFoundError (404),
    SeatsUnavailableError (409), SettlementFailed (500) après compensation.
    """
    ids = _unique(classes_id)
    transaction_id = (transaction_id or "").strip()
    user_email = (user_email or "").strip()
    single_class_id = (single_class_id or "").strip() or None
    if not ids:
        raise ValidationError("classesId requis")
    if not transaction_id:
        raise ValidationError("transactionId requis")
    if not user_email or user_email.lower() != (caller_email or "").strip().lower():
        raise ForbiddenError("Règlement réservé au propriétaire du panier")
    # Les lignes du panier sont enregistrées sous l'email du jeton: toutes les écritures l'utilisent
    user_email = caller_email.strip()
    if single_class_id and single_class_id not in ids:
        raise ValidationError("classId doit faire partie de classesId")

    if config.STRIPE_VERIFY_INTENTS:
        _verify_payment(transaction_id, ids)

    marker = repository.insert_settlement_marker(transaction_id, user_email)
    if marker is None:
        existing = repository.get_settlement_marker(transaction_id) or {}
        logger.info("payments.settle replay tx=%s status=%s", transaction_id, existing.get("status"))
        return {"replayed": True, "transactionId": transaction_id, "status": existing.get("status")}

    logger.info("payments.settle start tx=%s user=%s classes=%s single=%s", transaction_id, user_email, ids, single_class_id)
    saga = _Compensations()
    try:
        result = _apply(
            saga,
            user_email=user_email,
            classes_id=ids,
            transaction_id=transaction_id,
            price=price,
            single_class_id=single_class_id,
        )
    except Exception as e:
        _abort(saga, transaction_id)
        if isinstance(e, (NotFoundError, SeatsUnavailableError)):
            raise
        message = e.message if isinstance(e, ServiceError) else str(e)
        raise SettlementFailed(f"Règlement annulé: {message}") from e

    if not repository.complete_settlement_marker(transaction_id):
        logger.warning("payments.settle marker not completed tx=%s", transaction_id)
    logger.info("payments.settle done tx=%s classes=%s", transaction_id, result["updatedResult"]["matchedCount"])
    return result

def _abort(saga: _Compensations, transaction_id: str) -> None:
    if saga.run():
        repository.release_settlement_marker(transaction_id)
        logger.warning("payments.settle rolled back tx=%s", transaction_id)
    else:
        # Le marqueur reste en place: un rejeu ne doit pas ré-appliquer un état partiel
        repository.set_settlement_status(transaction_id, "compensation_failed")
        logger.error("payments.settle compensation incomplete tx=%s", transaction_id)
