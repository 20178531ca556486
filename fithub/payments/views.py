import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from fithub.utils.security import require_user, ensure_same_user
from fithub.utils.rate_limit import optional_rate_limit
from fithub.payments import repository as payments_repo
from fithub.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])

class PaymentIntentRequest(BaseModel):
    price: float = Field(gt=0)

class PaymentInfoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    classes_id: List[str] = Field(min_length=1, alias="classesId")
    user_email: str = Field(min_length=1, alias="userEmail")
    transaction_id: str = Field(min_length=1, alias="transactionId")
    price: Any = None

# module fithub.payments.views
@router.post("/create-payment-intent", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_payment_intent(req: PaymentIntentRequest, user: Dict[str, Any] = Depends(require_user)):
    """
    Crée un PaymentIntent Stripe et renvoie {clientSecret} au client.
    - Montant envoyé à Stripe en centimes (price * 100, arrondi).
    """
    return payments_service.create_intent(req.price)

@router.post("/payment-info", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def payment_info(
    req: PaymentInfoRequest,
    class_id: Optional[str] = Query(default=None, alias="classId"),
    user: Dict[str, Any] = Depends(require_user),
):
    """
    Règle un paiement réussi (voir payments.service.settle).
    - Body: {classesId[], userEmail, transactionId, price}
    - Query optionnelle classId: achat d'un seul article, seule cette ligne du panier est supprimée.
    - Réponse: {paymentResult, deletedResult, enrolledResult, updatedResult}
      ou {replayed: true, ...} si la transaction a déjà été réglée.
    """
    return payments_service.settle(
        caller_email=user.get("email"),
        user_email=req.user_email,
        classes_id=req.classes_id,
        transaction_id=req.transaction_id,
        price=req.price,
        single_class_id=class_id,
    )

@router.get("/payment-history/{email}")
def payment_history(email: str, user: Dict[str, Any] = Depends(require_user)) -> List[Dict[str, Any]]:
    ensure_same_user(user, email)
    return payments_repo.list_payments(email)

@router.get("/payment-history-length/{email}")
def payment_history_length(email: str, user: Dict[str, Any] = Depends(require_user)) -> Dict[str, Any]:
    ensure_same_user(user, email)
    return {"total": payments_repo.count_payments(email)}
