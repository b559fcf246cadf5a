from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user
from energia_livre.db.session import get_db
from energia_livre.models.user import User
from energia_livre.schemas.purchase_intent import (
    PurchaseIntentCreate,
    PurchaseIntentResponse,
    PurchaseIntentWithComercializadora,
    ResponseStatusUpdate,
)
from energia_livre.services.purchase_intent_service import PurchaseIntentService

router = APIRouter(tags=["purchase-intents"])


@router.post("", response_model=PurchaseIntentResponse, status_code=status.HTTP_201_CREATED)
def create_purchase_intent(
    data: PurchaseIntentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PurchaseIntentService(db).create(current_user, data)


@router.get("", response_model=List[PurchaseIntentWithComercializadora])
def list_purchase_intents(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PurchaseIntentService(db).list_for(current_user)


@router.patch("/{intent_id}/response-status", response_model=PurchaseIntentResponse)
def update_response_status(
    intent_id: str,
    body: ResponseStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Marca que o usuário recebeu resposta. Não é possível voltar para false (409)."""
    return PurchaseIntentService(db).set_response_received(current_user, intent_id, body.user_received_response)
