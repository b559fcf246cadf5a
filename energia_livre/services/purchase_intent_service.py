import logging
from datetime import datetime, timezone
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from energia_livre.core.exceptions import ResponseAlreadyReceived
from energia_livre.models.purchase_intent import PurchaseIntent
from energia_livre.models.user import ROLE_ADMIN, ROLE_COMERCIALIZADORA, User
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.purchase_intent_repository import PurchaseIntentRepository
from energia_livre.schemas.purchase_intent import PurchaseIntentCreate
from energia_livre.services.invoice_service import InvoiceService, user_invoice_prefix
from energia_livre.services.partner_access_service import PartnerAccessService

logger = logging.getLogger(__name__)


class PurchaseIntentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PurchaseIntentRepository(db)
        self.comercializadora_repo = ComercializadoraRepository(db)
        self.invoice_service = InvoiceService()

    def create(self, user: User, data: PurchaseIntentCreate) -> PurchaseIntent:
        """
        Cria a intenção e registra o acesso correspondente (access_id = id da intenção)
        na mesma transação. A fatura é movida para a pasta definitiva depois do commit.
        """
        target = self.comercializadora_repo.get_approved(data.comercializadora_id)
        if target is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Comercializadora não encontrada ou não aprovada",
            )
        if data.affiliate_comercializadora_id:
            if self.comercializadora_repo.get_approved(data.affiliate_comercializadora_id) is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Afiliado inválido")
        if data.invoice_file_path and not data.invoice_file_path.startswith(user_invoice_prefix(user.id)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Fatura não pertence ao usuário")

        now = datetime.now(timezone.utc)
        intent = PurchaseIntent(user_id=user.id, created_at=now, **data.model_dump())
        try:
            self.repo.create(intent)
            PartnerAccessService(self.db).sync_access(
                user.id,
                target.id,
                intent.id,
                now,
                now,
                False,
                commit=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(intent)
        logger.info(f"Intenção {intent.id} criada por {user.id} para comercializadora {target.id}")

        if intent.invoice_file_path:
            new_path = self.invoice_service.reorganize(
                intent.invoice_file_path, user.id, target.id, intent.created_at or now
            )
            if new_path:
                intent = self.repo.update_invoice_path(intent, new_path)
        return intent

    def list_for(self, user: User) -> List[PurchaseIntent]:
        """Admin e comercializadoras veem todas as intenções; usuário vê só as suas."""
        if user.role in (ROLE_ADMIN, ROLE_COMERCIALIZADORA):
            return self.repo.list_with_comercializadora()
        return self.repo.list_with_comercializadora(user_id=user.id)

    def set_response_received(self, user: User, intent_id: str, value: bool) -> PurchaseIntent:
        intent = self.repo.get_by_id_for_user(intent_id, user.id)
        if intent is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Intenção não encontrada")
        if intent.user_received_response and not value:
            raise ResponseAlreadyReceived("PurchaseIntent", intent.id)

        intent.user_received_response = value
        return self.repo.update(intent)
