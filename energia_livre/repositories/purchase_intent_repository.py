from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from energia_livre.models.proposal import Proposal
from energia_livre.models.purchase_intent import PurchaseIntent


class PurchaseIntentRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, intent: PurchaseIntent) -> PurchaseIntent:
        """Adiciona e faz flush; o commit fica com o serviço (intenção + acesso na mesma transação)."""
        self.db.add(intent)
        self.db.flush()
        return intent

    def get_by_id(self, intent_id: str) -> Optional[PurchaseIntent]:
        return self.db.query(PurchaseIntent).filter(PurchaseIntent.id == intent_id).first()

    def get_by_id_for_user(self, intent_id: str, user_id: str) -> Optional[PurchaseIntent]:
        """Busca a intenção filtrando por user_id para garantir que pertence ao usuário."""
        return (
            self.db.query(PurchaseIntent)
            .filter(PurchaseIntent.user_id == user_id, PurchaseIntent.id == intent_id)
            .first()
        )

    def list_with_comercializadora(self, user_id: Optional[str] = None) -> List[PurchaseIntent]:
        query = self.db.query(PurchaseIntent).options(joinedload(PurchaseIntent.comercializadora))
        if user_id is not None:
            query = query.filter(PurchaseIntent.user_id == user_id)
        return query.order_by(PurchaseIntent.created_at.desc()).all()

    def list_all(self) -> List[PurchaseIntent]:
        return self.db.query(PurchaseIntent).all()

    def list_created_between(
        self,
        start: datetime,
        end: datetime,
        comercializadora_id: Optional[str] = None,
    ) -> List[PurchaseIntent]:
        """Intenções criadas em [start, end)."""
        query = (
            self.db.query(PurchaseIntent)
            .options(joinedload(PurchaseIntent.comercializadora))
            .filter(PurchaseIntent.created_at >= start, PurchaseIntent.created_at < end)
        )
        if comercializadora_id:
            query = query.filter(PurchaseIntent.comercializadora_id == comercializadora_id)
        return query.order_by(PurchaseIntent.created_at.desc()).all()

    def list_with_affiliate(self) -> List[PurchaseIntent]:
        return (
            self.db.query(PurchaseIntent)
            .options(joinedload(PurchaseIntent.comercializadora))
            .filter(PurchaseIntent.affiliate_comercializadora_id.isnot(None))
            .order_by(PurchaseIntent.created_at.desc())
            .all()
        )

    def count_by_affiliate(
        self,
        comercializadora_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        query = self.db.query(func.count(PurchaseIntent.id)).filter(
            PurchaseIntent.affiliate_comercializadora_id == comercializadora_id
        )
        if start is not None:
            query = query.filter(PurchaseIntent.created_at >= start)
        if end is not None:
            query = query.filter(PurchaseIntent.created_at < end)
        return query.scalar() or 0

    def proposal_counts(self) -> Dict[str, int]:
        """Número de propostas por intenção (intent_id -> total)."""
        rows = (
            self.db.query(Proposal.intent_id, func.count(Proposal.id))
            .group_by(Proposal.intent_id)
            .all()
        )
        return {intent_id: total for intent_id, total in rows}

    def update_invoice_path(self, intent: PurchaseIntent, invoice_file_path: str) -> PurchaseIntent:
        intent.invoice_file_path = invoice_file_path
        self.db.commit()
        self.db.refresh(intent)
        return intent

    def update(self, intent: PurchaseIntent) -> PurchaseIntent:
        self.db.commit()
        self.db.refresh(intent)
        return intent
