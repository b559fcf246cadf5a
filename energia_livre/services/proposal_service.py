import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from energia_livre.core.cache import invalidate_marketplace_cache
from energia_livre.models.proposal import Proposal
from energia_livre.models.user import ROLE_ADMIN, ROLE_USER, User
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.proposal_repository import ProposalRepository
from energia_livre.repositories.purchase_intent_repository import PurchaseIntentRepository
from energia_livre.schemas.proposal import ProposalCreate, ProposalUpdate

logger = logging.getLogger(__name__)


class ProposalService:
    def __init__(self, db: Session):
        self.repo = ProposalRepository(db)
        self.intent_repo = PurchaseIntentRepository(db)
        self.comercializadora_repo = ComercializadoraRepository(db)

    def _company_of(self, user: User):
        company = self.comercializadora_repo.get_by_user_id(user.id)
        if company is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Usuário não possui comercializadora cadastrada",
            )
        return company

    def create(self, user: User, data: ProposalCreate) -> Proposal:
        company = self._company_of(user)
        if self.intent_repo.get_by_id(data.intent_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Intenção não encontrada")

        proposal = Proposal(comercializadora_id=company.id, **data.model_dump())
        proposal = self.repo.create(proposal)
        invalidate_marketplace_cache()
        logger.info(f"Proposta {proposal.id} criada por {company.id} para intenção {data.intent_id}")
        return proposal

    def list_by_intent(self, user: User, intent_id: str) -> List[Proposal]:
        intent = self.intent_repo.get_by_id(intent_id)
        if intent is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Intenção não encontrada")
        if user.role == ROLE_USER and intent.user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
        return self.repo.list_by_intent(intent_id)

    def update(self, user: User, proposal_id: str, data: ProposalUpdate) -> Proposal:
        proposal = self.repo.get_by_id(proposal_id)
        if proposal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Proposta não encontrada")
        if user.role != ROLE_ADMIN:
            company = self._company_of(user)
            if proposal.comercializadora_id != company.id:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nenhum dado para atualizar")
        for field, value in changes.items():
            setattr(proposal, field, value)
        return self.repo.update(proposal)
