import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from energia_livre.core.cache import APPROVED_COMERCIALIZADORAS_KEY, cache_get, cache_set, invalidate_marketplace_cache
from energia_livre.models.comercializadora import Comercializadora
from energia_livre.models.user import User
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.user_repository import UserRepository
from energia_livre.schemas.comercializadora import (
    ComercializadoraCreate,
    ComercializadoraResponse,
    ComercializadoraUpdate,
)

logger = logging.getLogger(__name__)


class ComercializadoraService:
    def __init__(self, db: Session):
        self.repo = ComercializadoraRepository(db)
        self.user_repo = UserRepository(db)

    def _get_or_404(self, comercializadora_id: str) -> Comercializadora:
        comercializadora = self.repo.get_by_id(comercializadora_id)
        if comercializadora is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comercializadora não encontrada")
        return comercializadora

    def create(self, current_user: User, data: ComercializadoraCreate) -> Comercializadora:
        owner_id = data.user_id or current_user.id
        if self.user_repo.get_by_id(owner_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado")
        if self.repo.get_by_user_id(owner_id) is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Usuário já possui uma comercializadora")
        if self.repo.get_by_cnpj(data.cnpj) is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CNPJ já cadastrado")

        payload = data.model_dump(exclude={"user_id"})
        comercializadora = self.repo.create(Comercializadora(user_id=owner_id, **payload))
        invalidate_marketplace_cache()
        logger.info(f"Comercializadora {comercializadora.id} criada para usuário {owner_id}")
        return comercializadora

    def list_all(self) -> List[Comercializadora]:
        return self.repo.list_all()

    def list_approved(self) -> List[dict]:
        """Lista pública das aprovadas; fica em cache até a próxima alteração."""
        cached = cache_get(APPROVED_COMERCIALIZADORAS_KEY)
        if cached is not None:
            return cached
        items = [
            ComercializadoraResponse.model_validate(c).model_dump(mode="json")
            for c in self.repo.list_approved()
        ]
        cache_set(APPROVED_COMERCIALIZADORAS_KEY, items)
        return items

    def get_for_user(self, user: User) -> Comercializadora:
        comercializadora = self.repo.get_by_user_id(user.id)
        if comercializadora is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comercializadora não encontrada")
        return comercializadora

    def update(self, comercializadora_id: str, data: ComercializadoraUpdate) -> Comercializadora:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nenhum dado para atualizar")

        comercializadora = self._get_or_404(comercializadora_id)
        new_cnpj = changes.get("cnpj")
        if new_cnpj and new_cnpj != comercializadora.cnpj and self.repo.get_by_cnpj(new_cnpj) is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CNPJ já cadastrado")

        for field, value in changes.items():
            setattr(comercializadora, field, value)
        comercializadora = self.repo.update(comercializadora)
        invalidate_marketplace_cache()
        return comercializadora

    def delete(self, comercializadora_id: str) -> None:
        comercializadora = self._get_or_404(comercializadora_id)
        self.repo.delete(comercializadora)
        invalidate_marketplace_cache()
        logger.info(f"Comercializadora {comercializadora_id} removida")
