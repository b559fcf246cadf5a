import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from energia_livre.core.cache import invalidate_marketplace_cache
from energia_livre.core.security import get_password_hash
from energia_livre.models.user import User
from energia_livre.repositories.user_repository import UserRepository
from energia_livre.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Gestão de usuários pelo admin."""

    def __init__(self, db: Session):
        self.repo = UserRepository(db)

    def _get_or_404(self, user_id: str) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado")
        return user

    def list_users(self) -> List[User]:
        return self.repo.list_all()

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nenhum dado para atualizar")

        user = self._get_or_404(user_id)
        if "email" in changes and changes["email"]:
            changes["email"] = changes["email"].strip().lower()
            other = self.repo.get_by_email(changes["email"])
            if other is not None and other.id != user.id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado")

        password = changes.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)
        for field, value in changes.items():
            setattr(user, field, value)

        user = self.repo.update(user)
        logger.info(f"Usuário {user.id} atualizado: {sorted(changes)}")
        return user

    def delete_user(self, current_user: User, user_id: str) -> None:
        if current_user.id == user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Você não pode excluir sua própria conta")
        user = self._get_or_404(user_id)
        self.repo.delete(user)
        invalidate_marketplace_cache()
        logger.info(f"Usuário {user_id} removido por {current_user.id}")
