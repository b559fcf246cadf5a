from typing import Optional
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from energia_livre.core.security import decode_access_token
from energia_livre.db.session import get_db
from energia_livre.repositories.user_repository import UserRepository
from energia_livre.models.user import User

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized("Token de autenticação não fornecido")
    token = (credentials.credentials or "").strip()
    if not token:
        raise _unauthorized("Token inválido ou expirado")

    payload = decode_access_token(token)
    if payload is None:
        raise _unauthorized("Token inválido ou expirado")

    user_id = payload.get("sub")
    if not user_id:
        logger.error(f"Token sem 'sub'. Payload keys: {list(payload.keys())}")
        raise _unauthorized("Token inválido")

    user = UserRepository(db).get_by_id(str(user_id))
    if user is None:
        logger.warning(f"Usuário {user_id} do token não existe mais")
        raise _unauthorized("Usuário não encontrado")
    return user


def require_role(*roles: str):
    """Dependency factory: 403 se o usuário autenticado não tiver um dos perfis."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            logger.info(f"Acesso negado para {current_user.id} (role={current_user.role}, exige {roles})")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
        return current_user

    return checker
