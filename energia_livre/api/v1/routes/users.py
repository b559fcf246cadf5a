from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import require_role
from energia_livre.db.session import get_db
from energia_livre.models.user import ROLE_ADMIN, User
from energia_livre.schemas.user import MessageResponse, UserResponse, UserUpdate
from energia_livre.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return UserService(db).list_users()


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return UserService(db).update_user(user_id, data)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    UserService(db).delete_user(current_user, user_id)
    return MessageResponse(message="Usuário excluído com sucesso")
