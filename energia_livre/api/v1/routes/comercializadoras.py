from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user, require_role
from energia_livre.db.session import get_db
from energia_livre.models.user import ROLE_ADMIN, ROLE_COMERCIALIZADORA, User
from energia_livre.schemas.comercializadora import (
    ComercializadoraCreate,
    ComercializadoraResponse,
    ComercializadoraUpdate,
)
from energia_livre.schemas.user import MessageResponse
from energia_livre.services.comercializadora_service import ComercializadoraService

router = APIRouter(tags=["comercializadoras"])


@router.post("", response_model=ComercializadoraResponse, status_code=status.HTTP_201_CREATED)
def create_comercializadora(
    data: ComercializadoraCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ComercializadoraService(db).create(current_user, data)


@router.get("", response_model=List[ComercializadoraResponse])
def list_comercializadoras(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ComercializadoraService(db).list_all()


@router.get("/approved", response_model=List[ComercializadoraResponse])
def list_approved(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ComercializadoraService(db).list_approved()


@router.get("/my-company", response_model=ComercializadoraResponse)
def my_company(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_COMERCIALIZADORA)),
):
    return ComercializadoraService(db).get_for_user(current_user)


@router.put("/{comercializadora_id}", response_model=ComercializadoraResponse)
def update_comercializadora(
    comercializadora_id: str,
    data: ComercializadoraUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ComercializadoraService(db).update(comercializadora_id, data)


@router.delete("/{comercializadora_id}", response_model=MessageResponse)
def delete_comercializadora(
    comercializadora_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    ComercializadoraService(db).delete(comercializadora_id)
    return MessageResponse(message="Comercializadora excluída com sucesso")
