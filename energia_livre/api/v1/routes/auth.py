from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user
from energia_livre.db.session import get_db
from energia_livre.models.user import User
from energia_livre.schemas.user import MessageResponse, TokenWithUser, UserCreate, UserResponse
from energia_livre.services.auth_service import AuthService
from energia_livre.repositories.user_repository import UserRepository

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=TokenWithUser, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    return AuthService(UserRepository(db)).register(user_data)


@router.post("/login", response_model=TokenWithUser)
def login(
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    return AuthService(UserRepository(db)).login(email, password)


@router.post("/logout", response_model=MessageResponse)
def logout():
    """JWT é stateless: o cliente descarta o token."""
    return MessageResponse(message="Logout realizado com sucesso")


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
