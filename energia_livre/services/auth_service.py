import logging

from fastapi import HTTPException, status

from energia_livre.core.cache import invalidate_marketplace_cache
from energia_livre.core.security import verify_password, get_password_hash, create_access_token
from energia_livre.models.user import User
from energia_livre.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    @staticmethod
    def _token_payload(user: User) -> dict:
        access_token = create_access_token(data={"sub": user.id, "role": user.role})
        return {"access_token": access_token, "token_type": "bearer", "user": user}

    def register(self, user_data) -> dict:
        """Cria o usuário (role user ou comercializadora) e já devolve o token de sessão."""
        existing = self.user_repo.get_by_email(user_data.email)
        if existing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado")

        new_user = User(
            name=user_data.name,
            email=user_data.email.strip().lower(),
            hashed_password=get_password_hash(user_data.password),
            role=user_data.role,
            phone=user_data.phone,
            document_type=user_data.document_type,
            document_number=user_data.document_number,
        )
        user = self.user_repo.create(new_user)
        # total_users do admin:stats muda a cada cadastro
        invalidate_marketplace_cache()
        logger.info(f"Usuário registrado: {user.email} (role={user.role})")
        return self._token_payload(user)

    def login(self, email: str, password: str) -> dict:
        user = self.user_repo.get_by_email(email)
        if user and user.hashed_password is None:
            # Conta criada via Google: não há senha local
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Esta conta usa login com Google",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Falha de login para {email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Email ou senha incorretos",
                headers={"WWW-Authenticate": "Bearer"},
            )
        logger.info(f"Login bem-sucedido para {user.email}")
        return self._token_payload(user)
