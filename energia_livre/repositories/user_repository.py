from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from energia_livre.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        normalized = email.strip().lower()
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == normalized)
            .first()
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def count(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Remove o usuário; a comercializadora dele vai junto (cascade do relacionamento)."""
        try:
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
