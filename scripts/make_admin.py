"""
Promove um usuário existente a admin (cadastro público não cria admins).
Usage: python scripts/make_admin.py <email>
"""
import sys

from energia_livre.db.session import SessionLocal
from energia_livre.models.user import ROLE_ADMIN
from energia_livre.repositories.user_repository import UserRepository


def make_admin(email: str) -> int:
    db = SessionLocal()
    try:
        repo = UserRepository(db)
        user = repo.get_by_email(email)
        if not user:
            print("Usuário não encontrado. Cadastre-se primeiro e rode novamente.")
            return 1
        user.role = ROLE_ADMIN
        repo.update(user)
        print(f"OK: `{user.email}` agora é admin.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2 or not sys.argv[1].strip():
        print("Uso: python scripts/make_admin.py <email>")
        sys.exit(2)
    sys.exit(make_admin(sys.argv[1].strip()))
