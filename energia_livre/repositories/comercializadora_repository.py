from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from energia_livre.models.comercializadora import Comercializadora


class ComercializadoraRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, comercializadora_id: str) -> Optional[Comercializadora]:
        return self.db.query(Comercializadora).filter(Comercializadora.id == comercializadora_id).first()

    def get_by_user_id(self, user_id: str) -> Optional[Comercializadora]:
        return self.db.query(Comercializadora).filter(Comercializadora.user_id == user_id).first()

    def get_by_cnpj(self, cnpj: str) -> Optional[Comercializadora]:
        return self.db.query(Comercializadora).filter(Comercializadora.cnpj == cnpj).first()

    def get_approved(self, comercializadora_id: str) -> Optional[Comercializadora]:
        """Comercializadora existente E aprovada; None caso contrário."""
        return (
            self.db.query(Comercializadora)
            .filter(Comercializadora.id == comercializadora_id, Comercializadora.is_approved.is_(True))
            .first()
        )

    def list_all(self) -> List[Comercializadora]:
        return self.db.query(Comercializadora).order_by(Comercializadora.company_name).all()

    def list_approved(self) -> List[Comercializadora]:
        return (
            self.db.query(Comercializadora)
            .filter(Comercializadora.is_approved.is_(True))
            .order_by(Comercializadora.company_name)
            .all()
        )

    def count_approved(self) -> int:
        return (
            self.db.query(func.count(Comercializadora.id))
            .filter(Comercializadora.is_approved.is_(True))
            .scalar()
            or 0
        )

    def create(self, comercializadora: Comercializadora) -> Comercializadora:
        self.db.add(comercializadora)
        self.db.commit()
        self.db.refresh(comercializadora)
        return comercializadora

    def update(self, comercializadora: Comercializadora) -> Comercializadora:
        self.db.commit()
        self.db.refresh(comercializadora)
        return comercializadora

    def delete(self, comercializadora: Comercializadora) -> None:
        try:
            self.db.delete(comercializadora)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
