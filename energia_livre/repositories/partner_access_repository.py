from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from energia_livre.models.user_partner_access import UserPartnerAccess


class PartnerAccessRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, user_id: str, comercializadora_id: str, access_id: str) -> Optional[UserPartnerAccess]:
        """Busca pela chave composta (user_id, comercializadora_id, access_id)."""
        return (
            self.db.query(UserPartnerAccess)
            .filter(
                UserPartnerAccess.user_id == user_id,
                UserPartnerAccess.comercializadora_id == comercializadora_id,
                UserPartnerAccess.access_id == access_id,
            )
            .first()
        )

    def get_open_for_comercializadora(self, user_id: str, comercializadora_id: str) -> Optional[UserPartnerAccess]:
        """Acesso mais recente do usuário a esta comercializadora ainda sem resposta."""
        return (
            self.db.query(UserPartnerAccess)
            .filter(
                UserPartnerAccess.user_id == user_id,
                UserPartnerAccess.comercializadora_id == comercializadora_id,
                UserPartnerAccess.received_response.is_(False),
            )
            .order_by(UserPartnerAccess.last_access.desc())
            .first()
        )

    def list_by_user(self, user_id: str) -> List[UserPartnerAccess]:
        return (
            self.db.query(UserPartnerAccess)
            .options(joinedload(UserPartnerAccess.comercializadora))
            .filter(UserPartnerAccess.user_id == user_id)
            .order_by(UserPartnerAccess.last_access.desc())
            .all()
        )

    def list_with_relations(self) -> List[UserPartnerAccess]:
        return (
            self.db.query(UserPartnerAccess)
            .options(
                joinedload(UserPartnerAccess.user),
                joinedload(UserPartnerAccess.comercializadora),
            )
            .all()
        )

    def list_last_access_between(
        self,
        start: datetime,
        end: datetime,
        comercializadora_id: Optional[str] = None,
    ) -> List[UserPartnerAccess]:
        """Acessos com last_access em [start, end)."""
        query = (
            self.db.query(UserPartnerAccess)
            .options(
                joinedload(UserPartnerAccess.user),
                joinedload(UserPartnerAccess.comercializadora),
            )
            .filter(UserPartnerAccess.last_access >= start, UserPartnerAccess.last_access < end)
        )
        if comercializadora_id:
            query = query.filter(UserPartnerAccess.comercializadora_id == comercializadora_id)
        return query.order_by(UserPartnerAccess.last_access.desc()).all()

    def add(self, access: UserPartnerAccess) -> UserPartnerAccess:
        self.db.add(access)
        self.db.flush()
        return access
