"""
Reconciliação de acessos a parceiros (UserPartnerAccess).

Cada sessão de contato de um usuário com uma comercializadora vira exatamente uma linha,
identificada por (user_id, comercializadora_id, access_id). Eventos repetidos da mesma sessão
só avançam last_access; received_response só vai de false para true.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from energia_livre.core.exceptions import ResponseAlreadyReceived
from energia_livre.models.user_partner_access import UserPartnerAccess
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.partner_access_repository import PartnerAccessRepository
from energia_livre.schemas.partner_access import LocalAccessItem
from energia_livre.utils.dates import as_utc

logger = logging.getLogger(__name__)


def strip_access_suffix(comercializadora_id: str) -> str:
    """IDs vindos do cliente podem ter sufixo "_<timestamp>"; o id real é o que vem antes."""
    return comercializadora_id.split("_", 1)[0]


class PartnerAccessService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PartnerAccessRepository(db)
        self.comercializadora_repo = ComercializadoraRepository(db)

    @staticmethod
    def _apply_update(access: UserPartnerAccess, last_access: datetime, received_response: bool) -> None:
        access.last_access = last_access
        # OR: um evento com false nunca limpa uma resposta já registrada
        access.received_response = bool(access.received_response or received_response)
        access.updated_at = datetime.now(timezone.utc)

    def sync_access(
        self,
        user_id: str,
        comercializadora_id: str,
        access_id: str,
        first_access: datetime,
        last_access: datetime,
        received_response: bool = False,
        commit: bool = True,
    ) -> UserPartnerAccess:
        """
        Upsert pela chave (user, comercializadora, access_id).
        Com commit=False a linha fica na transação do chamador (ex.: criação da intenção).
        """
        first_access, last_access = as_utc(first_access), as_utc(last_access)
        access = self.repo.get_by_key(user_id, comercializadora_id, access_id)
        if access is not None:
            self._apply_update(access, last_access, received_response)
        else:
            access = UserPartnerAccess(
                user_id=user_id,
                comercializadora_id=comercializadora_id,
                access_id=access_id,
                first_access=first_access,
                last_access=last_access,
                received_response=bool(received_response),
            )
            try:
                with self.db.begin_nested():
                    self.repo.add(access)
            except IntegrityError:
                # Outra requisição inseriu a mesma chave entre a busca e o insert
                logger.warning(
                    f"Conflito ao inserir acesso ({user_id}, {comercializadora_id}, {access_id}); tentando como update"
                )
                access = self.repo.get_by_key(user_id, comercializadora_id, access_id)
                if access is None:
                    raise
                self._apply_update(access, last_access, received_response)

        if commit:
            self.db.commit()
            self.db.refresh(access)
        else:
            self.db.flush()
        return access

    def set_response_received(
        self,
        user_id: str,
        comercializadora_id: str,
        access_id: str,
        value: bool,
    ) -> UserPartnerAccess:
        access = self.repo.get_by_key(user_id, comercializadora_id, access_id)
        if access is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Acesso não encontrado")
        if access.received_response and not value:
            raise ResponseAlreadyReceived("UserPartnerAccess", access.id)

        access.received_response = value
        access.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(access)
        logger.info(f"Acesso {access.id} do usuário {user_id}: received_response={value}")
        return access

    def register_access(
        self,
        user_id: str,
        comercializadora_id: str,
        now: Optional[datetime] = None,
    ) -> UserPartnerAccess:
        """Usuário abriu o contato com a comercializadora: reaproveita o acesso sem resposta ou cria outro."""
        if self.comercializadora_repo.get_by_id(comercializadora_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comercializadora não encontrada")

        now = as_utc(now or datetime.now(timezone.utc))
        open_access = self.repo.get_open_for_comercializadora(user_id, comercializadora_id)
        if open_access is not None:
            return self.sync_access(
                user_id,
                comercializadora_id,
                open_access.access_id,
                open_access.first_access,
                now,
                False,
            )

        access_id = f"{comercializadora_id}_{int(now.timestamp() * 1000)}"
        return self.sync_access(user_id, comercializadora_id, access_id, now, now, False)

    def sync_local_accesses(self, user_id: str, items: Iterable[LocalAccessItem]) -> dict:
        """
        Sincroniza acessos guardados no cliente. Cada item roda no próprio savepoint,
        então um item com erro é descartado sem abortar os demais.
        """
        items = list(items)
        synced = 0
        for item in items:
            raw_id = item.comercializadora_id or item.id
            if not raw_id:
                logger.warning(f"Pulando acesso sem ID válido do usuário {user_id}")
                continue

            comercializadora_id = strip_access_suffix(raw_id)
            if self.comercializadora_repo.get_by_id(comercializadora_id) is None:
                logger.warning(f"Pulando acesso para comercializadora inexistente {comercializadora_id}")
                continue

            access_id = item.access_id or item.id or raw_id
            try:
                with self.db.begin_nested():
                    self.sync_access(
                        user_id,
                        comercializadora_id,
                        access_id,
                        item.first_access,
                        item.last_access,
                        item.received_response,
                        commit=False,
                    )
                synced += 1
            except IntegrityError as e:
                logger.error(f"Erro ao sincronizar acesso {access_id} do usuário {user_id}: {e}")

        self.db.commit()
        logger.info(f"Sincronização de acessos do usuário {user_id}: {synced}/{len(items)}")
        return {"message": "Sincronização concluída", "synced": synced, "total": len(items)}

    def list_for_user(self, user_id: str) -> List[UserPartnerAccess]:
        return self.repo.list_by_user(user_id)
