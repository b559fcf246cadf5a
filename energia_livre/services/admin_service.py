import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Type

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energia_livre.core.cache import ADMIN_STATS_KEY, cache_get, cache_set, invalidate_marketplace_cache
from energia_livre.core.config import settings
from energia_livre.models.comercializadora import Comercializadora
from energia_livre.models.proposal import Proposal
from energia_livre.models.purchase_intent import PurchaseIntent
from energia_livre.models.user import User
from energia_livre.models.user_partner_access import UserPartnerAccess
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.proposal_repository import ProposalRepository
from energia_livre.repositories.purchase_intent_repository import PurchaseIntentRepository
from energia_livre.repositories.user_repository import UserRepository
from energia_livre.schemas.admin import (
    ComercializadoraDump,
    DataImport,
    ProposalDump,
    PurchaseIntentDump,
    UserDump,
)

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.comercializadora_repo = ComercializadoraRepository(db)
        self.intent_repo = PurchaseIntentRepository(db)
        self.proposal_repo = ProposalRepository(db)

    def stats(self) -> dict:
        cached = cache_get(ADMIN_STATS_KEY)
        if cached is not None:
            return cached
        result = {
            "total_users": self.user_repo.count(),
            "total_comercializadoras": self.comercializadora_repo.count_approved(),
            "total_proposals": self.proposal_repo.count(),
        }
        cache_set(ADMIN_STATS_KEY, result)
        return result

    def database_info(self) -> dict:
        tables: Dict[str, int] = {}
        for model in (User, Comercializadora, PurchaseIntent, Proposal, UserPartnerAccess):
            tables[model.__tablename__] = self.db.query(func.count(model.id)).scalar() or 0
        return {
            "environment": settings.ENVIRONMENT,
            "database": self.db.get_bind().dialect.name,
            "schema_name": settings.DATABASE_SCHEMA,
            "tables": tables,
        }

    def export_data(self) -> dict:
        """Dump completo para levar dados de um ambiente para outro (inclui hashes de senha)."""
        users = [UserDump.model_validate(u) for u in self.user_repo.list_all()]
        comercializadoras = [ComercializadoraDump.model_validate(c) for c in self.comercializadora_repo.list_all()]
        intents = [PurchaseIntentDump.model_validate(i) for i in self.intent_repo.list_all()]
        proposals = [ProposalDump.model_validate(p) for p in self.proposal_repo.list_all()]
        logger.info(
            f"Export: {len(users)} usuários, {len(comercializadoras)} comercializadoras, "
            f"{len(intents)} intenções, {len(proposals)} propostas"
        )
        return {
            "exported_at": datetime.now(timezone.utc),
            "environment": settings.ENVIRONMENT,
            "users": users,
            "comercializadoras": comercializadoras,
            "purchase_intents": intents,
            "proposals": proposals,
            "stats": {
                "total_users": len(users),
                "total_comercializadoras": len(comercializadoras),
                "total_purchase_intents": len(intents),
                "total_proposals": len(proposals),
            },
        }

    def _upsert_rows(
        self,
        model: Type,
        rows: List,
        label: Callable[[object], str],
        errors: List[str],
    ) -> int:
        """Upsert por id; cada linha no próprio savepoint para um erro não derrubar o lote."""
        imported = 0
        for row in rows:
            try:
                with self.db.begin_nested():
                    self.db.merge(model(**row.model_dump(exclude_none=True)))
                imported += 1
            except SQLAlchemyError as e:
                errors.append(f"Erro ao importar {label(row)}: {e}")
        return imported

    def import_data(self, data: DataImport) -> dict:
        """Importa na ordem das dependências: usuários, comercializadoras, intenções, propostas."""
        errors: List[str] = []
        imported = {
            "users": self._upsert_rows(User, data.users, lambda r: f"usuário {r.email}", errors),
            "comercializadoras": self._upsert_rows(
                Comercializadora, data.comercializadoras, lambda r: f"comercializadora {r.company_name}", errors
            ),
            "purchase_intents": self._upsert_rows(
                PurchaseIntent, data.purchase_intents, lambda r: f"intenção {r.id}", errors
            ),
            "proposals": self._upsert_rows(Proposal, data.proposals, lambda r: f"proposta {r.id}", errors),
        }
        self.db.commit()
        invalidate_marketplace_cache()

        total = sum(imported.values())
        logger.info(f"Import concluído: {imported} ({len(errors)} erros)")
        return {
            "success": True,
            "message": f"{total} registros importados",
            "imported": imported,
            "errors": errors,
        }
