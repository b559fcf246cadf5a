import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from energia_livre.core.config import settings
from energia_livre.models.comercializadora import Comercializadora
from energia_livre.models.user import ROLE_ADMIN, User
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.repositories.purchase_intent_repository import PurchaseIntentRepository
from energia_livre.utils.affiliate_code import decode_affiliate_code, encode_affiliate_code, short_affiliate_code
from energia_livre.utils.dates import month_bounds, storage_bounds

logger = logging.getLogger(__name__)


class AffiliateService:
    def __init__(self, db: Session):
        self.comercializadora_repo = ComercializadoraRepository(db)
        self.intent_repo = PurchaseIntentRepository(db)

    def _authorized_company(self, current_user: User, comercializadora_id: str) -> Comercializadora:
        """Admin vê qualquer comercializadora; a comercializadora só a própria."""
        comercializadora = self.comercializadora_repo.get_by_id(comercializadora_id)
        if comercializadora is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comercializadora não encontrada")
        if current_user.role != ROLE_ADMIN and comercializadora.user_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
        return comercializadora

    def get_code(self, current_user: User, comercializadora_id: str) -> dict:
        comercializadora = self._authorized_company(current_user, comercializadora_id)
        code = encode_affiliate_code(comercializadora.id)
        return {
            "affiliate_code": code,
            "short_code": short_affiliate_code(code),
            "affiliate_link": f"{settings.FRONTEND_URL.rstrip('/')}/purchase-intent?ref={code}",
            "comercializadora_id": comercializadora.id,
        }

    def resolve(self, code: str) -> dict:
        # InvalidAffiliateCode (400) sobe se o código estiver malformado
        comercializadora_id = decode_affiliate_code(code)
        comercializadora = self.comercializadora_repo.get_approved(comercializadora_id)
        if comercializadora is None:
            logger.info(f"Código de afiliado sem comercializadora aprovada: {code}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Código de afiliado inválido")
        return {"comercializadora_id": comercializadora.id, "company_name": comercializadora.company_name}

    def stats(self, current_user: User, comercializadora_id: str, now: Optional[datetime] = None) -> dict:
        comercializadora = self._authorized_company(current_user, comercializadora_id)
        return self.stats_for(comercializadora.id, now)

    def stats_for(self, comercializadora_id: str, now: Optional[datetime] = None) -> dict:
        total = self.intent_repo.count_by_affiliate(comercializadora_id)
        start, end = storage_bounds(month_bounds(now))
        monthly = self.intent_repo.count_by_affiliate(comercializadora_id, start, end)
        return {
            "total_referrals": total,
            "monthly_referrals": monthly,
            "total_commission": total * settings.AFFILIATE_COMMISSION_PER_REFERRAL,
        }
