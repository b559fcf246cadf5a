from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from energia_livre.models.user import ROLE_ADMIN, ROLE_COMERCIALIZADORA, User
from energia_livre.repositories.comercializadora_repository import ComercializadoraRepository
from energia_livre.schemas.dashboard import AdminDashboard, ComercializadoraDashboard, UserDashboard
from energia_livre.services.activity_service import ActivityService
from energia_livre.services.admin_service import AdminService
from energia_livre.services.affiliate_service import AffiliateService
from energia_livre.services.partner_access_service import PartnerAccessService
from energia_livre.services.purchase_intent_service import PurchaseIntentService


class DashboardService:
    """Monta o painel de cada perfil a partir dos outros serviços."""

    def __init__(self, db: Session):
        self.db = db

    def for_user(self, user: User, now: Optional[datetime] = None):
        if user.role == ROLE_ADMIN:
            return AdminDashboard(
                stats=AdminService(self.db).stats(),
                weekly_activity=ActivityService(self.db).weekly_activity(now),
            )

        if user.role == ROLE_COMERCIALIZADORA:
            company = ComercializadoraRepository(self.db).get_by_user_id(user.id)
            if company is None:
                return ComercializadoraDashboard()
            return ComercializadoraDashboard(
                comercializadora=company,
                weekly_activity=ActivityService(self.db).weekly_activity(now, comercializadora_id=company.id),
                affiliate_stats=AffiliateService(self.db).stats_for(company.id, now),
            )

        return UserDashboard(
            purchase_intents=PurchaseIntentService(self.db).list_for(user),
            partner_accesses=PartnerAccessService(self.db).list_for_user(user.id),
        )
