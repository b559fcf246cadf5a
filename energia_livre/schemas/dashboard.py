from pydantic import BaseModel
from typing import List, Literal, Optional

from energia_livre.schemas.activity import Activity
from energia_livre.schemas.admin import AdminStats
from energia_livre.schemas.affiliate import AffiliateStatsResponse
from energia_livre.schemas.comercializadora import ComercializadoraResponse
from energia_livre.schemas.partner_access import PartnerAccessResponse
from energia_livre.schemas.purchase_intent import PurchaseIntentWithComercializadora


class UserDashboard(BaseModel):
    role: Literal["user"] = "user"
    purchase_intents: List[PurchaseIntentWithComercializadora]
    partner_accesses: List[PartnerAccessResponse]


class ComercializadoraDashboard(BaseModel):
    role: Literal["comercializadora"] = "comercializadora"
    # None enquanto o admin não cadastrou a empresa deste usuário
    comercializadora: Optional[ComercializadoraResponse] = None
    weekly_activity: List[Activity] = []
    affiliate_stats: Optional[AffiliateStatsResponse] = None


class AdminDashboard(BaseModel):
    role: Literal["admin"] = "admin"
    stats: AdminStats
    weekly_activity: List[Activity]
