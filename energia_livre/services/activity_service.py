"""
Relatórios de movimentação: semana corrente, acompanhamento de solicitações e afiliados.
"""
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from energia_livre.repositories.partner_access_repository import PartnerAccessRepository
from energia_livre.repositories.purchase_intent_repository import PurchaseIntentRepository
from energia_livre.schemas.activity import (
    AccessData,
    PartnerAccessActivity,
    PurchaseIntentActivity,
    SolicitationTrackingItem,
)
from energia_livre.schemas.affiliate import AffiliateTrackingItem
from energia_livre.schemas.comercializadora import ComercializadoraSummary
from energia_livre.utils.dates import storage_bounds, week_bounds

ActivityItem = Union[PartnerAccessActivity, PurchaseIntentActivity]


def _summary(comercializadora) -> Optional[ComercializadoraSummary]:
    if comercializadora is None:
        return None
    return ComercializadoraSummary.model_validate(comercializadora)


def _sort_key(value: Optional[datetime]) -> float:
    # Sem data vai para o fim da lista ordenada de forma decrescente
    return value.timestamp() if value is not None else float("-inf")


class ActivityService:
    def __init__(self, db: Session):
        self.access_repo = PartnerAccessRepository(db)
        self.intent_repo = PurchaseIntentRepository(db)

    def weekly_activity(
        self,
        now: Optional[datetime] = None,
        comercializadora_id: Optional[str] = None,
    ) -> List[ActivityItem]:
        """
        Acessos (por last_access) e intenções (por created_at) da semana de `now`,
        de domingo 00:00 até o domingo seguinte (exclusivo), mais recentes primeiro.
        """
        start, end = storage_bounds(week_bounds(now))
        activities: List[ActivityItem] = []

        for access in self.access_repo.list_last_access_between(start, end, comercializadora_id):
            activities.append(
                PartnerAccessActivity(
                    occurred_at=access.last_access,
                    user_name=access.user.name if access.user else None,
                    user_email=access.user.email if access.user else None,
                    comercializadora_id=access.comercializadora_id,
                    comercializadora_name=access.comercializadora.company_name if access.comercializadora else None,
                    access_id=access.access_id,
                )
            )

        for intent in self.intent_repo.list_created_between(start, end, comercializadora_id):
            activities.append(
                PurchaseIntentActivity(
                    occurred_at=intent.created_at,
                    user_name=intent.name,
                    user_email=intent.email,
                    comercializadora_id=intent.comercializadora_id,
                    comercializadora_name=intent.comercializadora.company_name if intent.comercializadora else None,
                    details=f"R$ {intent.bill_value}",
                    intent_id=intent.id,
                    bill_value=intent.bill_value,
                )
            )

        # sorted é estável: empates mantêm a ordem de coleta
        return sorted(activities, key=lambda item: _sort_key(item.occurred_at), reverse=True)

    def solicitations_tracking(self) -> List[SolicitationTrackingItem]:
        proposal_counts = self.intent_repo.proposal_counts()
        items: List[SolicitationTrackingItem] = []

        for intent in self.intent_repo.list_with_comercializadora():
            items.append(
                SolicitationTrackingItem(
                    type="purchase_intent",
                    id=intent.id,
                    user_name=intent.name,
                    user_email=intent.email,
                    company=intent.company,
                    bill_value=intent.bill_value,
                    intent_status=intent.status,
                    user_received_response=intent.user_received_response,
                    occurred_at=intent.created_at,
                    comercializadora_id=intent.comercializadora_id,
                    comercializadora=_summary(intent.comercializadora),
                    proposal_count=proposal_counts.get(intent.id, 0),
                )
            )

        for access in self.access_repo.list_with_relations():
            items.append(
                SolicitationTrackingItem(
                    type="partner_access",
                    id=access.id,
                    user_name=access.user.name if access.user else None,
                    user_email=access.user.email if access.user else None,
                    intent_status="active",
                    user_received_response=access.received_response,
                    occurred_at=access.last_access,
                    comercializadora_id=access.comercializadora_id,
                    comercializadora=_summary(access.comercializadora),
                    # access_id de acesso criado junto com intenção é o próprio id da intenção
                    proposal_count=proposal_counts.get(access.access_id, 0),
                    access_data=AccessData(
                        first_access=access.first_access,
                        last_access=access.last_access,
                        local_access_id=access.access_id,
                    ),
                )
            )

        return sorted(items, key=lambda item: _sort_key(item.occurred_at), reverse=True)

    def affiliate_tracking(self) -> List[AffiliateTrackingItem]:
        proposal_counts = self.intent_repo.proposal_counts()
        return [
            AffiliateTrackingItem(
                intent_id=intent.id,
                user_name=intent.name,
                user_email=intent.email,
                bill_value=intent.bill_value,
                intent_status=intent.status,
                user_received_response=intent.user_received_response,
                intent_created_at=intent.created_at,
                target_comercializadora=intent.comercializadora.company_name if intent.comercializadora else None,
                affiliate_comercializadora_id=intent.affiliate_comercializadora_id,
                proposal_count=proposal_counts.get(intent.id, 0),
            )
            for intent in self.intent_repo.list_with_affiliate()
        ]
