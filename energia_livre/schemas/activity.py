from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from energia_livre.schemas.comercializadora import ComercializadoraSummary


class ActivityBase(BaseModel):
    occurred_at: datetime
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    comercializadora_id: Optional[str] = None
    comercializadora_name: Optional[str] = None
    details: str


class PartnerAccessActivity(ActivityBase):
    type: Literal["partner_access"] = "partner_access"
    access_id: str
    details: str = "Acesso a comercializadora"


class PurchaseIntentActivity(ActivityBase):
    type: Literal["purchase_intent"] = "purchase_intent"
    intent_id: str
    bill_value: str


# União discriminada por "type"; todas as variantes ordenam por occurred_at
Activity = Annotated[Union[PartnerAccessActivity, PurchaseIntentActivity], Field(discriminator="type")]


class AccessData(BaseModel):
    first_access: datetime
    last_access: datetime
    local_access_id: str


class SolicitationTrackingItem(BaseModel):
    type: Literal["purchase_intent", "partner_access"]
    id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    company: Optional[str] = None
    bill_value: Optional[str] = None
    intent_status: str
    user_received_response: bool
    occurred_at: Optional[datetime] = None
    comercializadora_id: str
    comercializadora: Optional[ComercializadoraSummary] = None
    proposal_count: int = 0
    access_data: Optional[AccessData] = None
