from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AffiliateCodeResponse(BaseModel):
    affiliate_code: str
    short_code: str
    affiliate_link: str
    comercializadora_id: str


class AffiliateResolveResponse(BaseModel):
    comercializadora_id: str
    company_name: str


class AffiliateStatsResponse(BaseModel):
    total_referrals: int
    monthly_referrals: int
    total_commission: int


class AffiliateTrackingItem(BaseModel):
    intent_id: str
    user_name: str
    user_email: str
    bill_value: str
    intent_status: str
    user_received_response: bool
    intent_created_at: Optional[datetime] = None
    target_comercializadora: Optional[str] = None
    affiliate_comercializadora_id: str
    proposal_count: int
