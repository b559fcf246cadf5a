from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Literal, Optional


class ProposalCreate(BaseModel):
    intent_id: str
    discount: int = Field(..., ge=0, le=100, description="Desconto em %")
    contract_term: int = Field(..., gt=0, description="Prazo do contrato em meses")
    details: str
    start_date: datetime
    contact_email: EmailStr


class ProposalUpdate(BaseModel):
    discount: Optional[int] = Field(None, ge=0, le=100)
    contract_term: Optional[int] = Field(None, gt=0)
    details: Optional[str] = None
    start_date: Optional[datetime] = None
    contact_email: Optional[EmailStr] = None
    status: Optional[Literal["pending", "accepted", "rejected"]] = None


class ProposalResponse(BaseModel):
    id: str
    intent_id: str
    comercializadora_id: str
    discount: int
    contract_term: int
    details: str
    start_date: datetime
    contact_email: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
