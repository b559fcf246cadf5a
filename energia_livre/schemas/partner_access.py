from pydantic import BaseModel, Field, StrictBool
from datetime import datetime
from typing import List, Optional

from energia_livre.schemas.comercializadora import ComercializadoraSummary


class PartnerAccessRegister(BaseModel):
    comercializadora_id: str
    company_name: Optional[str] = None


class PartnerAccessStatusUpdate(BaseModel):
    comercializadora_id: str
    # Se omitido, o próprio comercializadora_id é usado como access_id
    access_id: Optional[str] = None
    received_response: StrictBool


class PartnerAccessResponse(BaseModel):
    id: str
    user_id: str
    comercializadora_id: str
    access_id: str
    first_access: datetime
    last_access: datetime
    received_response: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    comercializadora: Optional[ComercializadoraSummary] = None

    class Config:
        from_attributes = True


class LocalAccessItem(BaseModel):
    """Acesso guardado no cliente (localStorage) antes de existir no banco."""
    id: Optional[str] = None
    comercializadora_id: Optional[str] = None
    access_id: Optional[str] = None
    first_access: datetime
    last_access: datetime
    received_response: bool = False


class SyncPartnerAccessesRequest(BaseModel):
    accesses: List[LocalAccessItem] = Field(..., description="Acessos do cliente a sincronizar")


class SyncPartnerAccessesResponse(BaseModel):
    message: str
    synced: int
    total: int
