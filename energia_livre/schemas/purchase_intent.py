from pydantic import BaseModel, EmailStr, StrictBool, model_validator
from datetime import datetime
from typing import Optional

from energia_livre.schemas.comercializadora import ComercializadoraSummary
from energia_livre.schemas.user import DocumentType, normalize_document


class PurchaseIntentCreate(BaseModel):
    comercializadora_id: str
    affiliate_comercializadora_id: Optional[str] = None
    name: str
    email: EmailStr
    phone: str
    company: Optional[str] = None
    document_type: DocumentType
    document_number: str
    bill_value: str
    consumption_type: str
    additional_info: Optional[str] = None
    invoice_file_path: Optional[str] = None

    @model_validator(mode="after")
    def check_document(self) -> "PurchaseIntentCreate":
        self.document_number = normalize_document(self.document_type, self.document_number)
        return self


class PurchaseIntentResponse(BaseModel):
    id: str
    user_id: str
    comercializadora_id: str
    affiliate_comercializadora_id: Optional[str] = None
    name: str
    email: str
    phone: str
    company: Optional[str] = None
    document_type: str
    document_number: str
    bill_value: str
    consumption_type: str
    additional_info: Optional[str] = None
    invoice_file_path: Optional[str] = None
    status: str
    user_received_response: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PurchaseIntentWithComercializadora(PurchaseIntentResponse):
    comercializadora: Optional[ComercializadoraSummary] = None


class ResponseStatusUpdate(BaseModel):
    user_received_response: StrictBool
