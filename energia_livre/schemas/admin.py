from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List, Optional


class AdminStats(BaseModel):
    total_users: int
    total_comercializadoras: int  # apenas aprovadas
    total_proposals: int


class DatabaseInfo(BaseModel):
    environment: str
    database: str
    schema_name: Optional[str] = None
    tables: Dict[str, int]


# Formatos usados no export/import entre ambientes

class UserDump(BaseModel):
    id: str
    email: str
    name: str
    hashed_password: Optional[str] = None
    role: str = "user"
    phone: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    google_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComercializadoraDump(BaseModel):
    id: str
    user_id: str
    company_name: str
    cnpj: str
    email: str
    phone: str
    address: str
    aneel_registration: str
    service_areas: str
    description: Optional[str] = None
    affiliate_link: Optional[str] = None
    is_approved: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PurchaseIntentDump(BaseModel):
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
    status: str = "active"
    user_received_response: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProposalDump(BaseModel):
    id: str
    intent_id: str
    comercializadora_id: str
    discount: int
    contract_term: int
    details: str
    start_date: datetime
    contact_email: str
    status: str = "pending"
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExportStats(BaseModel):
    total_users: int
    total_comercializadoras: int
    total_purchase_intents: int
    total_proposals: int


class DataExport(BaseModel):
    exported_at: datetime
    environment: str
    users: List[UserDump]
    comercializadoras: List[ComercializadoraDump]
    purchase_intents: List[PurchaseIntentDump]
    proposals: List[ProposalDump]
    stats: ExportStats


class DataImport(BaseModel):
    users: List[UserDump] = Field(default_factory=list)
    comercializadoras: List[ComercializadoraDump] = Field(default_factory=list)
    purchase_intents: List[PurchaseIntentDump] = Field(default_factory=list)
    proposals: List[ProposalDump] = Field(default_factory=list)


class ImportedCounts(BaseModel):
    users: int = 0
    comercializadoras: int = 0
    purchase_intents: int = 0
    proposals: int = 0


class ImportResult(BaseModel):
    success: bool
    message: str
    imported: ImportedCounts
    errors: List[str] = Field(default_factory=list)


class ProductionSync(DataImport):
    # Dump de produção precisa trazer ao menos a lista de usuários
    users: List[UserDump]
