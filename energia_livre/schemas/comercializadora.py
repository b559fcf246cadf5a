from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime
from typing import Optional

from energia_livre.utils.documents import only_digits, validate_cnpj


def _check_cnpj(value: str) -> str:
    if not validate_cnpj(value):
        raise ValueError("CNPJ inválido")
    return only_digits(value)


class ComercializadoraSummary(BaseModel):
    """Resumo embutido em intenções, acessos e relatórios."""
    id: str
    company_name: str
    email: str

    class Config:
        from_attributes = True


class ComercializadoraBase(BaseModel):
    company_name: str
    cnpj: str
    email: EmailStr
    phone: str
    address: str
    aneel_registration: str
    service_areas: str
    description: Optional[str] = None
    affiliate_link: Optional[str] = None


class ComercializadoraCreate(ComercializadoraBase):
    # Dono da empresa; se omitido, o próprio usuário que cria
    user_id: Optional[str] = None
    is_approved: bool = False

    @field_validator("cnpj")
    @classmethod
    def check_cnpj(cls, value: str) -> str:
        return _check_cnpj(value)


class ComercializadoraUpdate(BaseModel):
    company_name: Optional[str] = None
    cnpj: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    aneel_registration: Optional[str] = None
    service_areas: Optional[str] = None
    description: Optional[str] = None
    affiliate_link: Optional[str] = None
    is_approved: Optional[bool] = None

    @field_validator("cnpj")
    @classmethod
    def check_cnpj(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_cnpj(value)


class ComercializadoraResponse(ComercializadoraBase):
    id: str
    user_id: str
    is_approved: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
