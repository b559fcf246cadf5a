from pydantic import BaseModel, EmailStr, field_validator, model_validator
from datetime import datetime
from typing import Literal, Optional

from energia_livre.utils.documents import only_digits, validate_document

DocumentType = Literal["cpf", "cnpj"]


def normalize_document(document_type: Optional[str], document_number: Optional[str]) -> Optional[str]:
    """Valida CPF/CNPJ e devolve apenas os dígitos. Levanta ValueError se inválido."""
    if not document_number:
        return None
    if not document_type:
        raise ValueError("Tipo de documento é obrigatório quando o número é informado")
    if not validate_document(document_number, document_type):
        raise ValueError(f"{document_type.upper()} inválido")
    return only_digits(document_number)


class UserBase(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = None


class UserCreate(UserBase):
    password: str
    # Cadastro público não cria administradores
    role: Literal["user", "comercializadora"] = "user"

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("A senha deve ter pelo menos 6 caracteres")
        return value

    @model_validator(mode="after")
    def check_document(self) -> "UserCreate":
        self.document_number = normalize_document(self.document_type, self.document_number)
        return self


class UserResponse(UserBase):
    id: str
    role: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenWithUser(Token):
    user: UserResponse


class UserUpdate(BaseModel):
    """Atualização feita pelo admin; todos os campos são opcionais."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[Literal["user", "comercializadora", "admin"]] = None
    phone: Optional[str] = None
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = None

    @model_validator(mode="after")
    def check_document(self) -> "UserUpdate":
        if self.document_number:
            self.document_number = normalize_document(self.document_type, self.document_number)
        return self


class MessageResponse(BaseModel):
    message: str
