from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from energia_livre.db.base import Base, new_id

ROLE_USER = "user"
ROLE_COMERCIALIZADORA = "comercializadora"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_COMERCIALIZADORA, ROLE_ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    hashed_password = Column(String, nullable=True)  # None para contas criadas via Google
    role = Column(String(32), nullable=False, default=ROLE_USER, index=True)
    phone = Column(String, nullable=True)
    document_type = Column(String(8), nullable=True)  # cpf, cnpj
    document_number = Column(String(14), nullable=True)  # apenas dígitos
    google_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    comercializadora = relationship(
        "Comercializadora",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    purchase_intents = relationship("PurchaseIntent", back_populates="user")
    partner_accesses = relationship("UserPartnerAccess", back_populates="user", cascade="all, delete-orphan")
