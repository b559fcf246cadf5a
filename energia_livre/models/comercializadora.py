from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from energia_livre.db.base import Base, new_id


class Comercializadora(Base):
    __tablename__ = "comercializadoras"

    id = Column(String(36), primary_key=True, default=new_id)
    # Um usuário possui no máximo uma comercializadora
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    company_name = Column(String, nullable=False)
    cnpj = Column(String(14), nullable=False, unique=True)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    aneel_registration = Column(String, nullable=False)
    service_areas = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    affiliate_link = Column(String, nullable=True)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="comercializadora")
    proposals = relationship("Proposal", back_populates="comercializadora")
    purchase_intents = relationship(
        "PurchaseIntent",
        back_populates="comercializadora",
        foreign_keys="PurchaseIntent.comercializadora_id",
    )
