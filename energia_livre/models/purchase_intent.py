from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from energia_livre.db.base import Base, new_id

INTENT_STATUSES = ("active", "closed", "cancelled")


class PurchaseIntent(Base):
    __tablename__ = "purchase_intents"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    comercializadora_id = Column(String(36), ForeignKey("comercializadoras.id"), nullable=False, index=True)
    # Comercializadora que recebe crédito pelo link de afiliado
    affiliate_comercializadora_id = Column(String(36), ForeignKey("comercializadoras.id"), nullable=True, index=True)

    # Dados do solicitante
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    company = Column(String, nullable=True)
    document_type = Column(String(8), nullable=False)  # cpf, cnpj
    document_number = Column(String(14), nullable=False)

    # Dados da conta de energia
    bill_value = Column(String, nullable=False)  # faixa, ex.: "5000-8000"
    consumption_type = Column(String, nullable=False)
    additional_info = Column(Text, nullable=True)
    invoice_file_path = Column(String, nullable=True)

    status = Column(String(20), nullable=False, default="active", index=True)
    user_received_response = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    user = relationship("User", back_populates="purchase_intents")
    comercializadora = relationship(
        "Comercializadora",
        back_populates="purchase_intents",
        foreign_keys=[comercializadora_id],
    )
    affiliate_comercializadora = relationship("Comercializadora", foreign_keys=[affiliate_comercializadora_id])
    proposals = relationship("Proposal", back_populates="intent")

    __table_args__ = (
        Index("idx_purchase_intents_comercializadora_created", "comercializadora_id", "created_at"),
    )
