from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from energia_livre.db.base import Base, new_id

PROPOSAL_STATUSES = ("pending", "accepted", "rejected")


class Proposal(Base):
    __tablename__ = "proposals"

    id = Column(String(36), primary_key=True, default=new_id)
    intent_id = Column(String(36), ForeignKey("purchase_intents.id"), nullable=False, index=True)
    comercializadora_id = Column(String(36), ForeignKey("comercializadoras.id"), nullable=False, index=True)
    discount = Column(Integer, nullable=False)  # percentual
    contract_term = Column(Integer, nullable=False)  # meses
    details = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    contact_email = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    intent = relationship("PurchaseIntent", back_populates="proposals")
    comercializadora = relationship("Comercializadora", back_populates="proposals")
