from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from energia_livre.db.base import Base, new_id


class UserPartnerAccess(Base):
    """Sessão de contato de um usuário com uma comercializadora, consolidada por (user, comercializadora, access_id)."""

    __tablename__ = "user_partner_accesses"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    comercializadora_id = Column(String(36), ForeignKey("comercializadoras.id", ondelete="CASCADE"), nullable=False, index=True)
    access_id = Column(String, nullable=False, index=True)  # id gerado no cliente ou id da intenção
    first_access = Column(DateTime(timezone=True), nullable=False)
    last_access = Column(DateTime(timezone=True), nullable=False, index=True)
    received_response = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="partner_accesses")
    comercializadora = relationship("Comercializadora")

    __table_args__ = (
        UniqueConstraint("user_id", "comercializadora_id", "access_id", name="uq_user_partner_access_key"),
        Index("idx_partner_access_user_last", "user_id", "last_access"),
    )
