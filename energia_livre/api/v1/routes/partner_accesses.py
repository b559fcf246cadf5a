"""
Acessos de usuários a comercializadoras parceiras.
Os caminhos são os mesmos que o frontend já usa, por isso o router não tem prefixo.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user
from energia_livre.db.session import get_db
from energia_livre.models.user import User
from energia_livre.schemas.partner_access import (
    PartnerAccessRegister,
    PartnerAccessResponse,
    PartnerAccessStatusUpdate,
    SyncPartnerAccessesRequest,
    SyncPartnerAccessesResponse,
)
from energia_livre.services.partner_access_service import PartnerAccessService, strip_access_suffix

router = APIRouter(tags=["partner-accesses"])


@router.post("/partner-accesses/register", response_model=PartnerAccessResponse)
def register_partner_access(
    body: PartnerAccessRegister,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PartnerAccessService(db).register_access(current_user.id, body.comercializadora_id)


@router.get("/user-partner-accesses", response_model=List[PartnerAccessResponse])
def list_user_partner_accesses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PartnerAccessService(db).list_for_user(current_user.id)


@router.patch("/user-partner-access-status", response_model=PartnerAccessResponse)
def update_partner_access_status(
    body: PartnerAccessStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Sem access_id, o comercializadora_id enviado (com sufixo, se houver) identifica o acesso."""
    return PartnerAccessService(db).set_response_received(
        current_user.id,
        strip_access_suffix(body.comercializadora_id),
        body.access_id or body.comercializadora_id,
        body.received_response,
    )


@router.post("/sync-partner-accesses", response_model=SyncPartnerAccessesResponse)
def sync_partner_accesses(
    body: SyncPartnerAccessesRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PartnerAccessService(db).sync_local_accesses(current_user.id, body.accesses)
