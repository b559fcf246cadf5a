from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user, require_role
from energia_livre.db.session import get_db
from energia_livre.models.user import ROLE_ADMIN, ROLE_COMERCIALIZADORA, User
from energia_livre.schemas.proposal import ProposalCreate, ProposalResponse, ProposalUpdate
from energia_livre.services.proposal_service import ProposalService

router = APIRouter(tags=["proposals"])


@router.post("", response_model=ProposalResponse, status_code=status.HTTP_201_CREATED)
def create_proposal(
    data: ProposalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_COMERCIALIZADORA)),
):
    return ProposalService(db).create(current_user, data)


@router.get("/intent/{intent_id}", response_model=List[ProposalResponse])
def list_proposals_for_intent(
    intent_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ProposalService(db).list_by_intent(current_user, intent_id)


@router.put("/{proposal_id}", response_model=ProposalResponse)
def update_proposal(
    proposal_id: str,
    data: ProposalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_COMERCIALIZADORA, ROLE_ADMIN)),
):
    return ProposalService(db).update(current_user, proposal_id, data)
