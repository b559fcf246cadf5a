from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from energia_livre.models.proposal import Proposal


class ProposalRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, proposal_id: str) -> Optional[Proposal]:
        return self.db.query(Proposal).filter(Proposal.id == proposal_id).first()

    def list_by_intent(self, intent_id: str) -> List[Proposal]:
        return (
            self.db.query(Proposal)
            .filter(Proposal.intent_id == intent_id)
            .order_by(Proposal.created_at.desc())
            .all()
        )

    def list_all(self) -> List[Proposal]:
        return self.db.query(Proposal).all()

    def count(self) -> int:
        return self.db.query(func.count(Proposal.id)).scalar() or 0

    def create(self, proposal: Proposal) -> Proposal:
        self.db.add(proposal)
        self.db.commit()
        self.db.refresh(proposal)
        return proposal

    def update(self, proposal: Proposal) -> Proposal:
        self.db.commit()
        self.db.refresh(proposal)
        return proposal
