from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import require_role
from energia_livre.db.session import get_db
from energia_livre.models.user import ROLE_ADMIN, ROLE_COMERCIALIZADORA, User
from energia_livre.schemas.affiliate import AffiliateCodeResponse, AffiliateResolveResponse, AffiliateStatsResponse
from energia_livre.services.affiliate_service import AffiliateService

router = APIRouter(tags=["affiliate"])


@router.get("/code/{comercializadora_id}", response_model=AffiliateCodeResponse)
def get_affiliate_code(
    comercializadora_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_COMERCIALIZADORA, ROLE_ADMIN)),
):
    return AffiliateService(db).get_code(current_user, comercializadora_id)


@router.get("/resolve/{code}", response_model=AffiliateResolveResponse)
def resolve_affiliate_code(code: str, db: Session = Depends(get_db)):
    """Público: usado pela página de intenção quando o link traz ?ref=."""
    return AffiliateService(db).resolve(code)


@router.get("/stats/{comercializadora_id}", response_model=AffiliateStatsResponse)
def get_affiliate_stats(
    comercializadora_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_COMERCIALIZADORA, ROLE_ADMIN)),
):
    return AffiliateService(db).stats(current_user, comercializadora_id)
