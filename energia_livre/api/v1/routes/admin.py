from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import require_role
from energia_livre.db.session import get_db
from energia_livre.models.user import ROLE_ADMIN, User
from energia_livre.schemas.activity import Activity, SolicitationTrackingItem
from energia_livre.schemas.admin import AdminStats, DatabaseInfo, DataExport, DataImport, ImportResult, ProductionSync
from energia_livre.schemas.affiliate import AffiliateTrackingItem
from energia_livre.services.activity_service import ActivityService
from energia_livre.services.admin_service import AdminService

router = APIRouter(tags=["admin"])


@router.get("/stats", response_model=AdminStats)
def admin_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return AdminService(db).stats()


@router.get("/solicitations-tracking", response_model=List[SolicitationTrackingItem])
def solicitations_tracking(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ActivityService(db).solicitations_tracking()


@router.get("/affiliate-tracking", response_model=List[AffiliateTrackingItem])
def affiliate_tracking(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ActivityService(db).affiliate_tracking()


@router.get("/weekly-activity", response_model=List[Activity])
def weekly_activity(
    comercializadora_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return ActivityService(db).weekly_activity(comercializadora_id=comercializadora_id)


@router.get("/database-info", response_model=DatabaseInfo)
def database_info(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return AdminService(db).database_info()


@router.get("/export-data", response_model=DataExport)
def export_data(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return AdminService(db).export_data()


@router.post("/import-data", response_model=ImportResult)
def import_data(
    data: DataImport,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return AdminService(db).import_data(data)


@router.post("/sync-from-production", response_model=ImportResult)
def sync_from_production(
    data: ProductionSync,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Mesmo import, mas exige o dump completo de produção (chave "users" obrigatória)."""
    return AdminService(db).import_data(data)
