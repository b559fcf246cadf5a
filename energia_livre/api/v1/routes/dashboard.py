from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energia_livre.api.v1.dependencies import get_current_user
from energia_livre.db.session import get_db
from energia_livre.models.user import User
from energia_livre.schemas.dashboard import AdminDashboard, ComercializadoraDashboard, UserDashboard
from energia_livre.services.dashboard_service import DashboardService

router = APIRouter(tags=["dashboard"])


@router.get("", response_model=Union[AdminDashboard, ComercializadoraDashboard, UserDashboard])
def get_dashboard(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Painel do perfil logado; o campo "role" indica qual formato veio."""
    return DashboardService(db).for_user(current_user)
