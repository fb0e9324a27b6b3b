# /portal/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from typing import Optional

from fastapi import APIRouter, Depends, Query

# --- Service and Model Imports ---
from ..core.deps import get_current_identity
from ..models.dashboard_model import DashboardSummary, SearchResults
from ..models.identity_model import Identity
from ..services import dashboard_service, search_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Latest announcements, exams of the coming week and the class switcher entries for the home page.",
)
def get_dashboard_summary(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    """
    The "thin" router layer: resolves the caller and delegates to the
    dashboard service, whose result is validated against the response model.
    """
    return dashboard_service.get_summary_data(identity, db, class_filter)


@router.get(
    "/search",
    response_model=SearchResults,
    summary="Global Search",
    description="Case-insensitive search over the exams, announcements, timetables and meetings the caller can see.",
)
def search(
    q: str = Query(..., min_length=1, max_length=200),
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return search_service.search(q, identity, db, class_filter)
