# /portal/routers/admin_router.py

"""
The admin console API: user accounts, platform statistics and the audit
journal. Every route requires the ADMIN role.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import require_admin
from ..models import admin_model
from ..models.identity_model import Identity, ProfileRecord
from ..services import admin_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


# --- USER ACCOUNT ENDPOINTS (/api/admin/users) ---

@router.get("/users", response_model=List[ProfileRecord], summary="List All User Profiles")
def list_users(admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    return admin_service.list_users(db)


@router.post("/users", response_model=ProfileRecord, status_code=status.HTTP_201_CREATED, summary="Create a User Account")
def create_user(
    payload: admin_model.UserCreate,
    admin: Identity = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return admin_service.create_user(payload, admin, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/users/{user_id}", response_model=ProfileRecord, summary="Update a User's Name, Role or Class")
def update_user(
    user_id: str,
    payload: admin_model.UserUpdate,
    admin: Identity = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = admin_service.update_user(user_id, payload, admin, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User with ID {user_id} not found")
    return updated


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a User Account")
def delete_user(user_id: str, admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    try:
        was_deleted = admin_service.delete_user(user_id, admin, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User with ID {user_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- STATISTICS & JOURNAL ---

@router.get("/stats", response_model=admin_model.AdminStats, summary="Platform Counters")
def get_stats(admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    return admin_service.get_stats(db)


@router.get("/logs", response_model=List[admin_model.AuditLogEntry], summary="Audit Journal (Newest First)")
def get_audit_logs(
    limit: int = Query(default=100, ge=1, le=500),
    admin: Identity = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    return admin_service.get_audit_logs(db, limit)
