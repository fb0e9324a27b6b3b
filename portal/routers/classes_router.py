# /portal/routers/classes_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from ..core.deps import require_admin
from ..models import admin_model
from ..models.identity_model import Identity
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[admin_model.SchoolClass], summary="Get All Classes with Student Counts")
def get_all_classes(admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    return class_service.get_all_classes_with_summary(db)

@router.post("", response_model=admin_model.SchoolClass, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(
    class_create: admin_model.SchoolClassCreate,
    admin: Identity = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return class_service.create_class(class_create, admin, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.put("/{class_id}", response_model=admin_model.SchoolClass, summary="Rename a Class")
def update_class_details(
    class_id: str,
    class_update: admin_model.SchoolClassCreate,
    admin: Identity = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated_class = class_service.update_class(class_id, class_update, admin, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated_class is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return updated_class

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(class_id: str, admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    if not class_service.delete_class_by_id(class_id, admin, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{class_id}/export", summary="Export Class Roster as CSV", response_class=StreamingResponse)
def export_class_roster_csv(class_id: str, admin: Identity = Depends(require_admin), db: DatabaseService = Depends(get_db_service)):
    try:
        csv_string = class_service.export_roster_as_csv(class_id, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    class_name = db.get_class_by_id(class_id).name
    file_name = f"roster_{class_name.replace(' ', '_').lower()}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})
