# ============================================================================
# FILE: app/api/v1/public/vendors.py
# Public vendor catalogue endpoints
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.config.database import get_db
from app.core.exceptions import DomainError
from app.schemas.worker_schedule import WorkerSummary
from app.services.worker.worker_service import WorkerService

router = APIRouter(prefix="/vendors", tags=["public-vendors"])


@router.get("/{vendor_id}/services/{service_id}/workers", response_model=List[WorkerSummary])
def list_service_workers(
        vendor_id: UUID,
        service_id: UUID,
        db: Session = Depends(get_db)
):
    """Workers who can perform the service, ordered by name."""
    try:
        return WorkerService.list_workers_for_service(db, vendor_id, service_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
