# ============================================================================
# FILE: app/api/v1/dashboard/workers.py
# Worker management: profiles, services and schedules
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from app.config.database import get_db
from app.core.exceptions import DomainError
from app.schemas.worker import WorkerCreate, WorkerResponse, WorkerServicesUpdate, WorkerUpdate
from app.schemas.worker_schedule import WorkerScheduleResponse, WorkerScheduleUpdate
from app.services.worker.worker_service import WorkerService, schedule_to_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendors/{vendor_id}/workers", tags=["dashboard-workers"])


@router.get("", response_model=List[WorkerResponse])
def list_workers(
        vendor_id: UUID,
        db: Session = Depends(get_db)
):
    """All workers of the vendor with the services they perform."""
    return WorkerService.list_workers(db, vendor_id)


@router.post("", response_model=WorkerResponse, status_code=201)
def create_worker(
        vendor_id: UUID,
        payload: WorkerCreate,
        db: Session = Depends(get_db)
):
    """
    Add a worker.

    - **serviceIds**: services the worker performs; every active service when omitted
    - **userId**: optional account, at most one worker per vendor
    """
    try:
        return WorkerService.create_worker(db, vendor_id, payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating worker: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create worker")


@router.get("/{worker_id}", response_model=WorkerResponse)
def get_worker(
        vendor_id: UUID,
        worker_id: UUID,
        db: Session = Depends(get_db)
):
    try:
        return WorkerService.get_worker(db, vendor_id, worker_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{worker_id}", response_model=WorkerResponse)
def update_worker(
        vendor_id: UUID,
        worker_id: UUID,
        payload: WorkerUpdate,
        db: Session = Depends(get_db)
):
    """Update worker details. An empty body is rejected."""
    try:
        return WorkerService.update_worker(db, vendor_id, worker_id, payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating worker {worker_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update worker")


@router.delete("/{worker_id}")
def delete_worker(
        vendor_id: UUID,
        worker_id: UUID,
        db: Session = Depends(get_db)
):
    try:
        WorkerService.delete_worker(db, vendor_id, worker_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error deleting worker {worker_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete worker")
    return {"success": True, "message": "Worker deleted"}


@router.put("/{worker_id}/services", response_model=WorkerResponse)
def replace_worker_services(
        vendor_id: UUID,
        worker_id: UUID,
        payload: WorkerServicesUpdate,
        db: Session = Depends(get_db)
):
    """Replace the services a worker performs. Every id must be a service of this vendor."""
    try:
        return WorkerService.replace_worker_services(db, vendor_id, worker_id, payload.service_ids)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating services of worker {worker_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update worker services")


@router.get("/{worker_id}/schedule", response_model=WorkerScheduleResponse)
def get_worker_schedule(
        vendor_id: UUID,
        worker_id: UUID,
        db: Session = Depends(get_db)
):
    """Weekly template and date overrides of a worker."""
    try:
        worker = WorkerService.get_worker_schedule(db, vendor_id, worker_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return WorkerScheduleResponse.model_validate(schedule_to_response(worker))


@router.put("/{worker_id}/schedule", response_model=WorkerScheduleResponse)
def replace_worker_schedule(
        vendor_id: UUID,
        worker_id: UUID,
        payload: WorkerScheduleUpdate,
        db: Session = Depends(get_db)
):
    """
    Replace a worker's schedule.

    - **availabilities**: replaces the whole weekly template (0=Sunday)
    - **overrides**: replaces every date override

    A list left out of the body keeps its stored rows.
    """
    try:
        worker = WorkerService.replace_worker_schedule(db, vendor_id, worker_id, payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating schedule of worker {worker_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update schedule")
    return WorkerScheduleResponse.model_validate(schedule_to_response(worker))
