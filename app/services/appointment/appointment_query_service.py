# ============================================================================
# app/services/appointment/appointment_query_service.py
# Pure read logic - no FastAPI dependencies, fully testable
# ============================================================================
from sqlalchemy.orm import Session
from sqlalchemy import desc
from datetime import datetime, date, time, timedelta
from typing import Optional, Dict, Any
from uuid import UUID

from app.models.appointment import Appointment, AppointmentStatus
from app.utils.time_utils import aware, get_zone, to_utc
from app.models.vendor import Vendor


class AppointmentQueryService:
    """Read-side appointment listings for customers and vendors."""

    @staticmethod
    def _serialize_appointment(appt: Appointment) -> Dict[str, Any]:
        return {
            "id": str(appt.id),
            "vendor_id": str(appt.vendor_id),
            "worker_id": str(appt.worker_id) if appt.worker_id else None,
            "worker_name": appt.worker.name if appt.worker else None,
            "service_id": str(appt.service_id),
            "service_name": appt.service.name if appt.service else None,
            "user_id": appt.user_id,
            "start_time": aware(appt.start_time).isoformat(),
            "end_time": aware(appt.end_time).isoformat(),
            "status": appt.status.value,
            "notes": appt.notes,
        }

    @staticmethod
    def list_user_appointments(
            db: Session,
            user_id: str,
            skip: int = 0,
            limit: int = 50
    ) -> Dict[str, Any]:
        """Caller's appointments, most recent first."""
        query = db.query(Appointment).filter(
            Appointment.user_id == user_id
        ).order_by(desc(Appointment.start_time))

        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "user_id": user_id,
            "total_appointments": total,
            "page": {
                "skip": skip,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "appointments": [AppointmentQueryService._serialize_appointment(a) for a in appointments]
        }

    @staticmethod
    def list_vendor_appointments(
            db: Session,
            vendor_id: UUID,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            status: Optional[AppointmentStatus] = None,
            worker_id: Optional[UUID] = None,
            skip: int = 0,
            limit: int = 50
    ) -> Optional[Dict[str, Any]]:
        """Paginated appointments of a vendor. None when the vendor does not exist."""
        vendor = db.get(Vendor, vendor_id)
        if not vendor:
            return None

        # Dates are calendar days in the vendor's zone
        tz = get_zone(vendor.timezone)
        query = db.query(Appointment).filter(Appointment.vendor_id == vendor_id)

        if start_date:
            query = query.filter(
                Appointment.start_time >= to_utc(datetime.combine(start_date, time.min, tzinfo=tz))
            )
        if end_date:
            next_day = datetime.combine(end_date, time.min, tzinfo=tz) + timedelta(days=1)
            query = query.filter(Appointment.start_time < to_utc(next_day))
        if status:
            query = query.filter(Appointment.status == status)
        if worker_id:
            query = query.filter(Appointment.worker_id == worker_id)

        query = query.order_by(Appointment.start_time.asc())
        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "vendor_id": str(vendor_id),
            "total_appointments": total,
            "page": {
                "skip": skip,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "filters": {
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "status": status.value if status else None,
                "worker_id": str(worker_id) if worker_id else None,
            },
            "appointments": [AppointmentQueryService._serialize_appointment(a) for a in appointments]
        }
