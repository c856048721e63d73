"""
API v1 router setup
Organized into: public (customer facing) and dashboard (vendor management) routes
"""
from fastapi import APIRouter

from app.api.v1.public import availability, appointments, vendors
from app.api.v1.dashboard import (
    appointments as vendor_appointments,
    services,
    vendors as vendor_settings,
    workers,
)

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES
# ============================================================================
api_v1_router.include_router(
    availability.router,
    tags=["Public"]
)

api_v1_router.include_router(
    appointments.router,
    tags=["Public"]
)

api_v1_router.include_router(
    vendors.router,
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES
# ============================================================================
api_v1_router.include_router(
    services.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    workers.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    vendor_settings.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    vendor_appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "routes": {
            "public": "Availability, booking and cancellation (X-User-Id header identifies the customer)",
            "dashboard": "Vendor services, workers, schedules, operating hours and appointment management"
        }
    }
