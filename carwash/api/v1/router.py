"""
API v1 router setup
Customer routes (JWT) and admin routes (JWT + admin role)
"""
from fastapi import APIRouter

from carwash.api.v1 import bookings
from carwash.api.v1.admin import bookings as admin_bookings, notifications, staff, unavailability

api_v1_router = APIRouter()

# ============================================================================
# CUSTOMER ROUTES (JWT authentication required)
# ============================================================================
api_v1_router.include_router(bookings.router)

# ============================================================================
# ADMIN ROUTES (JWT authentication + admin role required)
# ============================================================================
api_v1_router.include_router(admin_bookings.router, tags=["Admin"])
api_v1_router.include_router(staff.router, tags=["Admin"])
api_v1_router.include_router(unavailability.router, tags=["Admin"])
api_v1_router.include_router(notifications.router, tags=["Admin"])


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    return {
        "version": "1.0",
        "authentication": {
            "bookings": "JWT Bearer token required (customer)",
            "admin": "JWT Bearer token with role=admin required"
        }
    }
