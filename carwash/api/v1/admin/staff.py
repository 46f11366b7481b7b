# carwash/api/v1/admin/staff.py
from datetime import date

from fastapi import APIRouter, Depends

from carwash.api.dependencies import get_staff_service, require_admin
from carwash.schemas.staff import StaffConfigUpdate
from carwash.services.staff.staff_service import StaffService
from carwash.utils.responses import api_response

router = APIRouter(prefix="/admin/staff", dependencies=[Depends(require_admin)])


@router.get("/config")
def get_staff_config(service: StaffService = Depends(get_staff_service)):
    return api_response("Staff configuration retrieved", service.get_staff_config().to_dict())


@router.patch("/config")
def update_staff_config(
        data: StaffConfigUpdate,
        service: StaffService = Depends(get_staff_service),
):
    config = service.update_staff_config(data)
    return api_response("Staff configuration updated", config.to_dict())


@router.get("/availability/{day}")
def get_daily_availability(day: date, service: StaffService = Depends(get_staff_service)):
    return api_response("Daily availability retrieved", service.get_daily_availability(day))


@router.get("/bookings/{day}")
def get_bookings_for_date(day: date, service: StaffService = Depends(get_staff_service)):
    return api_response("Bookings retrieved", service.get_bookings_for_date(day))
