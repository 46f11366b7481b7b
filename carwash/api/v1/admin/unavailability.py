# carwash/api/v1/admin/unavailability.py
"""Staff unavailability (leave, sickness) management"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from carwash.api.dependencies import get_unavailability_service, require_admin
from carwash.core.exceptions import BadRequestError
from carwash.schemas.unavailability import UnavailabilityCreate, UnavailabilityUpdate
from carwash.services.staff.unavailability_service import UnavailabilityService
from carwash.utils.responses import api_response

router = APIRouter(prefix="/admin/unavailability", dependencies=[Depends(require_admin)])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_unavailability(
        data: UnavailabilityCreate,
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    unavailability = service.create(data)
    return api_response("Unavailability created successfully", unavailability.to_dict())


@router.get("")
def list_unavailability(
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    entries = service.list(start_date, end_date)
    return api_response("Unavailability retrieved", [entry.to_dict() for entry in entries])


# Registered before /{unavailability_id} so "dates" is not parsed as an id
@router.get("/dates")
def get_dates_with_unavailability(
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    if not start_date or not end_date:
        raise BadRequestError("startDate and endDate are required")
    dates = service.get_dates_with_unavailability(start_date, end_date)
    return api_response("Dates retrieved", dates)


@router.get("/date/{day}")
def get_unavailability_by_date(
        day: date,
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    entries = service.get_by_date(day)
    return api_response("Unavailability retrieved", [entry.to_dict() for entry in entries])


@router.get("/{unavailability_id}")
def get_unavailability(
        unavailability_id: UUID,
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    return api_response("Unavailability retrieved", service.get_by_id(unavailability_id).to_dict())


@router.patch("/{unavailability_id}")
def update_unavailability(
        unavailability_id: UUID,
        data: UnavailabilityUpdate,
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    unavailability = service.update(unavailability_id, data)
    return api_response("Unavailability updated successfully", unavailability.to_dict())


@router.delete("/{unavailability_id}")
def delete_unavailability(
        unavailability_id: UUID,
        service: UnavailabilityService = Depends(get_unavailability_service),
):
    service.delete(unavailability_id)
    return api_response("Unavailability deleted successfully")
