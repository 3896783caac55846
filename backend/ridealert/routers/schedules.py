# backend/ridealert/routers/schedules.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ridealert.core.security import get_current_user
from ridealert.db.database import get_db
from ridealert.schemas.schedule import (
    AuthUser,
    MessageOut,
    ScheduleFields,
    ScheduleId,
    ScheduleOut,
    SeedOut,
    TimeCreate,
    TimeOut,
    TimeUpdate,
)
from ridealert.services.schedule_service import ScheduleService

router = APIRouter(prefix="/schedules", tags=["Ride Schedules"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


# Seed endpoint to insert example data; the only route without auth
@router.post("/seed", response_model=SeedOut)
def seed(service: ScheduleService = Depends(get_schedule_service)):
    result = service.seed()
    return SeedOut(
        ride=ScheduleOut.model_validate(result["ride"]),
        time=TimeOut.model_validate(result["time"]),
    )


# CRUD for ride_schedule

@router.get("", response_model=List[ScheduleOut])
def list_schedules(
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return [ScheduleOut.model_validate(row) for row in service.list_schedules(user.id)]


@router.post("", response_model=ScheduleId)
def create_schedule(
    payload: ScheduleFields,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return ScheduleId(id=service.create_schedule(user.id, payload))


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(
    schedule_id: int,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return ScheduleOut.model_validate(service.get_schedule(user.id, schedule_id))


@router.put("/{schedule_id}", response_model=ScheduleId)
def update_schedule(
    schedule_id: int,
    payload: ScheduleFields,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return ScheduleId(id=service.update_schedule(user.id, schedule_id, payload))


@router.delete("/{schedule_id}", response_model=MessageOut)
def delete_schedule(
    schedule_id: int,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    service.delete_schedule(user.id, schedule_id)
    return MessageOut(message="Deleted")


# CRUD for rider_schedule_time

@router.get("/{schedule_id}/times", response_model=List[TimeOut])
def list_times(
    schedule_id: int,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return [TimeOut.model_validate(row) for row in service.list_times(user.id, schedule_id)]


@router.post("/{schedule_id}/times", response_model=TimeOut)
def add_time(
    schedule_id: int,
    payload: TimeCreate,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return TimeOut.model_validate(service.add_time(user.id, schedule_id, payload))


@router.put("/{schedule_id}/times/{day}", response_model=TimeOut)
def update_time(
    schedule_id: int,
    day: str,
    payload: TimeUpdate,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    return TimeOut.model_validate(service.update_time(user.id, schedule_id, day, payload))


@router.delete("/{schedule_id}/times/{day}", response_model=MessageOut)
def delete_time(
    schedule_id: int,
    day: str,
    user: AuthUser = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service)
):
    service.delete_time(user.id, schedule_id, day)
    return MessageOut(message="Deleted")
