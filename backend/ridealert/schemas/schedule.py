from datetime import datetime, time
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScheduleFields(BaseModel):
    """Body of POST/PUT /schedules; forwarded verbatim to the stored procedures."""

    title: Optional[str] = None
    origin_stop_id: Optional[str] = None
    route_id: Optional[str] = None
    direction_id: Optional[str] = None
    notify_lead_time_min: Optional[int] = None
    # validated by the service so a bad value is a 400, not a 422
    days: Any = None
    depart_time_local: Optional[time] = None


class ScheduleId(BaseModel):
    id: Any


class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: Optional[str] = None
    origin_stop_id: Optional[str] = None
    route_id: Optional[str] = None
    direction_id: Optional[str] = None
    notify_lead_time_min: Optional[int] = None
    created_at: Optional[datetime] = None


class TimeCreate(BaseModel):
    day: str = Field(..., min_length=1)
    depart_time_local: Optional[time] = None


class TimeUpdate(BaseModel):
    depart_time_local: Optional[time] = None


class TimeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    schedule_id: int
    day: str
    depart_time_local: Optional[time] = None


class MessageOut(BaseModel):
    message: str


class SeedOut(BaseModel):
    ride: ScheduleOut
    time: TimeOut


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None


__all__ = [
    "ScheduleFields",
    "ScheduleId",
    "ScheduleOut",
    "TimeCreate",
    "TimeUpdate",
    "TimeOut",
    "MessageOut",
    "SeedOut",
    "AuthUser",
]
