import logging
from contextlib import contextmanager
from datetime import time
from typing import Any, Dict, List

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ridealert.exceptions import BadRequest, NotFound, StorageError
from ridealert.models import AppUser, RideSchedule, RiderScheduleTime
from ridealert.schemas.schedule import ScheduleFields, TimeCreate, TimeUpdate
from ridealert.services.debug_logger import log_debug

logger = logging.getLogger(__name__)

SEED_USER_ID = "3f8c0c1e-1b4a-4c1a-9e6f-001111111111"
SEED_USER_EMAIL = "test@example.com"


class ScheduleService:
    """
    Ride schedules scoped to their owner.

    Every query filters on ``user_id``; another user's schedule is simply not
    found. Creating and updating a schedule with its times goes through the
    data store's stored procedures, whose transactional behaviour is theirs.
    Time-entry mutations lock the owning schedule row for the duration of the
    transaction so the ownership check and the write are atomic.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.error(f"[ScheduleService] {operation} failed: {message}")
            raise StorageError(message, operation=operation) from e
        except Exception:
            self.db.rollback()
            raise

    def call_procedure(self, name: str, params: Dict[str, Any]) -> Any:
        """Invoke a stored procedure with named arguments and return its scalar result."""
        args = ", ".join(f"{key} => :{key}" for key in params)
        return self.db.execute(text(f"SELECT {name}({args})"), params).scalar()

    @staticmethod
    def _procedure_params(fields: ScheduleFields) -> Dict[str, Any]:
        return {
            "p_title": fields.title,
            "p_origin_stop_id": fields.origin_stop_id,
            "p_route_id": fields.route_id,
            "p_direction_id": fields.direction_id,
            "p_notify_lead_time_min": fields.notify_lead_time_min,
            "p_days": fields.days,
            "p_depart_time_local": fields.depart_time_local,
        }

    def _lock_owned_schedule(self, user_id: str, schedule_id: int) -> None:
        stmt = (
            select(RideSchedule.id)
            .where(RideSchedule.id == schedule_id, RideSchedule.user_id == user_id)
            .with_for_update()
        )
        if self.db.execute(stmt).first() is None:
            raise NotFound("Schedule not found")

    # --- ride_schedule ---

    def list_schedules(self, user_id: str) -> List[RideSchedule]:
        with self._storage("list_schedules"):
            rows = self.db.scalars(select(RideSchedule).where(RideSchedule.user_id == user_id)).all()
        log_debug(f"[ScheduleService] Fetched {len(rows)} schedules for user {user_id}")
        return list(rows)

    def create_schedule(self, user_id: str, fields: ScheduleFields) -> Any:
        if not isinstance(fields.days, list) or not fields.days:
            raise BadRequest("days must be a non-empty array")
        params = {"p_user_id": user_id, **self._procedure_params(fields)}
        with self._storage("create_schedule_with_times"):
            schedule_id = self.call_procedure("create_schedule_with_times", params)
            self.db.commit()
        log_debug(f"[ScheduleService] Created schedule {schedule_id} for user {user_id} days={fields.days}")
        return schedule_id

    def get_schedule(self, user_id: str, schedule_id: int) -> RideSchedule:
        with self._storage("get_schedule"):
            row = self.db.scalars(
                select(RideSchedule).where(RideSchedule.id == schedule_id, RideSchedule.user_id == user_id)
            ).first()
        if row is None:
            raise NotFound("Not found")
        return row

    def update_schedule(self, user_id: str, schedule_id: int, fields: ScheduleFields) -> Any:
        params = {"p_user_id": user_id, "p_schedule_id": schedule_id, **self._procedure_params(fields)}
        with self._storage("update_schedule_with_times"):
            result = self.call_procedure("update_schedule_with_times", params)
            self.db.commit()
        return result

    def delete_schedule(self, user_id: str, schedule_id: int) -> int:
        """Delete in a single owner-scoped statement; zero matched rows is not an error."""
        with self._storage("delete_schedule"):
            result = self.db.execute(
                delete(RideSchedule).where(RideSchedule.id == schedule_id, RideSchedule.user_id == user_id)
            )
            self.db.commit()
        return result.rowcount

    # --- rider_schedule_time ---

    def list_times(self, user_id: str, schedule_id: int) -> List[RiderScheduleTime]:
        with self._storage("list_times"):
            owned = self.db.execute(
                select(RideSchedule.id).where(RideSchedule.id == schedule_id, RideSchedule.user_id == user_id)
            ).first()
            if owned is None:
                raise NotFound("Schedule not found")
            rows = self.db.scalars(
                select(RiderScheduleTime).where(RiderScheduleTime.schedule_id == schedule_id)
            ).all()
        return list(rows)

    def add_time(self, user_id: str, schedule_id: int, payload: TimeCreate) -> RiderScheduleTime:
        with self._storage("add_time"):
            self._lock_owned_schedule(user_id, schedule_id)
            entry = RiderScheduleTime(
                schedule_id=schedule_id,
                day=payload.day,
                depart_time_local=payload.depart_time_local,
            )
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
        return entry

    def update_time(self, user_id: str, schedule_id: int, day: str, payload: TimeUpdate) -> RiderScheduleTime:
        with self._storage("update_time"):
            self._lock_owned_schedule(user_id, schedule_id)
            entry = self.db.get(RiderScheduleTime, (schedule_id, day))
            if entry is None:
                raise NotFound("Time not found")
            entry.depart_time_local = payload.depart_time_local
            self.db.commit()
            self.db.refresh(entry)
        return entry

    def delete_time(self, user_id: str, schedule_id: int, day: str) -> int:
        with self._storage("delete_time"):
            self._lock_owned_schedule(user_id, schedule_id)
            result = self.db.execute(
                delete(RiderScheduleTime).where(
                    RiderScheduleTime.schedule_id == schedule_id,
                    RiderScheduleTime.day == day,
                )
            )
            self.db.commit()
        return result.rowcount

    # --- fixtures ---

    def seed(self) -> Dict[str, Any]:
        """Insert one schedule and one time row for the fixed test user."""
        with self._storage("seed"):
            self.db.merge(AppUser(id=SEED_USER_ID, email=SEED_USER_EMAIL))
            ride = RideSchedule(
                user_id=SEED_USER_ID,
                title="Go to Campus",
                origin_stop_id="22273",
                route_id="A",
                direction_id="A_0_var0",
                notify_lead_time_min=10,
            )
            self.db.add(ride)
            self.db.flush()
            entry = RiderScheduleTime(
                schedule_id=ride.id,
                day="Monday",
                depart_time_local=time(8, 0, 0),
            )
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(ride)
            self.db.refresh(entry)
        logger.info(f"Seeded schedule {ride.id} for test user {SEED_USER_ID}")
        return {"ride": ride, "time": entry}
