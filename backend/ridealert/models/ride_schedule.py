from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Time, func
from sqlalchemy.orm import relationship

from ridealert.db.database import Base


class AppUser(Base):
    __tablename__ = "app_user"
    __table_args__ = {"extend_existing": True}

    id = Column(String, primary_key=True)
    email = Column(String)
    timezone = Column(String)

    def __repr__(self):
        return f"<AppUser {self.email} ({self.id})>"


class RideSchedule(Base):
    __tablename__ = "ride_schedule"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String)
    origin_stop_id = Column(String)
    route_id = Column(String)
    direction_id = Column(String)
    notify_lead_time_min = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    times = relationship("RiderScheduleTime", back_populates="schedule", passive_deletes=True)

    def __repr__(self):
        return f"<RideSchedule {self.id} {self.title!r} user={self.user_id}>"


class RiderScheduleTime(Base):
    __tablename__ = "rider_schedule_time"
    __table_args__ = {"extend_existing": True}

    schedule_id = Column(Integer, ForeignKey("ride_schedule.id", ondelete="CASCADE"), primary_key=True)
    day = Column(String, primary_key=True)
    depart_time_local = Column(Time)

    schedule = relationship("RideSchedule", back_populates="times")

    def __repr__(self):
        return f"<RiderScheduleTime {self.schedule_id} {self.day} {self.depart_time_local}>"
