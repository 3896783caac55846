from .ride_schedule import AppUser, RideSchedule, RiderScheduleTime

__all__ = ['AppUser', 'RideSchedule', 'RiderScheduleTime']
