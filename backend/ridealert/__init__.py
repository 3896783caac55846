"""RideAlert backend: ride-schedule CRUD and UmoIQ transit proxy."""

__version__ = "1.0.0"
