from .tables import (
    Base,
    Booking,
    Business,
    ExceptionDate,
    ScheduleGuard,
    Service,
    WeeklyScheduleEntry,
)

__all__ = [
    "Base",
    "Booking",
    "Business",
    "ExceptionDate",
    "ScheduleGuard",
    "Service",
    "WeeklyScheduleEntry",
]
