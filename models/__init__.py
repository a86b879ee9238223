# models/__init__.py
from .pending_record import PendingRecord, ScheduleEntry

__all__ = [
    "PendingRecord",
    "ScheduleEntry",
]
