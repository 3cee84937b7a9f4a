# backend/ritto/services/slots/__init__.py
"""
Slots module.

Grid:      weekly windows x exception dates, expanded per interval
           (optionally cached in Redis hashes, see redis_store)
Capacity:  consumed seats per slot, read from the ledger on every call

Leaf modules only are re-exported here; generator and occupancy depend on
the schedule/ledger services and are imported from their own modules.
"""

from .config import ALLOWED_INTERVALS, WEEKDAYS, SlotConfig, get_slot_config, weekday_name
from .timegrid import add_minutes, format_hhmm, overlaps, parse_hhmm
from .types import SlotAvailability, SlotCandidate

__all__ = [
    "ALLOWED_INTERVALS",
    "WEEKDAYS",
    "SlotConfig",
    "get_slot_config",
    "weekday_name",
    "add_minutes",
    "format_hhmm",
    "overlaps",
    "parse_hhmm",
    "SlotAvailability",
    "SlotCandidate",
]
