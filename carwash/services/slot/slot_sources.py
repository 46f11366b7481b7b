# ============================================================================
# carwash/services/slot/slot_sources.py
# ============================================================================
"""
Where slot start times come from.

The customer picker uses the fixed day-part catalog. The admin daily view
walks the operating hours in steps of the configured service duration.
The two are kept separate; both are "HH:mm" strings.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Tuple

from carwash.models.staff_config import StaffConfig
from carwash.utils.time_slots import TIME_SLOTS, time_to_minutes, minutes_to_time


class SlotSource(ABC):

    @abstractmethod
    def slots(self) -> List[str]:
        """Ordered slot start times"""


class FixedSlotCatalog(SlotSource):
    """Morning / afternoon / evening / night slots offered to customers"""

    def __init__(self, catalog: Mapping[str, Mapping] = TIME_SLOTS):
        self.catalog = catalog

    def day_parts(self) -> Dict[str, Tuple[str, ...]]:
        return {part: tuple(entry["slots"]) for part, entry in self.catalog.items()}

    def slots(self) -> List[str]:
        return [time for part_slots in self.day_parts().values() for time in part_slots]


class OperatingHoursSlotSource(SlotSource):
    """Slots from operating start (inclusive) to operating end (exclusive)"""

    def __init__(self, start_time: str, end_time: str, duration_minutes: int):
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        self.start_time = start_time
        self.end_time = end_time
        self.duration_minutes = duration_minutes

    @classmethod
    def from_config(cls, config: StaffConfig) -> "OperatingHoursSlotSource":
        return cls(
            config.operating_start_time,
            config.operating_end_time,
            config.service_duration_minutes,
        )

    def slots(self) -> List[str]:
        result = []
        current = time_to_minutes(self.start_time)
        end = time_to_minutes(self.end_time)
        while current < end:
            result.append(minutes_to_time(current))
            current += self.duration_minutes
        return result
