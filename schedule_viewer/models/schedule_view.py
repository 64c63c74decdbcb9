from dataclasses import dataclass, field
from typing import List
from schedule_viewer.models.schedule_entry import ScheduleEntry


@dataclass()
class ScheduleView:
    """
    Schedule snapshot as returned by the backend.

    The counters are computed upstream and are only displayed here, they are
    never recomputed from the entries.

    Attributes:
        entries: Scheduled blocks in backend order
        total_assignments: Number of assignments known to the backend
        assigned_count: Number of assignments placed in a timeslot
        unassigned_count: Number of assignments still waiting for a timeslot
    """
    entries: List[ScheduleEntry] = field(default_factory=list)
    total_assignments: int = 0
    assigned_count: int = 0
    unassigned_count: int = 0

    @classmethod
    def empty(cls) -> "ScheduleView":
        return cls()
