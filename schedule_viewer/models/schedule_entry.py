from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScheduleEntry:
    """
    Represents one scheduled block in the weekly timetable.

    A block covers one or more contiguous hours on a single day for one
    group. Teacher and room may be missing when the backend has not
    assigned them yet.

    Attributes:
        group_id: Identifier of the student group
        group_name: Display name of the group (e.g., "1A")
        course_name: Display name of the course (e.g., "Mathematics")
        day_of_week: Day number, 1 = Monday .. 5 = Friday
        start_hour: First hour of the block (e.g., 9 for 9:00)
        length_hours: Number of hours the block lasts, at least 1
        teacher_id: Identifier of the teacher, None when unassigned
        teacher_name: Display name of the teacher, None when unassigned
        room_name: Room name, None when unassigned
        pinned: Block is locked against reassignment upstream
        id: Assignment id from the backend, if any
    """
    group_id: str
    group_name: str
    course_name: str
    day_of_week: int
    start_hour: int
    length_hours: int
    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None
    room_name: Optional[str] = None
    pinned: bool = False
    id: Optional[str] = None

    @property
    def end_hour(self) -> int:
        """Hour at which the block ends (exclusive)"""
        return self.start_hour + self.length_hours

    @property
    def has_teacher(self) -> bool:
        return bool(self.teacher_id)
