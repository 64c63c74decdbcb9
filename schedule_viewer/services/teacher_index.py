from typing import Dict, Iterable, List, Optional, Tuple
from schedule_viewer.models.schedule_entry import ScheduleEntry


def teachers_for_group(entries: Iterable[ScheduleEntry],
                       group_id: Optional[str]) -> List[Tuple[str, str]]:
    """
    Lists the distinct teachers who teach a group.

    Teachers come out in order of first appearance in `entries`, and the
    name seen first is kept. Entries without a teacher are ignored.

    Args:
        entries: Schedule entries in display order
        group_id: Group whose teachers are wanted

    Returns:
        List of (teacher_id, teacher_name); empty when group_id is empty
    """
    if not group_id:
        return []

    teachers: Dict[str, str] = {}
    for entry in entries:
        if entry.group_id != group_id or not entry.has_teacher:
            continue
        if entry.teacher_id not in teachers:
            teachers[entry.teacher_id] = entry.teacher_name or entry.teacher_id

    return list(teachers.items())
