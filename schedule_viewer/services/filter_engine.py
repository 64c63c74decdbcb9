from typing import Iterable, List, Optional
from schedule_viewer.models.filter_context import FilterContext
from schedule_viewer.models.schedule_entry import ScheduleEntry


def filter_entries(entries: Iterable[ScheduleEntry],
                   group_id: Optional[str] = "",
                   teacher_id: Optional[str] = "") -> List[ScheduleEntry]:
    """
    Keeps the entries matching the selected group and teacher.

    Args:
        entries: Schedule entries in display order
        group_id: Group to keep, empty for any group
        teacher_id: Teacher to keep, empty for any teacher

    Returns:
        New list with the matching entries, input order preserved.
        A filter that matches nothing gives an empty list.
    """
    filtered = []
    for entry in entries:
        if group_id and entry.group_id != group_id:
            continue
        if teacher_id and entry.teacher_id != teacher_id:
            continue
        filtered.append(entry)
    return filtered


def apply_filters(entries: Iterable[ScheduleEntry], context: FilterContext) -> List[ScheduleEntry]:
    """Filters entries with the selection held by a FilterContext"""
    return filter_entries(entries, context.selected_group_id, context.selected_teacher_id)
