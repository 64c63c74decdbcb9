import logging
from typing import Any, Dict, List, Optional, Tuple
from schedule_viewer.models.group import Group
from schedule_viewer.models.placement import GridLayout, PlacementCell
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.models.schedule_view import ScheduleView
from schedule_viewer.services.presenter import (
    format_counters,
    format_group_options,
    format_selection,
    render_grid,
    render_list,
)

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _whole_number(value: Any, key: str) -> int:
    """Reads an integer field; fractional numbers and booleans are malformed"""
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{key} must be a whole number, got {value!r}")
        return int(value)
    return int(value)


def _flag(value: Any) -> bool:
    # JSON booleans, plus the string forms some backends send
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return False


def parse_schedule_entry(data: Dict[str, Any]) -> Optional[ScheduleEntry]:
    """
    Converts one backend schedule entry into a ScheduleEntry.

    Args:
        data: Dictionary with the entry in backend format

    Expected format:
    {
        "id": "a-17", "groupId": "g1", "groupName": "1A",
        "teacherId": "t3", "teacherName": "Anna Novak",
        "courseName": "Mathematics", "roomName": "R101",
        "dayOfWeek": 1, "startHour": 9, "lengthHours": 2, "pinned": false
    }

    Older backends send only names; the name then doubles as the id.

    Returns:
        ScheduleEntry, or None when the record is malformed
    """
    try:
        group_id = _optional_str(data.get("groupId")) or _optional_str(data.get("groupName"))
        group_name = _optional_str(data.get("groupName")) or group_id
        course_name = _optional_str(data.get("courseName"))
        if not group_id or not course_name:
            raise ValueError("missing group or course")

        teacher_name = _optional_str(data.get("teacherName"))
        teacher_id = _optional_str(data.get("teacherId")) or teacher_name

        return ScheduleEntry(
            id=_optional_str(data.get("id")),
            group_id=group_id,
            group_name=group_name,
            course_name=course_name,
            day_of_week=_whole_number(data["dayOfWeek"], "dayOfWeek"),
            start_hour=_whole_number(data["startHour"], "startHour"),
            length_hours=_whole_number(data["lengthHours"], "lengthHours"),
            teacher_id=teacher_id,
            teacher_name=teacher_name,
            room_name=_optional_str(data.get("roomName")),
            pinned=_flag(data.get("pinned")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Skipping malformed schedule entry {data!r}: {e}")
        return None


def parse_schedule_view(data: Dict[str, Any]) -> ScheduleView:
    """
    Converts the backend schedule view into a ScheduleView.

    Malformed entries are skipped so one bad record does not blank the
    whole view. Missing counters default to the number of entries received.
    """
    entries = []
    for item in data.get("entries") or []:
        entry = parse_schedule_entry(item)
        if entry is not None:
            entries.append(entry)

    received = len(data.get("entries") or [])
    return ScheduleView(
        entries=entries,
        total_assignments=_counter(data, "totalAssignments", received),
        assigned_count=_counter(data, "assignedCount", received),
        unassigned_count=_counter(data, "unassignedCount", 0),
    )


def _counter(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid counter {key}={value!r}, using {default}")
        return default


def parse_groups(data: List[Dict[str, Any]]) -> List[Group]:
    """Converts the backend group catalog, skipping records without id"""
    groups = []
    for item in data or []:
        group_id = _optional_str(item.get("id")) if isinstance(item, dict) else None
        if not group_id:
            logger.warning(f"Skipping malformed group {item!r}")
            continue
        groups.append(Group(
            id=group_id,
            name=_optional_str(item.get("name")) or group_id,
            preferred_room_name=_optional_str(item.get("preferredRoomName")),
        ))
    return groups


def entry_to_dict(entry: ScheduleEntry) -> Dict[str, Any]:
    """Converts a ScheduleEntry back to the backend (camelCase) format"""
    return {
        "id": entry.id,
        "groupId": entry.group_id,
        "groupName": entry.group_name,
        "teacherId": entry.teacher_id,
        "teacherName": entry.teacher_name,
        "courseName": entry.course_name,
        "roomName": entry.room_name,
        "dayOfWeek": entry.day_of_week,
        "startHour": entry.start_hour,
        "lengthHours": entry.length_hours,
        "pinned": entry.pinned,
    }


def cell_to_dict(cell: PlacementCell) -> Dict[str, Any]:
    return {
        "day": cell.day,
        "hour": cell.hour,
        "state": cell.state,
        "blocks": [
            {"span": block.span, "entry": entry_to_dict(block.entry)}
            for block in cell.starts
        ],
    }


def layout_to_dict(layout: GridLayout) -> Dict[str, Any]:
    """
    Converts a GridLayout to a JSON-serializable structure.

    Rows follow the visible hours, each row holds one cell per visible day.
    """
    return {
        "days": list(layout.days),
        "hours": list(layout.hours),
        "rows": [
            {"hour": hour, "cells": [cell_to_dict(cell) for cell in cells]}
            for hour, cells in layout.rows()
        ],
        "placed_count": len(layout.placed),
        "skipped_count": len(layout.skipped),
    }


def teachers_to_list(teachers: List[Tuple[str, str]]) -> List[Dict[str, str]]:
    return [{"id": teacher_id, "name": name} for teacher_id, name in teachers]


def show_timetable(view: ScheduleView, layout: GridLayout, entries: List[ScheduleEntry],
                   groups: Optional[List[Group]] = None, selected_group_id: str = "",
                   group_name: Optional[str] = None, teacher_name: Optional[str] = None):
    """
    Displays the schedule on the console: group choices, selection,
    counters, grid and list view.

    Args:
        view: Schedule view the counters come from
        layout: Grid layout of the filtered entries
        entries: Filtered entries in list order
        groups: Group catalog offered as filter choices
        selected_group_id: Group currently selected, "" for all
        group_name: Display name of the selected group
        teacher_name: Display name of the selected teacher
    """
    if groups:
        print("Groups:")
        for line in format_group_options(groups, selected_group_id):
            print(line)
        print()
    print(format_selection(group_name, teacher_name))
    print(format_counters(view))
    print()
    print(render_grid(layout))
    print()
    print(render_list(entries))
