from typing import Iterable, List, Optional
from schedule_viewer.models.group import Group
from schedule_viewer.models.placement import GridLayout, PlacedBlock, PlacementCell
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.models.schedule_view import ScheduleView

DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']
COVERED_MARK = '|'
MISSING = '-'


def day_name(day: int) -> str:
    if 1 <= day <= len(DAY_NAMES):
        return DAY_NAMES[day - 1]
    return f'Day {day}'


def hour_label(hour: int) -> str:
    return f'{hour}:00'


def format_block(block: PlacedBlock) -> str:
    """One line describing a block in its start cell"""
    entry = block.entry
    parts = [
        entry.course_name,
        entry.group_name,
        entry.teacher_name or MISSING,
        entry.room_name or MISSING,
    ]
    text = ' / '.join(parts)
    if block.span > 1:
        text += f' ({block.span}h)'
    if entry.pinned:
        text += ' [PINNED]'
    return text


def format_cell(cell: PlacementCell) -> List[str]:
    """
    Display lines for a grid cell.

    Start cells list their blocks stacked, covered cells show the
    continuation mark, empty cells give no lines.
    """
    if cell.is_start:
        return [format_block(block) for block in cell.starts]
    if cell.is_covered:
        return [COVERED_MARK]
    return []


def format_list_row(entry: ScheduleEntry) -> List[str]:
    """Columns of a list-view row: day, time, course, group, teacher, room, pinned"""
    time_range = f'{hour_label(entry.start_hour)} - {hour_label(entry.end_hour)} ({entry.length_hours}h)'
    return [
        day_name(entry.day_of_week),
        time_range,
        entry.course_name,
        entry.group_name,
        entry.teacher_name or MISSING,
        entry.room_name or MISSING,
        'PINNED' if entry.pinned else '',
    ]


def format_counters(view: ScheduleView) -> str:
    return (f'Total: {view.total_assignments} | Assigned: {view.assigned_count} | '
            f'Unassigned: {view.unassigned_count}')


def format_group_option(group: Group) -> str:
    if group.preferred_room_name:
        return f'{group.name} ({group.preferred_room_name})'
    return group.name


def format_group_options(groups: Iterable[Group], selected_group_id: str = '') -> List[str]:
    """Group filter choices, the selected one marked with '*'"""
    return [
        ('* ' if group.id == selected_group_id else '  ') + format_group_option(group)
        for group in groups
    ]


def format_selection(group_name: Optional[str], teacher_name: Optional[str]) -> str:
    return f'Group: {group_name or "All"} | Teacher: {teacher_name or "All"}'


def render_grid(layout: GridLayout, width: int = 28) -> str:
    """
    Renders the layout as a fixed-width text table, one column per day.

    A row with several stacked blocks grows to as many text lines as its
    tallest cell.
    """
    lines = ['{:7s}'.format('Hour') + ''.join('{:{w}s}'.format(day_name(day), w=width) for day in layout.days)]

    for hour, cells in layout.rows():
        cell_lines = [format_cell(cell) for cell in cells]
        height = max([len(c) for c in cell_lines] + [1])
        for i in range(height):
            label = hour_label(hour) if i == 0 else ''
            row = '{:7s}'.format(label)
            for c in cell_lines:
                text = c[i] if i < len(c) else ''
                row += '{:{w}s}'.format(text[:width - 1], w=width)
            lines.append(row.rstrip())

    return '\n'.join(lines)


def render_list(entries: Iterable[ScheduleEntry]) -> str:
    """Renders list-view rows separated by ' | '"""
    return '\n'.join(' | '.join(format_list_row(entry)) for entry in entries)
