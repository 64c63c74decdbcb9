"""Tests for display formatting of cells, list rows and whole grids."""

from schedule_viewer.models.group import Group
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.models.schedule_view import ScheduleView
from schedule_viewer.services.grid_layout import layout_grid
from schedule_viewer.services.presenter import (
    COVERED_MARK,
    day_name,
    format_cell,
    format_counters,
    format_group_option,
    format_group_options,
    format_selection,
    format_list_row,
    render_grid,
    render_list,
)


def make_entry(**overrides):
    values = dict(
        group_id="g1", group_name="1A", course_name="Math",
        day_of_week=1, start_hour=9, length_hours=2,
        teacher_id="t1", teacher_name="Anna Novak", room_name="R101",
    )
    values.update(overrides)
    return ScheduleEntry(**values)


def test_day_names():
    assert day_name(1) == "Monday"
    assert day_name(5) == "Friday"
    assert day_name(7) == "Day 7"


def test_start_cell_lists_blocks():
    layout = layout_grid([make_entry(), make_entry(group_name="1B", length_hours=1, pinned=True)])
    lines = format_cell(layout.cell(1, 9))

    assert lines == [
        "Math / 1A / Anna Novak / R101 (2h)",
        "Math / 1B / Anna Novak / R101 [PINNED]",
    ]


def test_covered_and_empty_cells():
    layout = layout_grid([make_entry()])
    assert format_cell(layout.cell(1, 10)) == [COVERED_MARK]
    assert format_cell(layout.cell(1, 11)) == []


def test_unassigned_teacher_and_room():
    layout = layout_grid([make_entry(teacher_id=None, teacher_name=None, room_name=None, length_hours=1)])
    assert format_cell(layout.cell(1, 9)) == ["Math / 1A / - / -"]


def test_list_row():
    row = format_list_row(make_entry(pinned=True))
    assert row == ["Monday", "9:00 - 11:00 (2h)", "Math", "1A", "Anna Novak", "R101", "PINNED"]


def test_counters():
    view = ScheduleView(entries=[], total_assignments=12, assigned_count=10, unassigned_count=2)
    assert format_counters(view) == "Total: 12 | Assigned: 10 | Unassigned: 2"


def test_group_option():
    assert format_group_option(Group(id="g1", name="1A", preferred_room_name="R101")) == "1A (R101)"
    assert format_group_option(Group(id="g2", name="1B")) == "1B"


def test_render_grid_has_one_row_per_hour():
    layout = layout_grid([make_entry()])
    text = render_grid(layout)
    lines = text.splitlines()

    assert lines[0].startswith("Hour")
    assert "Monday" in lines[0] and "Friday" in lines[0]
    assert len(lines) == 1 + len(layout.hours)
    assert lines[3].startswith("9:00") and "Math / 1A" in lines[3]
    assert COVERED_MARK in lines[4]


def test_render_grid_grows_for_stacked_blocks():
    layout = layout_grid([make_entry(length_hours=1), make_entry(group_name="1B", length_hours=1)])
    assert len(render_grid(layout).splitlines()) == 1 + len(layout.hours) + 1


def test_render_list():
    text = render_list([make_entry(), make_entry(day_of_week=2, course_name="Art")])
    assert text.splitlines()[1].startswith("Tuesday | 9:00 - 11:00 (2h) | Art")


def test_group_options_mark_selection():
    groups = [Group(id="g1", name="1A", preferred_room_name="R101"), Group(id="g2", name="1B")]
    assert format_group_options(groups, "g2") == ["  1A (R101)", "* 1B"]
    assert format_group_options(groups) == ["  1A (R101)", "  1B"]


def test_selection_line():
    assert format_selection(None, None) == "Group: All | Teacher: All"
    assert format_selection("1A", "Anna Novak") == "Group: 1A | Teacher: Anna Novak"
