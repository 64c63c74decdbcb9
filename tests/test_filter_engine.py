"""Tests for group/teacher filtering and the filter context cascade."""

from schedule_viewer.models.filter_context import FilterContext
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.services.filter_engine import apply_filters, filter_entries


def make_entry(group_id, teacher_id=None, course="Math", day=1, start=8, length=1):
    return ScheduleEntry(
        group_id=group_id,
        group_name=group_id.upper(),
        course_name=course,
        day_of_week=day,
        start_hour=start,
        length_hours=length,
        teacher_id=teacher_id,
        teacher_name=teacher_id.upper() if teacher_id else None,
    )


ENTRIES = [
    make_entry("g1", "t1", course="Math"),
    make_entry("g2", "t1", course="Physics"),
    make_entry("g1", "t2", course="Art"),
    make_entry("g1", None, course="Music"),
    make_entry("g2", "t3", course="History"),
    make_entry("g1", "t1", course="Chemistry"),
]


def test_no_filters_returns_all_entries_in_order():
    result = filter_entries(ENTRIES)
    assert result == ENTRIES
    assert result is not ENTRIES


def test_group_filter_keeps_matching_subsequence():
    result = filter_entries(ENTRIES, "g1")
    assert [e.course_name for e in result] == ["Math", "Art", "Music", "Chemistry"]
    assert all(e.group_id == "g1" for e in result)


def test_group_and_teacher_filter():
    result = filter_entries(ENTRIES, "g1", "t1")
    assert [e.course_name for e in result] == ["Math", "Chemistry"]


def test_teacher_filter_alone():
    result = filter_entries(ENTRIES, "", "t1")
    assert [e.course_name for e in result] == ["Math", "Physics", "Chemistry"]


def test_none_means_no_constraint():
    assert filter_entries(ENTRIES, None, None) == ENTRIES


def test_unknown_group_gives_empty_result():
    assert filter_entries(ENTRIES, "g9") == []


def test_teacher_outside_group_gives_empty_result():
    assert filter_entries(ENTRIES, "g1", "t3") == []


def test_filter_is_idempotent():
    once = filter_entries(ENTRIES, "g1", "t1")
    assert filter_entries(once, "g1", "t1") == once


def test_apply_filters_uses_context():
    context = FilterContext().with_group("g2").with_teacher("t3")
    assert [e.course_name for e in apply_filters(ENTRIES, context)] == ["History"]


def test_changing_group_clears_teacher():
    context = FilterContext(selected_group_id="g1", selected_teacher_id="t1")

    for group_id in ("g2", "g1", "", None):
        changed = context.with_group(group_id)
        assert changed.selected_teacher_id == ""
        assert changed.selected_group_id == (group_id or "")


def test_changing_teacher_keeps_group():
    context = FilterContext().with_group("g1").with_teacher("t2")
    assert context.selected_group_id == "g1"
    assert context.selected_teacher_id == "t2"
    assert context.with_teacher(None).selected_group_id == "g1"


def test_context_is_not_mutated_by_transitions():
    context = FilterContext(selected_group_id="g1", selected_teacher_id="t1")
    context.with_group("g2")
    assert context == FilterContext("g1", "t1")
    assert FilterContext().is_empty
    assert not context.is_empty
