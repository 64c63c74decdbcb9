from typing import Dict, Iterable, List, Sequence, Tuple
from schedule_viewer.models.placement import GridLayout, PlacedBlock, PlacementCell
from schedule_viewer.models.schedule_entry import ScheduleEntry

DAYS = [1, 2, 3, 4, 5]  # Monday..Friday
HOURS = list(range(7, 15))  # 7:00 .. 14:00 rows


def set_up(days: Sequence[int], hours: Sequence[int]) -> Dict[Tuple[int, int], PlacementCell]:
    """
    Sets up an empty placement matrix.

    Args:
        days: Visible day numbers
        hours: Visible hours

    Returns:
        Map of (day, hour) to an empty PlacementCell for every visible slot
    """
    cells = {}
    for hour in hours:
        for day in days:
            cells[(day, hour)] = PlacementCell(day=day, hour=hour)
    return cells


def is_placeable(entry: ScheduleEntry, days: Sequence[int], hours: Sequence[int]) -> bool:
    """Checks that an entry starts inside the visible window and has a usable length"""
    if entry.day_of_week not in days or entry.start_hour not in hours:
        return False
    return isinstance(entry.length_hours, int) and entry.length_hours >= 1


def layout_grid(entries: Iterable[ScheduleEntry],
                days: Sequence[int] = DAYS,
                hours: Sequence[int] = HOURS) -> GridLayout:
    """
    Places schedule entries on a day x hour grid.

    Each entry renders once, in the cell where it starts, with a vertical
    span of min(length_hours, last_hour - start_hour + 1). The following
    hours of that span are marked as covered on the same day. Entries
    sharing a start cell are all kept, in input order. Covered hours do not
    hide an independent start.

    Entries whose day or start hour fall outside the grid (or whose length
    is below 1) are left out and reported in `skipped`; nothing is raised.

    Args:
        entries: Entries to place, usually already filtered
        days: Visible day numbers
        hours: Visible hours; the window is min(hours)..max(hours)

    Returns:
        New GridLayout, independent from any earlier layout
    """
    days = list(days)
    hours = list(hours)
    window = list(range(min(hours), max(hours) + 1)) if hours else []
    layout = GridLayout(days=days, hours=window, cells=set_up(days, window))

    if not window:
        layout.skipped = list(entries)
        return layout

    last_hour = window[-1]
    for entry in entries:
        if not is_placeable(entry, days, window):
            layout.skipped.append(entry)
            continue

        span = min(entry.length_hours, last_hour - entry.start_hour + 1)
        layout.cells[(entry.day_of_week, entry.start_hour)].starts.append(
            PlacedBlock(entry=entry, span=span)
        )

        # Mark the rest of the span so those cells do not render the block again
        for offset in range(1, span):
            layout.cells[(entry.day_of_week, entry.start_hour + offset)].covered_by.append(entry)

        layout.placed.append(entry)

    return layout


def list_entries(entries: Iterable[ScheduleEntry]) -> List[ScheduleEntry]:
    """
    Chronological list projection of the entries.

    Sorted by day, then start hour; entries in the same slot keep their
    input order.
    """
    return sorted(entries, key=lambda entry: (entry.day_of_week, entry.start_hour))
