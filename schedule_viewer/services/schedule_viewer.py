import logging
from typing import List, Optional, Sequence, Tuple
from schedule_viewer.models.entry_store import EntryStore
from schedule_viewer.models.filter_context import FilterContext
from schedule_viewer.models.group import Group
from schedule_viewer.models.placement import GridLayout
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.models.schedule_view import ScheduleView
from schedule_viewer.services.filter_engine import apply_filters
from schedule_viewer.services.grid_layout import DAYS, HOURS, layout_grid, list_entries
from schedule_viewer.services.schedule_client import ScheduleClient, ScheduleFetchError
from schedule_viewer.services.teacher_index import teachers_for_group

logger = logging.getLogger(__name__)


class ScheduleViewer:
    """
    State of one weekly schedule view.

    Holds the fetched entries and the filter selection, and rebuilds every
    derived structure (filtered entries, teacher options, grid, list) after
    each refresh or filter change. Derived state is never patched in place.
    """

    def __init__(self, client: Optional[ScheduleClient] = None,
                 days: Sequence[int] = DAYS, hours: Sequence[int] = HOURS):
        self.client = client
        self.days = list(days)
        self.hours = list(hours)
        self.store = EntryStore()
        self.filters = FilterContext()
        self.error: Optional[str] = None

        self.filtered_entries: List[ScheduleEntry] = []
        self.teachers: List[Tuple[str, str]] = []
        self.layout: GridLayout = layout_grid([], self.days, self.hours)
        self.list_rows: List[ScheduleEntry] = []

    def refresh(self) -> Optional[str]:
        """
        Reloads the schedule view and the group catalog from the backend.

        Returns:
            Error message when a fetch failed or no client is set, None
            otherwise. A failed view fetch, or a missing client, leaves an
            empty schedule behind.
        """
        if self.client is None:
            logger.error("No schedule backend configured")
            self.error = "No schedule backend configured"
            self.store = EntryStore(groups=self.store.groups)
            self.recompute()
            return self.error

        self.error = None
        try:
            view = self.client.fetch_schedule_view()
        except ScheduleFetchError as e:
            logger.error(f"Failed to load schedule: {e}")
            self.error = f"Failed to load schedule: {e}"
            view = ScheduleView.empty()

        groups = self.store.groups
        try:
            groups = self.client.fetch_groups()
        except ScheduleFetchError as e:
            logger.error(f"Failed to load groups: {e}")
            if self.error is None:
                self.error = f"Failed to load groups: {e}"

        self.store = EntryStore(view=view, groups=groups)
        self.recompute()
        return self.error

    def set_view(self, view: ScheduleView, groups: Optional[List[Group]] = None):
        """Replaces the stored schedule with data obtained elsewhere"""
        self.store = EntryStore(view=view, groups=list(groups) if groups is not None else self.store.groups)
        self.recompute()

    def select_group(self, group_id: Optional[str]):
        """Selects a group; the teacher selection is reset with it"""
        self.filters = self.filters.with_group(group_id)
        self.recompute()

    def select_teacher(self, teacher_id: Optional[str]):
        self.filters = self.filters.with_teacher(teacher_id)
        self.recompute()

    def recompute(self):
        """Rebuilds filtered entries, teacher options, grid and list from scratch"""
        entries = self.store.entries
        self.filtered_entries = apply_filters(entries, self.filters)
        self.teachers = teachers_for_group(entries, self.filters.selected_group_id)
        self.layout = layout_grid(self.filtered_entries, self.days, self.hours)
        self.list_rows = list_entries(self.filtered_entries)

        for entry in self.layout.skipped:
            logger.warning(f"Schedule entry outside the visible grid: {entry.course_name} "
                           f"({entry.group_name}) day={entry.day_of_week} "
                           f"start={entry.start_hour} length={entry.length_hours}")

        if self.filters.is_empty and len(self.layout.placed) != self.store.view.total_assignments:
            logger.warning(f"Placed {len(self.layout.placed)} of "
                           f"{self.store.view.total_assignments} assignments reported by the backend")

        logger.debug(f"Recomputed view for {self.filters}: {len(self.filtered_entries)} entries, "
                     f"{len(self.teachers)} teachers")

    @property
    def selected_group_name(self) -> Optional[str]:
        if not self.filters.selected_group_id:
            return None
        return self.store.group_name(self.filters.selected_group_id) or self.filters.selected_group_id

    @property
    def selected_teacher_name(self) -> Optional[str]:
        teacher_id = self.filters.selected_teacher_id
        if not teacher_id:
            return None
        return dict(self.teachers).get(teacher_id, teacher_id)
