from dataclasses import dataclass, field
from typing import List, Optional
from schedule_viewer.models.group import Group
from schedule_viewer.models.schedule_entry import ScheduleEntry
from schedule_viewer.models.schedule_view import ScheduleView


@dataclass()
class EntryStore:
    """
    Most recently fetched schedule view and group catalog.

    Attributes:
        view: Last schedule view received from the backend
        groups: Group catalog used to populate the group filter
    """
    view: ScheduleView = field(default_factory=ScheduleView.empty)
    groups: List[Group] = field(default_factory=list)

    @property
    def entries(self) -> List[ScheduleEntry]:
        return self.view.entries

    def group_name(self, group_id: str) -> Optional[str]:
        """Resolves a group id to its display name (catalog first, then entries)"""
        for group in self.groups:
            if group.id == group_id:
                return group.name
        for entry in self.view.entries:
            if entry.group_id == group_id:
                return entry.group_name
        return None
