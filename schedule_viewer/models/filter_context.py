from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class FilterContext:
    """
    Current group/teacher selection of a schedule view.

    An empty string means "no constraint" on that axis. A teacher selection
    only makes sense relative to a group, so every group change goes through
    with_group(), which always clears the teacher.

    Attributes:
        selected_group_id: Selected group id or ""
        selected_teacher_id: Selected teacher id or ""
    """
    selected_group_id: str = ""
    selected_teacher_id: str = ""

    def with_group(self, group_id: Optional[str]) -> "FilterContext":
        """Returns a context for another group with the teacher filter reset"""
        return FilterContext(selected_group_id=group_id or "", selected_teacher_id="")

    def with_teacher(self, teacher_id: Optional[str]) -> "FilterContext":
        """Returns a context with another teacher, keeping the group"""
        return replace(self, selected_teacher_id=teacher_id or "")

    @property
    def is_empty(self) -> bool:
        return not self.selected_group_id and not self.selected_teacher_id
