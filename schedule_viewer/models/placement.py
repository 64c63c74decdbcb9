from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from schedule_viewer.models.schedule_entry import ScheduleEntry

CELL_EMPTY = "empty"
CELL_START = "start"
CELL_COVERED = "covered"


@dataclass()
class PlacedBlock:
    """A block rendered in its start cell, spanning `span` hour rows"""

    entry: ScheduleEntry
    span: int  # clipped to the visible hour window


@dataclass()
class PlacementCell:
    """
    Content of one (day, hour) cell of the weekly grid.

    Attributes:
        day: Day number (1 = Monday)
        hour: Hour of the row
        starts: Blocks beginning in this cell, in input order
        covered_by: Entries that started earlier the same day and run
                    through this hour
    """
    day: int
    hour: int
    starts: List[PlacedBlock] = field(default_factory=list)
    covered_by: List[ScheduleEntry] = field(default_factory=list)

    @property
    def state(self) -> str:
        # A start always renders, even when an earlier block covers the hour
        if self.starts:
            return CELL_START
        if self.covered_by:
            return CELL_COVERED
        return CELL_EMPTY

    @property
    def is_start(self) -> bool:
        return bool(self.starts)

    @property
    def is_covered(self) -> bool:
        """True when the cell is absorbed by a span and must not render"""
        return self.state == CELL_COVERED

    @property
    def is_empty(self) -> bool:
        return self.state == CELL_EMPTY


@dataclass()
class GridLayout:
    """
    Day x hour placement of a set of schedule entries.

    Attributes:
        days: Visible day numbers, in column order
        hours: Visible hours, in row order
        cells: Map of (day, hour) to PlacementCell
        placed: Entries that got a start cell, in input order
        skipped: Entries outside the visible days/hours or malformed
    """
    days: List[int]
    hours: List[int]
    cells: Dict[Tuple[int, int], PlacementCell] = field(default_factory=dict)
    placed: List[ScheduleEntry] = field(default_factory=list)
    skipped: List[ScheduleEntry] = field(default_factory=list)

    def cell(self, day: int, hour: int) -> Optional[PlacementCell]:
        """Returns the cell at (day, hour), None outside the grid"""
        return self.cells.get((day, hour))

    def rows(self) -> Iterator[Tuple[int, List[PlacementCell]]]:
        """Yields (hour, cells ordered by day) for each visible hour"""
        for hour in self.hours:
            yield hour, [self.cells[(day, hour)] for day in self.days]

    def cells_for(self, entry: ScheduleEntry) -> List[PlacementCell]:
        """
        Returns the start cell and covered cells attributed to one entry.

        Entries are matched by identity, so equal duplicates placed in the
        same slot are kept apart.
        """
        result = []
        for hour in self.hours:
            for day in self.days:
                cell = self.cells[(day, hour)]
                if any(block.entry is entry for block in cell.starts) or \
                        any(covering is entry for covering in cell.covered_by):
                    result.append(cell)
        return result
