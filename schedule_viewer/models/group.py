from dataclasses import dataclass
from typing import Optional


@dataclass()
class Group:
    """
    Represents a student group from the group catalog.

    Attributes:
        id: Unique identifier for the group
        name: Display name (e.g., "1A")
        preferred_room_name: Room the group is usually taught in, if any
    """
    id: str
    name: str
    preferred_room_name: Optional[str] = None
