"""Hostel and Room: catalog data. Room occupancy is owned by the hostel allocation service."""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from college_erp.core.enums import HostelType, RoomType


@dataclass
class Hostel:
    """Hostel header. Room counts are derived from the rooms in the store, never stored here."""

    name: str
    type: HostelType
    warden_name: str
    warden_phone: str
    address: Optional[str] = None
    facilities: List[str] = field(default_factory=list)
    is_active: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class Room:
    hostel_id: uuid.UUID
    room_number: str
    floor: int
    capacity: int
    type: RoomType
    rent: Decimal
    facilities: List[str] = field(default_factory=list)
    is_active: bool = True
    # Only the allocation service writes this, under the room lock.
    current_occupants: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_full(self) -> bool:
        return self.current_occupants >= self.capacity

    @property
    def available_beds(self) -> int:
        return max(self.capacity - self.current_occupants, 0)
