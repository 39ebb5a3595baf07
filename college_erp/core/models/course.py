"""Course: immutable catalog reference data."""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Course:
    name: str
    code: str  # 2-4 uppercase letters, used in roll numbers
    duration: int  # in years
    fees: Decimal
    department: str
    description: Optional[str] = None
    is_active: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)
