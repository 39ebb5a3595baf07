"""Login account. Only the bcrypt hash of the password is kept."""

import uuid
from dataclasses import dataclass, field

from college_erp.core.enums import UserRole


@dataclass
class UserAccount:
    email: str
    name: str
    role: UserRole
    password_hash: str
    is_active: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)
