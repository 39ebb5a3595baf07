from pydantic import BaseModel

from college_erp.core.enums import UserRole


class CurrentUser(BaseModel):
    """Lightweight representation of the authenticated caller for role checks."""

    id: str
    email: str
    name: str
    role: UserRole
