from fastapi import Depends, HTTPException, status

from college_erp.auth.dependencies import get_current_user
from college_erp.auth.schemas import CurrentUser
from college_erp.core.enums import UserRole


ROLE_HIERARCHY = {
    UserRole.STUDENT: 1,
    UserRole.STAFF: 2,
    UserRole.ADMIN: 3,
}


def has_permission(user_role: UserRole, required_role: UserRole) -> bool:
    return ROLE_HIERARCHY[user_role] >= ROLE_HIERARCHY[required_role]


def require_role(required_role: UserRole):
    """
    Dependency factory to enforce a minimum role.

    Example:
        Depends(require_role(UserRole.STAFF))
    """

    async def _checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not has_permission(current_user.role, required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _checker
