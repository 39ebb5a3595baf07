from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from college_erp.auth.schemas import CurrentUser
from college_erp.auth.security import decode_access_token
from college_erp.core.enums import UserRole


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Resolve the caller from the bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub") or payload.get("user_id")
    role_name = payload.get("role")
    if not user_id or not role_name:
        raise credentials_exception

    try:
        role = UserRole(role_name)
    except ValueError:
        raise credentials_exception

    return CurrentUser(
        id=str(user_id),
        email=payload.get("email", ""),
        name=payload.get("name", ""),
        role=role,
    )
