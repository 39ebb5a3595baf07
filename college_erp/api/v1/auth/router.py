from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import TokenResponse
from . import service

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    store: Store = Depends(get_store),
) -> TokenResponse:
    """OAuth2 password flow: the username field carries the email."""
    try:
        return service.authenticate(store, form_data.username, form_data.password)
    except ServiceError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.to_detail(),
            headers={"WWW-Authenticate": "Bearer"},
        )
