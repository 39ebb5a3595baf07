"""Login accounts and token issuance for the bearer-token scheme."""

import logging

from college_erp.auth.security import create_access_token, hash_password, verify_password
from college_erp.core.exceptions import AuthenticationError, DuplicateEmail
from college_erp.core.models import UserAccount
from college_erp.db.store import Store

from .schemas import TokenResponse, UserCreate

logger = logging.getLogger(__name__)


def add_user(store: Store, payload: UserCreate) -> UserAccount:
    email = str(payload.email).strip().lower()
    with store.lock_for("registry", "users"):
        if email in store.users:
            raise DuplicateEmail(f"An account for {email} already exists")
        user = UserAccount(
            email=email,
            name=payload.name.strip(),
            role=payload.role,
            password_hash=hash_password(payload.password, store.settings.bcrypt_rounds),
        )
        store.users[email] = user
    logger.info("User %s added with role %s", email, user.role.value)
    return user


def authenticate(store: Store, email: str, password: str) -> TokenResponse:
    """Check the credentials and mint an access token for the account."""
    user = store.users.get(email.strip().lower())
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.warning("Rejected login for %s", email)
        raise AuthenticationError()

    token = create_access_token(
        subject={
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "name": user.name,
        }
    )
    logger.info("User %s logged in", user.email)
    return TokenResponse(access_token=token, role=user.role, name=user.name)
