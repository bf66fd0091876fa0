from __future__ import annotations

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from learning_api.models.user import User
from learning_api.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)

_ph = PasswordHasher()

# Verified against when the email is unknown, so a miss costs the same
# Argon2 work as a wrong password.
_DUMMY_HASH = _ph.hash("not-a-real-password")


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("password must be non-empty")
    return _ph.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return _ph.verify(password_hash, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def authenticate_user(repo: UserRepo, email: str, password: str) -> User | None:
    """Return the active user matching the credentials, else None.

    Unknown email, inactive account and wrong password all return None;
    callers must not tell them apart in their response.
    """
    user = await repo.get_by_email(normalize_email(email))
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        logger.info("Rejected login for inactive user=%s", user.id)
        return None
    return user
