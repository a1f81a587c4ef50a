import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from ..core.config import settings
from ..storage.store import DataStore

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10

logger = logging.getLogger(__name__)


class PasswordChangeError(Exception):
    """Raised when a password change request is rejected."""


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Admin password is not a valid bcrypt hash")
        return False


def public_admin(admin: dict) -> dict:
    return {key: value for key, value in admin.items() if key != "password"}


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Email carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.error(f"JWT Error: {str(e)} - Could not validate credentials")
        return None
    return payload.get("sub")


def authenticate_admin(store: DataStore, email: str, password: str) -> Optional[dict]:
    if not email or not password:
        return None
    admin = store.admins.find_unique(where={"email": email})
    if admin is None or not verify_password(password, admin.get("password")):
        logger.info(f"Admin login failed for {email}")
        return None
    return public_admin(admin)


def create_admin(store: DataStore, email: str, password: str, name: Optional[str] = None) -> dict:
    admin = store.admins.create({"email": email, "password": hash_password(password), "name": name})
    return public_admin(admin)


def change_password(store: DataStore, email: str, current_password: str, new_password: str) -> dict:
    if len(new_password) < settings.MIN_PASSWORD_LENGTH:
        raise PasswordChangeError(f"New password must be at least {settings.MIN_PASSWORD_LENGTH} characters")

    admin = store.admins.find_unique(where={"email": email})
    if admin is None:
        raise PasswordChangeError("Admin not found")
    if not verify_password(current_password, admin.get("password")):
        raise PasswordChangeError("Current password is incorrect")

    updated = store.admins.update(where={"id": admin["id"]}, data={"password": hash_password(new_password)})
    logger.info(f"Password changed for admin {email}")
    return public_admin(updated)
