from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from ..services.auth_service import decode_access_token, public_admin
from ..storage.store import DataStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_fallback_store(request: Request) -> Optional[DataStore]:
    return getattr(request.app.state, "fallback_store", None)


def get_current_admin(token: str = Depends(oauth2_scheme), store: DataStore = Depends(get_store)) -> dict:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    email = decode_access_token(token)
    if email is None:
        raise credentials_exception

    admin = store.admins.find_unique(where={"email": email})
    if admin is None:
        raise credentials_exception
    return public_admin(admin)
