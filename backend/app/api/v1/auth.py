# backend/app/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from ...schemas.admin_schema import AdminOut, LoginRequest, LoginResponse, PasswordChange
from ...services.auth_service import (
    PasswordChangeError,
    authenticate_admin,
    change_password,
    create_access_token,
)
from ...storage.store import DataStore
from ..deps import get_current_admin, get_store

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, store: DataStore = Depends(get_store)):
    """Exchange admin email and password for a bearer token"""
    admin = authenticate_admin(store, payload.email, payload.password)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logging.info(f"Admin logged in: {admin['email']}")
    return {"access_token": create_access_token({"sub": admin["email"]}), "admin": admin}


@router.get("/me", response_model=AdminOut)
def read_me(admin: dict = Depends(get_current_admin)):
    return admin


@router.put("/password", response_model=AdminOut)
def update_password(
    payload: PasswordChange,
    admin: dict = Depends(get_current_admin),
    store: DataStore = Depends(get_store),
):
    try:
        return change_password(store, admin["email"], payload.current_password, payload.new_password)
    except PasswordChangeError as e:
        raise HTTPException(status_code=400, detail=str(e))
