from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from unieventos.core.deps import get_current_profile
from unieventos.database.db import get_db
from unieventos.models.users import UserProfile
from unieventos.schemas.users import LoginRequest, ProfileOut, SignUpRequest, TokenOut
from unieventos.services.accounts import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    log_in,
    log_out,
    sign_up,
)
from unieventos.services.store import StoreError

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=ProfileOut, status_code=201)
def register_account(payload: SignUpRequest, db: Session = Depends(get_db)):
    try:
        return sign_up(db, email=payload.email, password=payload.password, role=payload.role)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to create account")


@router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        token = log_in(db, email=payload.email, password=payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to log in")
    return TokenOut(access_token=token)


@router.post("/logout", status_code=204)
def logout(profile: UserProfile = Depends(get_current_profile), db: Session = Depends(get_db)):
    try:
        log_out(db, profile)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to log out")


@router.get("/me", response_model=ProfileOut)
def me(profile: UserProfile = Depends(get_current_profile)):
    return profile
