from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from unieventos.database.db import get_db
from unieventos.models.users import UserProfile
from unieventos.services.accounts import get_profile_for_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_profile(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserProfile | None:
    if credentials is None:
        return None
    return get_profile_for_token(db, credentials.credentials)


def get_current_profile(profile: UserProfile | None = Depends(get_optional_profile)) -> UserProfile:
    if profile is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile
