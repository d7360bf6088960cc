from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from unieventos.core.deps import get_current_profile
from unieventos.database.db import get_db
from unieventos.models.users import UserProfile
from unieventos.schemas.dashboard import DashboardOut
from unieventos.services.dashboard import build_dashboard
from unieventos.services.store import StoreError

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard(profile: UserProfile = Depends(get_current_profile), db: Session = Depends(get_db)):
    try:
        return build_dashboard(db, profile)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to load events")
