from fastapi import APIRouter, Depends

from unieventos.core.deps import get_optional_profile
from unieventos.models.users import UserProfile
from unieventos.schemas.home import HomeOut, NavLinkOut

router = APIRouter(tags=["home"])

APP_NAME = "UniEventos"


@router.get("/", response_model=HomeOut)
def home(profile: UserProfile | None = Depends(get_optional_profile)):
    """Landing data plus the navigation links for the caller."""
    if profile is not None:
        links = [
            NavLinkOut(label="Panel de Control", path="/dashboard"),
            NavLinkOut(label="Cerrar Sesión", path="/logout", method="POST"),
        ]
    else:
        links = [
            NavLinkOut(label="Iniciar Sesión", path="/login", method="POST"),
            NavLinkOut(label="Registrarse", path="/register", method="POST"),
        ]
    return HomeOut(name=APP_NAME, links=links)
