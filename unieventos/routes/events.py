from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from unieventos.core import config
from unieventos.core.deps import get_current_profile, get_optional_profile
from unieventos.database.db import get_db
from unieventos.models.users import UserProfile
from unieventos.schemas.events import EventCreate, EventCreatedOut, EventDetailOut, EventOut
from unieventos.services import registration
from unieventos.services.certificates import (
    CertificateNotAllowedError,
    certificate_filename,
    render_certificate,
)
from unieventos.services.events import (
    InvalidCapacityError,
    NotOrganizerError,
    build_detail,
    create_event,
)
from unieventos.services.store import EventNotFoundError, StoreError, get_event

router = APIRouter(tags=["events"])


def load_event(db: Session, event_id: str) -> EventOut:
    try:
        event = get_event(db, event_id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to load event details")
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("/create-event", response_model=EventCreatedOut, status_code=201)
def create_event_route(
    payload: EventCreate,
    profile: UserProfile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        event = create_event(db, organizer=profile, payload=payload)
    except NotOrganizerError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidCapacityError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to create event")
    return EventCreatedOut(event=event)


@router.get("/events/{event_id}", response_model=EventDetailOut)
def event_details(
    event_id: str,
    profile: UserProfile | None = Depends(get_optional_profile),
    db: Session = Depends(get_db),
):
    event = load_event(db, event_id)
    return build_detail(event, profile)


@router.post("/events/{event_id}/register", response_model=EventDetailOut)
def register_for_event(
    event_id: str,
    profile: UserProfile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return _transition(
        db,
        event_id,
        profile,
        plain=registration.register,
        locked=registration.register_locked,
        failure="Failed to register for event",
    )


@router.post("/events/{event_id}/unregister", response_model=EventDetailOut)
def unregister_from_event(
    event_id: str,
    profile: UserProfile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return _transition(
        db,
        event_id,
        profile,
        plain=registration.unregister,
        locked=registration.unregister_locked,
        failure="Failed to unregister from event",
    )


@router.get("/events/{event_id}/certificate")
def download_certificate(
    event_id: str,
    profile: UserProfile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    event = load_event(db, event_id)
    try:
        pdf = render_certificate(event, profile)
    except CertificateNotAllowedError as e:
        raise HTTPException(status_code=403, detail=str(e))

    filename = quote(certificate_filename(event), safe="")
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )


def _transition(db: Session, event_id: str, profile: UserProfile, *, plain, locked, failure: str):
    try:
        if config.registration_locking_enabled():
            event = locked(db, event_id, profile)
        else:
            event = plain(db, load_event(db, event_id), profile)
    except registration.OrganizerRegistrationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except registration.RegistrationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")
    except StoreError:
        raise HTTPException(status_code=500, detail=failure)
    return build_detail(event, profile)
