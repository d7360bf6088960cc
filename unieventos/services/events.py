import re

from sqlalchemy.orm import Session

from unieventos.models.events import utc_now_iso
from unieventos.models.users import Role, UserProfile
from unieventos.schemas.events import EventCreate, EventDetailOut, EventOut
from unieventos.services import store

_LEADING_INT = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


class NotOrganizerError(Exception):
    pass


class InvalidCapacityError(Exception):
    pass


def parse_capacity(raw: str) -> int | None:
    """
    Parse the capacity the way the browser form does (``parseInt``).

    Leading ASCII digits win and the rest is ignored ("12 seats" -> 12);
    a ``0x`` prefix switches to hexadecimal ("0x10" -> 16).
    Input without leading digits gives None, which is stored as-is.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        value = int(hex_digits, 16)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def create_event(db: Session, *, organizer: UserProfile, payload: EventCreate) -> EventOut:
    if organizer.role != Role.ORGANIZER.value:
        raise NotOrganizerError("Only organizers can create events.")

    capacity = parse_capacity(payload.capacity)
    if capacity is not None and capacity < 1:
        raise InvalidCapacityError("Capacity must be at least 1.")

    return store.create_event(
        db,
        title=payload.title,
        description=payload.description,
        date=payload.date,
        location=payload.location,
        organizer_id=organizer.uid,
        capacity=capacity,
        participants=[],
        participant_count=0,
        created_at=utc_now_iso(),
    )


def is_full(event: EventOut) -> bool:
    # an unparsed capacity never compares as reached
    if event.capacity is None:
        return False
    return event.participant_count >= event.capacity


def is_registered(event: EventOut, profile: UserProfile | None) -> bool:
    return profile is not None and profile.uid in event.participants


def is_organizer(event: EventOut, profile: UserProfile | None) -> bool:
    return profile is not None and event.organizer_id == profile.uid


def build_detail(event: EventOut, profile: UserProfile | None) -> EventDetailOut:
    """Compute what the detail page offers this viewer."""
    registered = is_registered(event, profile)
    organizer = is_organizer(event, profile)
    full = is_full(event)

    action = None
    if profile is not None and not organizer:
        if registered:
            action = "unregister"
        elif full:
            action = "full"
        else:
            action = "register"

    return EventDetailOut(
        event=event,
        is_registered=registered,
        is_organizer=organizer,
        is_full=full,
        action=action,
        can_download_certificate=registered,
    )
