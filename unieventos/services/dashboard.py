from sqlalchemy.orm import Session

from unieventos.models.users import Role, UserProfile
from unieventos.schemas.dashboard import DashboardEventOut, DashboardOut, EmptyStateOut
from unieventos.schemas.events import EventOut
from unieventos.services import store

HEADINGS = {
    Role.ORGANIZER.value: "Mis Eventos",
    Role.PARTICIPANT.value: "Eventos Disponibles",
}

EMPTY_TITLE = "No hay eventos disponibles"
EMPTY_MESSAGES = {
    Role.ORGANIZER.value: "Comienza creando tu primer evento",
    Role.PARTICIPANT.value: "No hay eventos disponibles en este momento",
}


def fetch_events(db: Session, profile: UserProfile) -> list[EventOut]:
    # Both roles read the same unfiltered collection.
    if profile.role == Role.ORGANIZER.value:
        return store.list_events(db)
    return store.list_events(db)


def build_dashboard(db: Session, profile: UserProfile) -> DashboardOut:
    is_participant = profile.role == Role.PARTICIPANT.value
    events = fetch_events(db, profile)

    items = [
        DashboardEventOut(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.date,
            location=event.location,
            participant_count=event.participant_count,
            registered=(profile.uid in event.participants) if is_participant else None,
        )
        for event in events
    ]

    empty_state = None
    if not items:
        empty_state = EmptyStateOut(
            title=EMPTY_TITLE,
            message=EMPTY_MESSAGES.get(profile.role, EMPTY_MESSAGES[Role.PARTICIPANT.value]),
        )

    return DashboardOut(
        heading=HEADINGS.get(profile.role, HEADINGS[Role.PARTICIPANT.value]),
        can_create_event=profile.role == Role.ORGANIZER.value,
        events=items,
        empty_state=empty_state,
    )
