"""
Single-document operations on the ``events`` collection.

Every call is its own unit of work: there are no multi-document
transactions. ``update_event`` accepts plain values (overwrite) or the
``ArrayUnion`` / ``ArrayRemove`` transforms, which are applied to the
stored array at write time.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unieventos.models.events import Event
from unieventos.schemas.events import EventOut

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = {
    "title",
    "description",
    "location",
    "date",
    "organizer_id",
    "capacity",
    "participants",
    "participant_count",
    "created_at",
}


class StoreError(Exception):
    pass


class EventNotFoundError(Exception):
    pass


class ArrayUnion:
    """Append each value not already present, keeping existing order."""

    def __init__(self, *values):
        self.values = values

    def apply(self, current: list | None) -> list:
        result = list(current or [])
        for value in self.values:
            if value not in result:
                result.append(value)
        return result


class ArrayRemove:
    """Drop every occurrence of the given values."""

    def __init__(self, *values):
        self.values = values

    def apply(self, current: list | None) -> list:
        return [item for item in (current or []) if item not in self.values]


def create_event(db: Session, **fields) -> EventOut:
    _check_fields(fields)
    try:
        event = Event(**fields)
        db.add(event)
        db.commit()
        db.refresh(event)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("Could not create event document.") from e

    logger.info("Created event %s (organizer=%s)", event.id, event.organizer_id)
    return EventOut.model_validate(event)


def get_event(db: Session, event_id: str) -> EventOut | None:
    try:
        event = db.get(Event, event_id, populate_existing=True)
    except SQLAlchemyError as e:
        raise StoreError("Could not read event document.") from e
    if event is None:
        return None
    return EventOut.model_validate(event)


def list_events(db: Session) -> list[EventOut]:
    """Read the whole collection, unfiltered and unordered."""
    try:
        events = db.scalars(select(Event)).all()
    except SQLAlchemyError as e:
        raise StoreError("Could not read events collection.") from e
    return [EventOut.model_validate(event) for event in events]


def update_event(db: Session, event_id: str, fields: dict) -> EventOut:
    _check_fields(fields)
    try:
        event = _update_event_in_transaction(db, event_id, fields)
        db.commit()
        db.refresh(event)
    except EventNotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("Could not update event document.") from e

    logger.debug("Updated event %s fields=%s", event_id, sorted(fields))
    return EventOut.model_validate(event)


def _update_event_in_transaction(db: Session, event_id: str, fields: dict) -> Event:
    """Internal function to apply field writes to one stored document."""
    event = db.get(Event, event_id, with_for_update=True, populate_existing=True)
    if event is None:
        raise EventNotFoundError(f"Event {event_id} does not exist.")

    for name, value in fields.items():
        if isinstance(value, (ArrayUnion, ArrayRemove)):
            # JSON columns only notice reassignment
            value = value.apply(getattr(event, name))
        setattr(event, name, value)
    db.flush()
    return event


def _check_fields(fields: dict) -> None:
    unknown = set(fields) - WRITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown event fields: {', '.join(sorted(unknown))}")
