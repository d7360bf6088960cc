import enum
import logging

import redis
from sqlalchemy.orm import Session

from unieventos.core import config
from unieventos.models.users import UserProfile
from unieventos.schemas.events import EventOut
from unieventos.services import store
from unieventos.services.events import is_full, is_organizer, is_registered

logger = logging.getLogger(__name__)


class RegistrationState(str, enum.Enum):
    NOT_REGISTERED = "not_registered"
    REGISTERED = "registered"


class RegistrationError(Exception):
    pass


class EventFullError(RegistrationError):
    pass


class AlreadyRegisteredError(RegistrationError):
    pass


class NotRegisteredError(RegistrationError):
    pass


class OrganizerRegistrationError(RegistrationError):
    pass


class RegistrationBusyError(RegistrationError):
    pass


def get_redis_client():
    """Get Redis client for locking."""
    return redis.from_url(config.get_redis_url(), decode_responses=True)


def registration_state(event: EventOut, profile: UserProfile) -> RegistrationState:
    if is_registered(event, profile):
        return RegistrationState.REGISTERED
    return RegistrationState.NOT_REGISTERED


def register(db: Session, event: EventOut, profile: UserProfile) -> EventOut:
    """
    Register ``profile`` for the event as seen in the ``event`` snapshot.

    Checks and the new participant count come from the snapshot, not from
    the store, so two callers holding the same snapshot can both pass the
    capacity check.
    """
    if is_organizer(event, profile):
        raise OrganizerRegistrationError("Organizers cannot register for their own event.")
    if registration_state(event, profile) is RegistrationState.REGISTERED:
        raise AlreadyRegisteredError("Already registered for this event.")
    if is_full(event):
        raise EventFullError("Event is full.")

    updated = store.update_event(
        db,
        event.id,
        {
            "participants": store.ArrayUnion(profile.uid),
            "participant_count": event.participant_count + 1,
        },
    )
    logger.info("User %s registered for event %s", profile.uid, event.id)
    return updated


def unregister(db: Session, event: EventOut, profile: UserProfile) -> EventOut:
    if registration_state(event, profile) is RegistrationState.NOT_REGISTERED:
        raise NotRegisteredError("Not registered for this event.")

    updated = store.update_event(
        db,
        event.id,
        {
            "participants": store.ArrayRemove(profile.uid),
            "participant_count": event.participant_count - 1,
        },
    )
    logger.info("User %s unregistered from event %s", profile.uid, event.id)
    return updated


def register_locked(db: Session, event_id: str, profile: UserProfile) -> EventOut:
    """Register under the per-event lock, re-reading the event inside it."""
    return _run_locked(db, event_id, profile, register)


def unregister_locked(db: Session, event_id: str, profile: UserProfile) -> EventOut:
    return _run_locked(db, event_id, profile, unregister)


def _run_locked(db: Session, event_id: str, profile: UserProfile, transition) -> EventOut:
    redis_client = get_redis_client()
    lock_key = f"event_lock:{event_id}"
    lock = redis_client.lock(
        lock_key,
        timeout=config.LOCK_TIMEOUT,
        blocking_timeout=config.LOCK_BLOCKING_TIMEOUT,
    )

    # Only one transition per event can hold the lock
    try:
        acquired = lock.acquire(blocking=True, blocking_timeout=config.LOCK_BLOCKING_TIMEOUT)
    except redis.exceptions.LockError:  # type: ignore
        raise RegistrationBusyError("Could not acquire lock, please try again.")
    except redis.exceptions.RedisError as e:
        raise store.StoreError("Lock service unavailable.") from e
    if not acquired:
        raise RegistrationBusyError("Could not acquire lock, please try again.")

    try:
        event = store.get_event(db, event_id)
        if event is None:
            raise store.EventNotFoundError(f"Event {event_id} does not exist.")
        return transition(db, event, profile)
    finally:
        # the transition has committed by now
        try:
            lock.release()
        except redis.exceptions.LockError:  # type: ignore
            logger.warning("Lock %s expired before release", lock_key)
        except redis.exceptions.RedisError:
            logger.warning("Could not release lock %s", lock_key, exc_info=True)
