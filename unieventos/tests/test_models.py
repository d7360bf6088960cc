"""
Test database models (Event and UserProfile).
"""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unieventos.models.events import Event
from unieventos.models.users import Role, UserProfile


class TestEventModel:
    """Test the Event model."""

    def test_create_event_defaults(self, db_session: Session):
        """Test that a new event gets an id, an empty roster and a timestamp."""
        event = Event(
            title="Hackathon",
            description="24 horas",
            location="Biblioteca",
            date="2025-05-01T09:00",
            organizer_id="org1",
            capacity=30,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert len(event.id) == 32
        assert event.participants == []
        assert event.participant_count == 0
        assert event.created_at

    def test_capacity_can_be_null(self, db_session: Session):
        """Test storing an event whose capacity did not parse."""
        event = Event(title="Charla", date="2025-05-02T18:00", organizer_id="org1", capacity=None)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.capacity is None

    def test_participants_keep_order(self, db_session: Session):
        """Test that the participants array round-trips in append order."""
        event = Event(title="Feria", date="2025-06-01T10:00", organizer_id="org1", capacity=5)
        db_session.add(event)
        db_session.commit()

        event.participants = ["u3", "u1", "u2"]
        event.participant_count = 3
        db_session.commit()
        db_session.refresh(event)

        assert event.participants == ["u3", "u1", "u2"]
        assert event.participant_count == 3


class TestUserProfileModel:
    """Test the UserProfile model."""

    def test_create_profile(self, db_session: Session):
        profile = UserProfile(email="maria@uni.edu", role=Role.ORGANIZER.value, password_hash="x")
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)

        assert len(profile.uid) == 32
        assert profile.role == "organizer"
        assert profile.token_id is None

    def test_email_is_unique(self, db_session: Session):
        db_session.add(UserProfile(email="dup@uni.edu", role="participant", password_hash="x"))
        db_session.commit()

        db_session.add(UserProfile(email="dup@uni.edu", role="participant", password_hash="y"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
