"""
Test single-document store operations.
"""
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from unieventos.services import store


class TestFieldTransforms:
    def test_array_union_appends_missing_values(self):
        assert store.ArrayUnion("c", "a").apply(["a", "b"]) == ["a", "b", "c"]

    def test_array_union_on_missing_array(self):
        assert store.ArrayUnion("a").apply(None) == ["a"]

    def test_array_remove_drops_every_occurrence(self):
        assert store.ArrayRemove("a").apply(["a", "b", "a"]) == ["b"]

    def test_array_remove_absent_value_is_noop(self):
        assert store.ArrayRemove("z").apply(["a"]) == ["a"]


class TestStoreOperations:
    def test_get_missing_event_returns_none(self, db_session: Session):
        assert store.get_event(db_session, "does-not-exist") is None

    def test_list_events_is_unfiltered(self, db_session: Session, event_factory, participant):
        event_factory(title="A")
        event_factory(title="B", organizer=participant)

        titles = sorted(event.title for event in store.list_events(db_session))
        assert titles == ["A", "B"]

    def test_update_applies_transforms_to_stored_array(self, db_session: Session, event_factory):
        event = event_factory(participants=["u1"], participant_count=1)

        updated = store.update_event(
            db_session,
            event.id,
            {"participants": store.ArrayUnion("u2"), "participant_count": 7},
        )

        assert updated.participants == ["u1", "u2"]
        # plain values overwrite
        assert updated.participant_count == 7

    def test_update_missing_event_raises(self, db_session: Session):
        with pytest.raises(store.EventNotFoundError):
            store.update_event(db_session, "nope", {"participant_count": 1})

    def test_update_rejects_unknown_fields(self, db_session: Session, event_factory):
        event = event_factory()
        with pytest.raises(ValueError):
            store.update_event(db_session, event.id, {"seats": 3})

    def test_database_failure_becomes_store_error(self, db_session: Session, monkeypatch):
        def broken_scalars(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(db_session, "scalars", broken_scalars)
        with pytest.raises(store.StoreError):
            store.list_events(db_session)
