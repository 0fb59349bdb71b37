"""Tests for geometry and the entity store."""

import math

import pytest

from cad_dispatch.errors import DuplicateEntityError, UnknownEntityError
from cad_dispatch.geometry import Location, distance
from cad_dispatch.models import Incident


class TestDistance:
    """Tests for Euclidean distance."""

    def test_distance_axis(self):
        """Test distance along one axis."""
        assert distance(Location(0, 0), Location(10, 0)) == 10.0

    def test_distance_diagonal(self):
        """Test 3-4-5 triangle."""
        assert distance(Location(1, 1), Location(4, 5)) == 5.0

    def test_distance_symmetric(self):
        """Test distance does not depend on argument order."""
        a, b = Location(-3, 7), Location(12, -2)
        assert distance(a, b) == distance(b, a)
        assert math.isclose(distance(a, b), math.sqrt(15**2 + 9**2))

    def test_location_is_value_type(self):
        """Test equal coordinates compare equal and cannot be mutated."""
        loc = Location(1, 2)
        assert loc == Location(1, 2)
        with pytest.raises(AttributeError):
            loc.x = 5


class TestEntityStore:
    """Tests for EntityStore."""

    def test_upsert_officer_creates(self, store):
        """Test upserting an unknown officer registers it."""
        officer = store.upsert_officer(1, "B1")

        assert officer.id == 1
        assert officer.badge_name == "B1"
        assert officer.location == Location(0, 0)
        assert officer.incident_id is None
        assert store.find_officer(1) is officer

    def test_upsert_officer_existing_not_overwritten(self, store):
        """Test upserting a known officer returns it untouched."""
        original = store.upsert_officer(1, "B1")
        store.update_officer_location(1, Location(4, 4))

        again = store.upsert_officer(1, "Renamed")

        assert again is original
        assert again.badge_name == "B1"
        assert again.location == Location(4, 4)
        assert store.officer_count == 1

    def test_add_incident_duplicate(self, store, make_incident):
        """Test incident ids stay unique."""
        make_incident(10)

        with pytest.raises(DuplicateEntityError):
            store.add_incident(Incident(id=10, code_name="other", location=Location(1, 1)))

        assert store.incident_count == 1
        assert store.find_incident(10).code_name == "code"

    def test_find_unknown(self, store):
        """Test lookups of unknown ids return None."""
        assert store.find_officer(99) is None
        assert store.find_incident(99) is None

    def test_update_location_unknown_officer(self, store):
        """Test moving an unknown officer is a reportable error."""
        with pytest.raises(UnknownEntityError) as exc_info:
            store.update_officer_location(42, Location(1, 1))

        assert exc_info.value.kind == "officer"
        assert exc_info.value.entity_id == 42

    def test_remove_unknown_is_noop(self, store):
        """Test removing unknown ids does nothing."""
        assert store.remove_officer(1) is None
        assert store.remove_incident(1) is None

    def test_remove_officer_unlinks_incident(self, store, make_officer, make_incident):
        """Test removing a linked officer leaves no dangling link."""
        officer = make_officer(5)
        incident = make_incident(10)
        store.link(incident, officer)

        store.remove_officer(5)

        assert store.find_officer(5) is None
        assert incident.officer_id is None
        assert incident.is_available

    def test_remove_incident_unlinks_officer(self, store, make_officer, make_incident):
        """Test removing a linked incident frees its officer."""
        officer = make_officer(5)
        incident = make_incident(10)
        store.link(incident, officer)

        store.remove_incident(10)

        assert store.find_incident(10) is None
        assert officer.incident_id is None
        assert officer.is_available

    def test_iteration_preserves_insertion_order(self, store, make_officer):
        """Test officers iterate in the order they were added."""
        for officer_id in (3, 1, 2):
            make_officer(officer_id)
        store.remove_officer(1)
        make_officer(1)

        assert [o.id for o in store.officers()] == [3, 2, 1]

    def test_iteration_safe_during_removal(self, store, make_incident):
        """Test removing while iterating does not break the iterator."""
        for incident_id in (1, 2, 3):
            make_incident(incident_id)

        for incident in store.incidents():
            store.remove_incident(incident.id)

        assert store.incident_count == 0
