"""Tests for greedy matching."""

import pytest

from cad_dispatch.errors import AssignmentConflictError
from cad_dispatch.geometry import Location
from cad_dispatch.services.matching import (
    assign,
    find_first_available_incident,
    nearest_available_officer,
    unassign,
)


class TestNearestAvailableOfficer:
    """Tests for nearest_available_officer."""

    def test_no_officers(self, store):
        """Test empty store yields no match."""
        assert nearest_available_officer(store, Location(0, 0)) is None

    def test_picks_nearest(self, store, make_officer):
        """Test the closer of two officers is chosen."""
        make_officer(1, 0, 0)
        make_officer(2, 10, 0)

        officer = nearest_available_officer(store, Location(1, 0))

        assert officer.id == 1

    def test_tie_goes_to_first_seen(self, store, make_officer):
        """Test equal distances resolve to the earlier officer."""
        make_officer(1, 3, 4)  # distance 5
        make_officer(2, -5, 0)  # distance 5

        officer = nearest_available_officer(store, Location(0, 0))

        assert officer.id == 1

    def test_tie_order_follows_insertion(self, store, make_officer):
        """Test reversing insertion order reverses the tie-break."""
        make_officer(2, -5, 0)
        make_officer(1, 3, 4)

        assert nearest_available_officer(store, Location(0, 0)).id == 2

    def test_skips_assigned_officers(self, store, make_officer, make_incident):
        """Test busy officers are not candidates even when closest."""
        near = make_officer(1, 0, 0)
        make_officer(2, 100, 100)
        assign(store, make_incident(10), near)

        officer = nearest_available_officer(store, Location(0, 0))

        assert officer.id == 2

    def test_all_assigned(self, store, make_officer, make_incident):
        """Test no match when every officer is busy."""
        assign(store, make_incident(10), make_officer(1))

        assert nearest_available_officer(store, Location(0, 0)) is None


class TestFindFirstAvailableIncident:
    """Tests for find_first_available_incident."""

    def test_empty(self, store):
        """Test no incidents yields no match."""
        assert find_first_available_incident(store) is None

    def test_store_order_not_distance(self, store, make_incident):
        """Test the first unassigned incident wins regardless of position."""
        make_incident(1, 1000, 1000)
        make_incident(2, 0, 0)

        assert find_first_available_incident(store).id == 1

    def test_skips_assigned(self, store, make_officer, make_incident):
        """Test assigned incidents are skipped."""
        first = make_incident(1)
        make_incident(2)
        assign(store, first, make_officer(5))

        assert find_first_available_incident(store).id == 2


class TestAssign:
    """Tests for assign and unassign."""

    def test_assign_links_both_sides(self, store, make_officer, make_incident):
        """Test assignment is symmetric."""
        officer = make_officer(5)
        incident = make_incident(10)

        assign(store, incident, officer)

        assert incident.officer_id == 5
        assert officer.incident_id == 10

    def test_assign_same_pair_twice(self, store, make_officer, make_incident):
        """Test re-assigning the same pair is a no-op."""
        officer = make_officer(5)
        incident = make_incident(10)

        assign(store, incident, officer)
        assign(store, incident, officer)

        assert incident.officer_id == 5
        assert officer.incident_id == 10

    def test_assign_busy_officer_rejected(self, store, make_officer, make_incident):
        """Test an assigned officer cannot be reassigned."""
        officer = make_officer(5)
        first = make_incident(10)
        second = make_incident(11)
        assign(store, first, officer)

        with pytest.raises(AssignmentConflictError):
            assign(store, second, officer)

        assert officer.incident_id == 10
        assert first.officer_id == 5
        assert second.officer_id is None

    def test_assign_taken_incident_rejected(self, store, make_officer, make_incident):
        """Test an assigned incident cannot take a second officer."""
        incident = make_incident(10)
        first = make_officer(5)
        second = make_officer(6)
        assign(store, incident, first)

        with pytest.raises(AssignmentConflictError):
            assign(store, incident, second)

        assert incident.officer_id == 5
        assert second.incident_id is None

    def test_unassign_from_incident(self, store, make_officer, make_incident):
        """Test unassign from the incident side clears both sides."""
        officer = make_officer(5)
        incident = make_incident(10)
        assign(store, incident, officer)

        unassign(store, incident=incident)

        assert incident.officer_id is None
        assert officer.incident_id is None

    def test_unassign_from_officer(self, store, make_officer, make_incident):
        """Test unassign from the officer side clears both sides."""
        officer = make_officer(5)
        incident = make_incident(10)
        assign(store, incident, officer)

        unassign(store, officer=officer)

        assert incident.officer_id is None
        assert officer.incident_id is None

    def test_unassign_idempotent(self, store, make_officer, make_incident):
        """Test unassigning twice equals unassigning once."""
        officer = make_officer(5)
        incident = make_incident(10)
        assign(store, incident, officer)

        unassign(store, incident=incident)
        once = (incident.officer_id, officer.incident_id)
        unassign(store, incident=incident)
        unassign(store, officer=officer)

        assert (incident.officer_id, officer.incident_id) == once == (None, None)

    def test_unassign_then_reassign(self, store, make_officer, make_incident):
        """Test a freed officer can take a new incident."""
        officer = make_officer(5)
        first = make_incident(10)
        second = make_incident(11)
        assign(store, first, officer)
        unassign(store, officer=officer)

        assign(store, second, officer)

        assert first.officer_id is None
        assert second.officer_id == 5
        assert officer.incident_id == 11
