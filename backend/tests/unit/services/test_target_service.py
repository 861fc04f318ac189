"""Unit tests for TargetService."""

from __future__ import annotations

import pytest
from spycats.models.mission import Target
from spycats.services._shared.errors import BusinessRuleError, ConflictError, NotFoundError
from spycats.services.missions import TargetIn, TargetService

from tests.factories.mission import MissionFactory


@pytest.fixture()
def service(session) -> TargetService:
    return TargetService()


class TestAdd:
    def test_add_target_to_open_mission(self, service, create):
        mission = create(MissionFactory, targets=1)

        out = service.add_target(mission.id, TargetIn(name=" Dr. Evil ", country="UK", notes="x"))

        assert out.mission_id == mission.id
        assert out.name == "Dr. Evil"
        assert out.complete is False

    def test_fourth_target_is_rejected(self, service, create):
        mission = create(MissionFactory, targets=3)

        with pytest.raises(ConflictError) as err:
            service.add_target(mission.id, TargetIn(name="One too many", country="UK"))
        assert err.value.code == "target_limit"

    def test_completed_mission_is_frozen(self, service, create):
        mission = create(MissionFactory, complete=True, targets__complete=True)

        with pytest.raises(ConflictError) as err:
            service.add_target(mission.id, TargetIn(name="Late", country="UK"))
        assert err.value.code == "mission_complete"

    def test_add_locks_mission_before_counting(self, service, create, locked_rows):
        mission = create(MissionFactory, targets=2)

        service.add_target(mission.id, TargetIn(name="Third", country="UK"))

        assert locked_rows == [("Mission", mission.id)]

    def test_missing_mission(self, service):
        with pytest.raises(NotFoundError):
            service.add_target(99, TargetIn(name="Nobody", country="UK"))


class TestNotes:
    def test_update_notes(self, service, create, session):
        mission = create(MissionFactory)
        target_id = mission.targets[0].id

        out = service.update_notes(mission.id, target_id, "Seen near the fish market")

        assert out.notes == "Seen near the fish market"
        assert session.get(Target, target_id).notes == "Seen near the fish market"

    def test_completed_target_notes_are_frozen(self, service, create):
        mission = create(MissionFactory, targets=2)
        target_id = mission.targets[0].id
        service.complete_target(mission.id, target_id)

        with pytest.raises(ConflictError) as err:
            service.update_notes(mission.id, target_id, "too late")
        assert err.value.code == "target_complete"

    def test_completed_mission_notes_are_frozen(self, service, create):
        mission = create(MissionFactory, complete=True, targets__complete=True)

        with pytest.raises(ConflictError) as err:
            service.update_notes(mission.id, mission.targets[0].id, "too late")
        assert err.value.code == "mission_complete"

    def test_target_of_other_mission_is_not_found(self, service, create):
        mission = create(MissionFactory)
        other = create(MissionFactory)

        with pytest.raises(NotFoundError) as err:
            service.update_notes(mission.id, other.targets[0].id, "wrong mission")
        assert err.value.code == "target_not_found"


class TestComplete:
    def test_complete_is_idempotent(self, service, create):
        mission = create(MissionFactory)
        target_id = mission.targets[0].id

        assert service.complete_target(mission.id, target_id).complete is True
        assert service.complete_target(mission.id, target_id).complete is True


class TestDelete:
    def test_delete_open_target(self, service, create, session):
        mission = create(MissionFactory, targets=2)
        target_id = mission.targets[0].id

        service.delete_target(mission.id, target_id)

        assert session.get(Target, target_id) is None

    def test_last_target_cannot_be_deleted(self, service, create):
        mission = create(MissionFactory, targets=1)

        with pytest.raises(BusinessRuleError) as err:
            service.delete_target(mission.id, mission.targets[0].id)
        assert err.value.code == "last_target"

    def test_completed_target_cannot_be_deleted(self, service, create):
        mission = create(MissionFactory, targets=2)
        target_id = mission.targets[0].id
        service.complete_target(mission.id, target_id)

        with pytest.raises(ConflictError) as err:
            service.delete_target(mission.id, target_id)
        assert err.value.code == "target_complete"

    def test_delete_locks_mission_before_counting(self, service, create, locked_rows):
        mission = create(MissionFactory, targets=2)
        mission_id, target_id = mission.id, mission.targets[0].id

        service.delete_target(mission_id, target_id)

        assert locked_rows == [("Mission", mission_id)]
