"""Mission and target endpoints."""

from __future__ import annotations

from tests.factories.cat import CatFactory
from tests.factories.mission import MissionFactory

MISSIONS = "/api/v1/missions"


def _targets(count: int) -> list[dict[str, str]]:
    return [{"name": f"Target {i}", "country": "Italy"} for i in range(count)]


class TestCreate:
    def test_create_with_cat(self, client, persist, manager_headers):
        cat = persist(CatFactory)

        resp = client.post(
            MISSIONS, json={"targets": _targets(2), "cat_id": cat.id}, headers=manager_headers
        )

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["cat_id"] == cat.id
        assert [t["notes"] for t in data["targets"]] == ["", ""]
        assert resp.headers["Location"].endswith(f"{MISSIONS}/{data['id']}")

    def test_too_many_targets(self, client, manager_headers):
        resp = client.post(MISSIONS, json={"targets": _targets(4)}, headers=manager_headers)

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_target_count"

    def test_no_targets(self, client, manager_headers):
        resp = client.post(MISSIONS, json={"targets": []}, headers=manager_headers)

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_target_count"

    def test_plain_user_cannot_create(self, client, user_headers):
        resp = client.post(MISSIONS, json={"targets": _targets(1)}, headers=user_headers)
        assert resp.status_code == 403


class TestAssign:
    def test_busy_cat_conflict(self, client, persist, admin_headers):
        cat = persist(CatFactory)
        persist(MissionFactory, cat_id=cat.id)
        other = persist(MissionFactory)

        resp = client.put(
            f"{MISSIONS}/{other.id}/assign", json={"cat_id": cat.id}, headers=admin_headers
        )

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "cat_busy"

    def test_unknown_mission(self, client, admin_headers):
        resp = client.put(f"{MISSIONS}/404/assign", json={"cat_id": 1}, headers=admin_headers)

        assert resp.status_code == 404
        assert resp.get_json()["code"] == "mission_not_found"


def test_full_mission_lifecycle(client, persist, admin_headers, user_headers):
    cat = persist(CatFactory)
    created = client.post(
        MISSIONS, json={"targets": _targets(2), "cat_id": cat.id}, headers=admin_headers
    ).get_json()["data"]
    mission_id = created["id"]
    first, second = (t["id"] for t in created["targets"])

    blocked = client.put(f"{MISSIONS}/{mission_id}/complete", headers=admin_headers)
    assert blocked.status_code == 409
    assert blocked.get_json()["code"] == "targets_incomplete"

    notes = client.put(
        f"{MISSIONS}/{mission_id}/targets/{first}/notes",
        json={"notes": "Spotted at the docks"},
        headers=user_headers,
    )
    assert notes.status_code == 200
    assert notes.get_json()["data"]["notes"] == "Spotted at the docks"

    for target_id in (first, second):
        url = f"{MISSIONS}/{mission_id}/targets/{target_id}/complete"
        done = client.put(url, headers=user_headers)
        assert done.status_code == 200

    frozen = client.put(
        f"{MISSIONS}/{mission_id}/targets/{first}/notes",
        json={"notes": "late"},
        headers=user_headers,
    )
    assert frozen.status_code == 409
    assert frozen.get_json()["code"] == "target_complete"

    completed = client.put(f"{MISSIONS}/{mission_id}/complete", headers=admin_headers)
    assert completed.status_code == 200
    assert completed.get_json()["data"]["complete"] is True

    # the cat is free for new work once the mission is complete
    again = client.post(
        MISSIONS, json={"targets": _targets(1), "cat_id": cat.id}, headers=admin_headers
    )
    assert again.status_code == 201


class TestTargets:
    def test_add_and_delete_target(self, client, persist, admin_headers):
        mission = persist(MissionFactory, targets=1)

        added = client.post(
            f"{MISSIONS}/{mission.id}/targets",
            json={"name": "Mr. Whiskers", "country": "Peru"},
            headers=admin_headers,
        )
        assert added.status_code == 201
        target_id = added.get_json()["data"]["id"]

        removed = client.delete(
            f"{MISSIONS}/{mission.id}/targets/{target_id}", headers=admin_headers
        )
        assert removed.status_code == 204

    def test_target_limit(self, client, persist, admin_headers):
        mission = persist(MissionFactory, targets=3)

        resp = client.post(
            f"{MISSIONS}/{mission.id}/targets",
            json={"name": "Fourth", "country": "Peru"},
            headers=admin_headers,
        )

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "target_limit"

    def test_last_target_cannot_be_removed(self, client, persist, admin_headers):
        mission = persist(MissionFactory, targets=1)
        target_id = mission.targets[0].id

        resp = client.delete(f"{MISSIONS}/{mission.id}/targets/{target_id}", headers=admin_headers)

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "last_target"


class TestDeleteAndList:
    def test_assigned_mission_cannot_be_deleted(self, client, persist, admin_headers):
        cat = persist(CatFactory)
        mission = persist(MissionFactory, cat_id=cat.id)

        resp = client.delete(f"{MISSIONS}/{mission.id}", headers=admin_headers)

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "mission_assigned"

    def test_delete_unassigned(self, client, persist, admin_headers):
        mission = persist(MissionFactory, targets=2)

        assert client.delete(f"{MISSIONS}/{mission.id}", headers=admin_headers).status_code == 204
        assert client.get(f"{MISSIONS}/{mission.id}", headers=admin_headers).status_code == 404

    def test_list_filters(self, client, persist, user_headers):
        cat = persist(CatFactory)
        persist(MissionFactory, cat_id=cat.id)
        persist(MissionFactory)
        persist(MissionFactory, complete=True, targets__complete=True)

        open_missions = client.get(
            MISSIONS, query_string={"complete": "false"}, headers=user_headers
        )
        by_cat = client.get(MISSIONS, query_string={"cat_id": cat.id}, headers=user_headers)

        assert open_missions.get_json()["meta"]["total"] == 2
        assert [m["cat_id"] for m in by_cat.get_json()["data"]] == [cat.id]
