"""Dashboard and bulk endpoints."""

from __future__ import annotations

from tests.factories.cat import CatFactory
from tests.factories.mission import MissionFactory

BULK = "/api/v1/bulk/cats"


def test_dashboard_for_staff(client, persist, manager_headers):
    cat = persist(CatFactory, salary=500.0)
    persist(CatFactory, salary=1500.0)
    persist(MissionFactory, cat_id=cat.id, targets=2)

    resp = client.get("/api/v1/stats/dashboard", headers=manager_headers)

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["total_cats"] == 2
    assert data["average_salary"] == 1000.0
    assert data["active_missions"] == 1
    assert data["total_targets"] == 2


def test_dashboard_forbidden_for_agents(client, user_headers):
    assert client.get("/api/v1/stats/dashboard", headers=user_headers).status_code == 403


class TestBulkSalaries:
    def test_admin_only(self, client, manager_headers):
        resp = client.put(
            f"{BULK}/salary", json={"updates": [{"id": 1, "salary": 1.0}]}, headers=manager_headers
        )
        assert resp.status_code == 403

    def test_partial_success(self, client, persist, admin_headers):
        first = persist(CatFactory, salary=1.0)
        second = persist(CatFactory, salary=2.0)

        resp = client.put(
            f"{BULK}/salary",
            json={
                "updates": [
                    {"id": first.id, "salary": 10.0},
                    {"id": 9999, "salary": 10.0},
                    {"id": second.id, "salary": 20.0},
                ]
            },
            headers=admin_headers,
        )

        assert resp.status_code == 200
        assert resp.get_json()["data"] == {
            "successful": 2,
            "failed": 1,
            "errors": ["item 1: Cat not found: 9999"],
        }
        cat = client.get(f"/api/v1/cats/{second.id}", headers=admin_headers).get_json()["data"]
        assert cat["salary"] == 20.0

    def test_limit(self, client, admin_headers):
        updates = [{"id": 1, "salary": 1.0} for _ in range(101)]

        resp = client.put(f"{BULK}/salary", json={"updates": updates}, headers=admin_headers)

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "too_many_items"

    def test_empty_list_is_invalid(self, client, admin_headers):
        resp = client.put(f"{BULK}/salary", json={"updates": []}, headers=admin_headers)
        assert resp.status_code == 422


def test_bulk_create(client, admin_headers):
    cats = [
        {"name": "Tom", "breed": "Bengal", "experience": 2, "salary": 100.0},
        {"name": "Jerry", "breed": "Persian", "experience": 4, "salary": 200.0},
    ]

    resp = client.post(BULK, json={"cats": cats}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.get_json()["data"]["successful"] == 2
    listing = client.get("/api/v1/cats", headers=admin_headers).get_json()
    assert listing["meta"]["total"] == 2
