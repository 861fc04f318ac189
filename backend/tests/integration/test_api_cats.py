"""Cat endpoints: roles, validation, ETags and deletion rules."""

from __future__ import annotations

import pytest
from spycats.services._shared.ports.breeds import StaticBreedValidator

from tests.factories.cat import CatFactory
from tests.factories.mission import MissionFactory

CATS = "/api/v1/cats"

NEW_CAT = {"name": "Tom", "breed": "Bengal", "experience": 3, "salary": 1500.0}


class TestAccess:
    def test_listing_requires_authentication(self, client):
        assert client.get(CATS).status_code == 401

    def test_plain_user_cannot_hire(self, client, user_headers):
        resp = client.post(CATS, json=NEW_CAT, headers=user_headers)

        assert resp.status_code == 403
        assert resp.get_json()["code"] == "forbidden"

    def test_plain_user_can_read(self, client, persist, user_headers):
        cat = persist(CatFactory, name="Shadow")

        resp = client.get(f"{CATS}/{cat.id}", headers=user_headers)

        assert resp.status_code == 200
        assert resp.get_json()["data"]["name"] == "Shadow"


class TestCreate:
    def test_manager_hires_cat(self, client, manager_headers):
        resp = client.post(CATS, json=NEW_CAT, headers=manager_headers)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert resp.headers["Location"].endswith(f"{CATS}/{data['id']}")
        assert resp.headers["ETag"]
        assert data["salary"] == 1500.0

    @pytest.mark.parametrize(
        "patch",
        [{"experience": 51}, {"salary": -1}, {"name": "   "}, {"breed": None}],
    )
    def test_invalid_payload(self, client, admin_headers, patch):
        resp = client.post(CATS, json={**NEW_CAT, **patch}, headers=admin_headers)

        assert resp.status_code == 422

    def test_unknown_breed(self, app, client, admin_headers):
        app.extensions["breed_validator"] = StaticBreedValidator(["Bengal"])

        resp = client.post(CATS, json={**NEW_CAT, "breed": "Dogfish"}, headers=admin_headers)

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_breed"


class TestSalary:
    def test_if_match_round_trip(self, client, persist, admin_headers):
        cat = persist(CatFactory, salary=1000.0)
        etag = client.get(f"{CATS}/{cat.id}", headers=admin_headers).headers["ETag"]

        ok = client.put(
            f"{CATS}/{cat.id}/salary",
            json={"salary": 1100.0},
            headers={**admin_headers, "If-Match": etag},
        )
        assert ok.status_code == 200
        assert ok.headers["ETag"] != etag

        stale = client.put(
            f"{CATS}/{cat.id}/salary",
            json={"salary": 1200.0},
            headers={**admin_headers, "If-Match": etag},
        )
        assert stale.status_code == 412
        assert stale.get_json()["code"] == "precondition_failed"

    def test_wildcard_if_match_always_applies(self, client, persist, admin_headers):
        cat = persist(CatFactory, salary=1000.0)

        resp = client.put(
            f"{CATS}/{cat.id}/salary",
            json={"salary": 10.0},
            headers={**admin_headers, "If-Match": "*"},
        )

        assert resp.status_code == 200
        assert resp.get_json()["data"]["salary"] == 10.0

    def test_missing_cat(self, client, admin_headers):
        resp = client.put(f"{CATS}/999/salary", json={"salary": 1.0}, headers=admin_headers)

        assert resp.status_code == 404
        assert resp.get_json()["code"] == "cat_not_found"


class TestDelete:
    def test_delete_free_cat(self, client, persist, admin_headers):
        cat = persist(CatFactory)

        assert client.delete(f"{CATS}/{cat.id}", headers=admin_headers).status_code == 204
        assert client.get(f"{CATS}/{cat.id}", headers=admin_headers).status_code == 404

    def test_busy_cat(self, client, persist, admin_headers):
        cat = persist(CatFactory)
        persist(MissionFactory, cat_id=cat.id)

        resp = client.delete(f"{CATS}/{cat.id}", headers=admin_headers)

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "cat_busy"


def test_list_paginates_and_filters(client, persist, user_headers):
    for salary in (100.0, 200.0, 300.0):
        persist(CatFactory, breed="Persian", salary=salary)
    persist(CatFactory, breed="Sphynx")

    resp = client.get(
        CATS, query_string={"breed": "Persian", "sort": "-salary", "limit": 2, "page": 2},
        headers=user_headers,
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert [c["salary"] for c in body["data"]] == [100.0]
    assert body["meta"] == {"total": 3, "page": 2, "limit": 2, "has_prev": True, "has_next": False}
