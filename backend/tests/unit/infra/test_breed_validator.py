"""Unit tests for the TheCatAPI-backed breed validator."""

from __future__ import annotations

import pytest
import requests
import responses
from spycats.infra.breeds.catapi_breed_validator import CatApiBreedValidator
from spycats.services._shared.ports.breeds import StaticBreedValidator

URL = "https://catalog.test/v1/breeds"


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def _validator(clock: FakeClock, **kwargs) -> CatApiBreedValidator:
    return CatApiBreedValidator(
        URL, ttl=60.0, retry_after=30.0, background=False, clock=clock, **kwargs
    )


@responses.activate
def test_cold_start_fetches_once(clock):
    responses.get(URL, json=[{"name": "Bengal"}, {"name": "Maine Coon"}, {"id": "nameless"}])
    validator = _validator(clock)

    assert validator.is_valid("bengal") is True
    assert validator.is_valid(" Maine Coon ") is True
    assert validator.is_valid("Dogfish") is False
    assert len(responses.calls) == 1


@responses.activate
def test_blank_names_never_hit_the_network(clock):
    validator = _validator(clock)

    assert validator.is_valid("") is False
    assert validator.is_valid("   ") is False
    assert len(responses.calls) == 0


@responses.activate
def test_failed_fetch_rejects_every_breed(clock):
    responses.get(URL, status=503)
    validator = _validator(clock)

    assert validator.is_valid("Bengal") is False


@responses.activate
def test_connection_error_rejects_every_breed(clock):
    responses.get(URL, body=requests.ConnectionError("unreachable"))
    validator = _validator(clock)

    assert validator.is_valid("Bengal") is False


@responses.activate
def test_non_list_payload_is_treated_as_failure(clock):
    responses.get(URL, json={"breeds": ["Bengal"]})
    validator = _validator(clock)

    assert validator.is_valid("Bengal") is False


@responses.activate
def test_fresh_catalog_is_served_from_memory(clock):
    responses.get(URL, json=[{"name": "Bengal"}])
    validator = _validator(clock)
    validator.is_valid("Bengal")

    clock.now += 59
    assert validator.is_valid("Bengal") is True
    assert len(responses.calls) == 1


@responses.activate
def test_stale_catalog_is_refreshed(clock):
    responses.get(URL, json=[{"name": "Bengal"}])
    validator = _validator(clock)
    validator.is_valid("Bengal")

    responses.replace(responses.GET, URL, json=[{"name": "Sphynx"}])
    clock.now += 61

    # background=False refreshes before answering
    assert validator.is_valid("Sphynx") is True
    assert len(responses.calls) == 2


@responses.activate
def test_failed_refresh_keeps_stale_data_and_backs_off(clock):
    responses.get(URL, json=[{"name": "Bengal"}])
    validator = _validator(clock)
    validator.is_valid("Bengal")

    responses.replace(responses.GET, URL, status=500)
    clock.now += 61
    assert validator.is_valid("Bengal") is True
    assert len(responses.calls) == 2

    clock.now += 10
    assert validator.is_valid("Bengal") is True
    assert len(responses.calls) == 2

    clock.now += 25
    validator.is_valid("Bengal")
    assert len(responses.calls) == 3


def test_static_validator_is_case_insensitive():
    validator = StaticBreedValidator(["Bengal"])

    assert validator.is_valid("BENGAL") is True
    assert validator.is_valid("Persian") is False
    assert StaticBreedValidator().is_valid("anything") is True
    assert StaticBreedValidator().is_valid(" ") is False
