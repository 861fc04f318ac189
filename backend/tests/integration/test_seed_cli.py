"""``flask seed`` command group."""

from __future__ import annotations

from spycats.core.extensions import db
from spycats.models import Cat, Mission, Target, User
from spycats.seeds.seed_data import CAT_FIXTURES, MISSION_FIXTURES, USER_FIXTURES


def _counts(app) -> tuple[int, int, int, int]:
    with app.app_context():
        session = db.session
        return (
            session.query(User).count(),
            session.query(Cat).count(),
            session.query(Mission).count(),
            session.query(Target).count(),
        )


def test_seed_run_is_idempotent(app):
    runner = app.test_cli_runner()
    expected_targets = sum(len(m["targets"]) for m in MISSION_FIXTURES)
    expected = (len(USER_FIXTURES), len(CAT_FIXTURES), len(MISSION_FIXTURES), expected_targets)

    first = runner.invoke(args=["seed", "run"])
    assert first.exit_code == 0, first.output
    assert "Seed summary:" in first.output
    assert _counts(app) == expected

    second = runner.invoke(args=["seed", "run"])
    assert second.exit_code == 0, second.output
    assert "created= 0" in second.output
    assert _counts(app) == expected


def test_seeded_admin_can_log_in(app, client):
    app.test_cli_runner().invoke(args=["seed", "run"])

    resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin123"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["user"]["role"] == "admin"


def test_seed_fresh_requires_confirmation(app):
    result = app.test_cli_runner().invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0
    assert "Aborted" in result.output


def test_seed_fresh_rebuilds(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "run"])

    result = runner.invoke(args=["seed", "fresh", "--yes"])

    assert result.exit_code == 0, result.output
    assert _counts(app)[1] == len(CAT_FIXTURES)


def test_seed_only_cats(app):
    result = app.test_cli_runner().invoke(args=["seed", "run", "--only", "cats"])

    assert result.exit_code == 0, result.output
    assert _counts(app) == (0, len(CAT_FIXTURES), 0, 0)


def test_seed_missions_without_cats_fails_cleanly(app):
    result = app.test_cli_runner().invoke(args=["seed", "run", "--only", "missions"])

    assert result.exit_code != 0
    assert "must be seeded before" in result.output
    assert _counts(app) == (0, 0, 0, 0)
