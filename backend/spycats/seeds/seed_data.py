"""
Development fixtures for the agency: three accounts, five cats, five missions.

Each seeder only inserts what is missing, so running the pipeline twice
leaves the database unchanged. Users are keyed by username, cats by name
and missions by the name and country of their first target.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from spycats.models.cat import Cat
from spycats.models.mission import Mission, Target
from spycats.models.user import User
from spycats.services._shared.policies.roles import Role

log = logging.getLogger(__name__)

M = TypeVar("M")

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "admin",
        "email": "admin@spycats.com",
        "password": "admin123",
        "role": Role.ADMIN.value,
    },
    {
        "username": "agent",
        "email": "agent@spycats.com",
        "password": "agent123",
        "role": Role.USER.value,
    },
    {
        "username": "manager",
        "email": "manager@spycats.com",
        "password": "manager123",
        "role": Role.MANAGER.value,
    },
]

CAT_FIXTURES: list[dict[str, Any]] = [
    {"name": "Whiskers", "breed": "Bengal", "experience": 5, "salary": 1000.0},
    {"name": "Shadow", "breed": "Siamese", "experience": 2, "salary": 800.0},
    {"name": "Mittens", "breed": "Persian", "experience": 8, "salary": 1500.0},
    {"name": "Felix", "breed": "Maine Coon", "experience": 3, "salary": 900.0},
    {"name": "Luna", "breed": "Russian Blue", "experience": 6, "salary": 1200.0},
]

MISSION_FIXTURES: list[dict[str, Any]] = [
    {
        "cat": "Whiskers",
        "complete": False,
        "targets": [
            {"name": "Mr. Brie", "country": "France", "notes": "Cheese thefts in Paris"},
            {"name": "Dr. Dre", "country": "Germany", "notes": "Suspicious barking in Berlin"},
        ],
    },
    {
        "cat": "Shadow",
        "complete": True,
        "targets": [
            {
                "name": "Agent Smith",
                "country": "USA",
                "notes": "Matrix activities completed",
                "complete": True,
            },
        ],
    },
    {
        "cat": "Mittens",
        "complete": False,
        "targets": [
            {"name": "The Fisherman", "country": "Japan", "notes": "Illegal fishing operations"},
            {
                "name": "Sushi Master",
                "country": "Japan",
                "notes": "Suspicious sushi activities",
                "complete": True,
            },
            {"name": "Ninja Cat", "country": "Japan", "notes": "Stealth training required"},
        ],
    },
    {
        "cat": None,
        "complete": False,
        "targets": [
            {"name": "The Yarn Ball", "country": "Canada", "notes": "Missing yarn investigation"},
        ],
    },
    {
        "cat": "Luna",
        "complete": False,
        "targets": [
            {"name": "Laser Pointer", "country": "UK", "notes": "Mysterious red dot sightings"},
            {"name": "Cardboard Box", "country": "UK", "notes": "Suspicious packaging activities"},
        ],
    },
]


class SeedReport:
    """Per-table tally of inserted and already-present rows."""

    def __init__(self) -> None:
        self.created: Counter[str] = Counter()
        self.existing: Counter[str] = Counter()

    def record(self, table: str, created: bool, count: int = 1) -> None:
        (self.created if created else self.existing)[table] += count

    def tables(self) -> list[str]:
        return sorted(set(self.created) | set(self.existing))

    def rows(self) -> list[tuple[str, int, int]]:
        """``(table, created, existing)`` per table, alphabetically."""
        return [(t, self.created[t], self.existing[t]) for t in self.tables()]


def _first_or_new(
    session: Session, model: type[M], lookup: dict[str, Any], **values: Any
) -> tuple[M, bool]:
    """Return the row matching ``lookup`` or stage a new one built from both mappings."""
    found = session.execute(select(model).filter_by(**lookup)).scalars().first()
    if found is not None:
        return cast(M, found), False
    instance = model(**lookup, **values)
    session.add(instance)
    return instance, True


def seed_users(session: Session, report: SeedReport) -> None:
    for fixture in USER_FIXTURES:
        _, created = _first_or_new(
            session,
            User,
            {"username": fixture["username"]},
            email=fixture["email"],
            role=fixture["role"],
            password=fixture["password"],
        )
        report.record("users", created)
    session.flush()


def seed_cats(session: Session, report: SeedReport) -> None:
    for fixture in CAT_FIXTURES:
        values = {key: value for key, value in fixture.items() if key != "name"}
        _, created = _first_or_new(session, Cat, {"name": fixture["name"]}, **values)
        report.record("cats", created)
    session.flush()


def seed_missions(session: Session, report: SeedReport) -> None:
    """Missions need the cats to exist already."""
    for fixture in MISSION_FIXTURES:
        targets = fixture["targets"]
        key = {"name": targets[0]["name"], "country": targets[0]["country"]}
        if session.execute(select(Target.id).filter_by(**key)).first() is not None:
            report.record("missions", False)
            report.record("targets", False, len(targets))
            continue

        mission = Mission(complete=fixture["complete"])
        if fixture["cat"] is not None:
            cat = session.execute(select(Cat).filter_by(name=fixture["cat"])).scalar_one_or_none()
            if cat is None:
                raise RuntimeError(f"Cat {fixture['cat']!r} must be seeded before its mission")
            mission.cat_id = cat.id
        mission.targets.extend(
            Target(
                name=fields["name"],
                country=fields["country"],
                notes=fields["notes"],
                complete=fields.get("complete", False),
            )
            for fields in targets
        )
        session.add(mission)
        report.record("missions", True)
        report.record("targets", True, len(targets))
    session.flush()


#: Seeders in foreign-key order.
SEEDERS = (("users", seed_users), ("cats", seed_cats), ("missions", seed_missions))


def run_all(session: Session) -> SeedReport:
    """Run every seeder in one transaction and commit it."""
    report = SeedReport()
    for name, seeder in SEEDERS:
        log.debug("seeding %s", name)
        seeder(session, report)
    session.commit()
    log.info(
        "seed finished created=%d existing=%d",
        sum(report.created.values()),
        sum(report.existing.values()),
    )
    return report


__all__ = ["SeedReport", "run_all", "seed_cats", "seed_missions", "seed_users"]
