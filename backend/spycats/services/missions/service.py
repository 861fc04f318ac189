"""
MissionService
==============

Use cases for the `Mission` aggregate and its targets.

Rules
-----
- A mission holds one to three targets at all times.
- A cat works at most one incomplete mission at a time.
- Completed missions (and completed targets) are frozen.
"""

from __future__ import annotations

import logging

from spycats.models.mission import MAX_TARGETS, MIN_TARGETS, Mission, Target
from spycats.repositories.mission import MissionRepository
from spycats.services._shared.base import BaseService
from spycats.services._shared.dto import PageMeta
from spycats.services._shared.errors import BusinessRuleError, ConflictError, NotFoundError
from spycats.services.missions.dto import (
    MissionCreateIn,
    MissionListIn,
    MissionListOut,
    MissionOut,
    TargetOut,
)
from spycats.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


def target_to_out(target: Target) -> TargetOut:
    return TargetOut(
        id=target.id,
        mission_id=target.mission_id,
        name=target.name,
        country=target.country,
        notes=target.notes,
        complete=target.complete,
        created_at=target.created_at,
        updated_at=target.updated_at,
    )


def mission_to_out(mission: Mission) -> MissionOut:
    return MissionOut(
        id=mission.id,
        cat_id=mission.cat_id,
        complete=mission.complete,
        targets=[target_to_out(t) for t in mission.targets],
        created_at=mission.created_at,
        updated_at=mission.updated_at,
    )


def load_mission(
    uow: SQLAlchemyRepositoryContainer, mission_id: int, *, for_update: bool = False
) -> Mission:
    """
    Fetch a mission or raise :class:`NotFoundError`.

    Write paths pass ``for_update=True`` so the mission row stays locked while
    its targets and cat assignment are checked and changed.
    """
    repo: MissionRepository = uow.missions
    mission = repo.get_for_update(mission_id) if for_update else repo.get(mission_id)
    if mission is None:
        raise NotFoundError("Mission", mission_id)
    return mission


def ensure_mission_open(mission: Mission) -> None:
    if mission.complete:
        raise ConflictError("Mission", "mission is already complete", code="mission_complete")


class MissionService(BaseService):
    """Application service for missions."""

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create_mission(self, dto: MissionCreateIn) -> MissionOut:
        """
        Open a mission with its targets, optionally assigning a cat.

        :raises BusinessRuleError: ``invalid_target_count`` outside 1..3 targets.
        :raises NotFoundError: If ``cat_id`` names an unknown cat.
        :raises ConflictError: ``cat_busy`` if the cat is on another open mission.
        """
        if not MIN_TARGETS <= len(dto.targets) <= MAX_TARGETS:
            raise BusinessRuleError(
                f"A mission needs between {MIN_TARGETS} and {MAX_TARGETS} targets",
                code="invalid_target_count",
            )

        with self.rw_uow() as uow:
            if dto.cat_id is not None:
                self._ensure_cat_available(uow, dto.cat_id)

            mission = Mission(
                cat_id=dto.cat_id,
                targets=[
                    Target(name=t.name.strip(), country=t.country.strip(), notes=t.notes)
                    for t in dto.targets
                ],
            )
            uow.missions.add(mission)
            out = mission_to_out(mission)
        log.info("mission created id=%s targets=%d", out.id, len(out.targets))
        return out

    def assign_cat(self, mission_id: int, cat_id: int) -> MissionOut:
        """
        Assign ``cat_id`` to the mission; re-assigning the same cat is a no-op.

        :raises NotFoundError: Missing mission or cat.
        :raises ConflictError: ``mission_complete`` or ``cat_busy``.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            ensure_mission_open(mission)
            if mission.cat_id != cat_id:
                self._ensure_cat_available(uow, cat_id, exclude_mission_id=mission_id)
                uow.missions.update(mission, cat_id=cat_id)
                log.info("cat %s assigned to mission %s", cat_id, mission_id)
            return mission_to_out(mission)

    def complete_mission(self, mission_id: int) -> MissionOut:
        """
        Mark the mission complete once every target is complete.

        :raises ConflictError: ``mission_complete`` when already complete,
            ``targets_incomplete`` while any target is open.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            ensure_mission_open(mission)
            if not mission.all_targets_complete:
                raise ConflictError(
                    "Mission", "all targets must be complete first", code="targets_incomplete"
                )
            uow.missions.update(mission, complete=True)
            return mission_to_out(mission)

    def delete_mission(self, mission_id: int) -> None:
        """
        Delete an unassigned mission with its targets.

        :raises ConflictError: ``mission_assigned`` while a cat is assigned.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            if mission.cat_id is not None:
                raise ConflictError(
                    "Mission", "mission is assigned to a cat", code="mission_assigned"
                )
            uow.missions.delete(mission)
        log.info("mission deleted id=%s", mission_id)

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get_mission(self, mission_id: int) -> MissionOut:
        with self.ro_uow() as uow:
            return mission_to_out(load_mission(uow, mission_id))

    def list_missions(self, dto: MissionListIn) -> MissionListOut:
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            repo: MissionRepository = uow.missions
            page = repo.paginate(pagination, filters=dto.filters)
            items = [mission_to_out(m) for m in page.items]
        return MissionListOut(
            items=items,
            meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
        )

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    @staticmethod
    def _ensure_cat_available(
        uow: SQLAlchemyRepositoryContainer, cat_id: int, *, exclude_mission_id: int | None = None
    ) -> None:
        if uow.cats.get_for_update(cat_id) is None:
            raise NotFoundError("Cat", cat_id)
        if uow.cats.has_active_mission(cat_id, exclude_mission_id=exclude_mission_id):
            raise ConflictError("Cat", "cat is already on an active mission", code="cat_busy")
