"""
TargetService
=============

Use cases for targets, always addressed through their mission.
"""

from __future__ import annotations

import logging

from spycats.models.mission import MAX_TARGETS, MIN_TARGETS, Target
from spycats.repositories.mission import TargetRepository
from spycats.services._shared.base import BaseService
from spycats.services._shared.errors import BusinessRuleError, ConflictError, NotFoundError
from spycats.services.missions.dto import TargetIn, TargetOut
from spycats.services.missions.service import ensure_mission_open, load_mission, target_to_out
from spycats.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


def _load_target(uow: SQLAlchemyRepositoryContainer, mission_id: int, target_id: int) -> Target:
    target = uow.targets.get_in_mission(mission_id, target_id)
    if target is None:
        raise NotFoundError("Target", target_id)
    return target


def _ensure_target_open(target: Target) -> None:
    if target.complete:
        raise ConflictError("Target", "target is already complete", code="target_complete")


class TargetService(BaseService):
    """Application service for mission targets."""

    def add_target(self, mission_id: int, dto: TargetIn) -> TargetOut:
        """
        Append a target to an open mission.

        :raises NotFoundError: If the mission does not exist.
        :raises ConflictError: ``mission_complete`` or ``target_limit``.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            ensure_mission_open(mission)
            repo: TargetRepository = uow.targets
            if repo.count_for_mission(mission_id) >= MAX_TARGETS:
                raise ConflictError(
                    "Mission", f"a mission holds at most {MAX_TARGETS} targets", code="target_limit"
                )
            target = repo.add(
                Target(
                    mission_id=mission_id,
                    name=dto.name.strip(),
                    country=dto.country.strip(),
                    notes=dto.notes,
                )
            )
            return target_to_out(target)

    def update_notes(self, mission_id: int, target_id: int, notes: str) -> TargetOut:
        """
        Replace a target's notes.

        :raises ConflictError: ``mission_complete`` or ``target_complete``.
        :raises NotFoundError: If the target is not part of the mission.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            ensure_mission_open(mission)
            target = _load_target(uow, mission_id, target_id)
            _ensure_target_open(target)
            uow.targets.update(target, notes=notes)
            return target_to_out(target)

    def complete_target(self, mission_id: int, target_id: int) -> TargetOut:
        """Mark a target complete; completing it again is a no-op."""
        with self.rw_uow() as uow:
            load_mission(uow, mission_id, for_update=True)
            target = _load_target(uow, mission_id, target_id)
            if not target.complete:
                uow.targets.update(target, complete=True)
                log.info("target %s of mission %s completed", target_id, mission_id)
            return target_to_out(target)

    def delete_target(self, mission_id: int, target_id: int) -> None:
        """
        Remove an open target.

        :raises ConflictError: ``target_complete`` for a completed target.
        :raises BusinessRuleError: ``last_target`` when it is the mission's only target.
        """
        with self.rw_uow() as uow:
            mission = load_mission(uow, mission_id, for_update=True)
            target = _load_target(uow, mission_id, target_id)
            _ensure_target_open(target)
            if uow.targets.count_for_mission(mission_id) <= MIN_TARGETS:
                raise BusinessRuleError(
                    "A mission must keep at least one target", code="last_target"
                )
            mission.targets.remove(target)
            uow.targets.flush()
