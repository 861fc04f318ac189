"""Dashboard statistics computed with SQL aggregates."""

from __future__ import annotations

from dataclasses import dataclass

from spycats.services._shared.base import BaseService


@dataclass(frozen=True, slots=True)
class DashboardOut:
    """
    Agency-wide counters.

    :param active_missions: Incomplete missions with a cat assigned.
    :param average_salary: Mean cat salary, ``0.0`` without cats.
    """

    total_cats: int
    average_salary: float
    total_missions: int
    completed_missions: int
    active_missions: int
    total_targets: int
    completed_targets: int


class StatsService(BaseService):
    """Read-only reporting service."""

    def get_dashboard(self) -> DashboardOut:
        """
        Compute every counter inside one read-only unit of work.

        :returns: Dashboard snapshot.
        :rtype: DashboardOut
        """
        with self.ro_uow() as uow:
            return DashboardOut(
                total_cats=uow.cats.count_all(),
                average_salary=round(uow.cats.average_salary(), 2),
                total_missions=uow.missions.count_all(),
                completed_missions=uow.missions.count_completed(),
                active_missions=uow.missions.count_active(),
                total_targets=uow.targets.count_all(),
                completed_targets=uow.targets.count_completed(),
            )
