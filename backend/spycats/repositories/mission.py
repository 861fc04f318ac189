"""Mission and target repositories."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from spycats.models.mission import Mission, Target
from spycats.repositories.base import BaseRepository


class MissionRepository(BaseRepository[Mission]):
    """Persistence-only repository for :class:`Mission` (targets eager-loaded)."""

    model = Mission
    sort_columns = {
        "id": Mission.id,
        "complete": Mission.complete,
        "created_at": Mission.created_at,
    }
    filter_columns = {"cat_id": Mission.cat_id, "complete": Mission.complete}
    writable = frozenset({"cat_id", "complete"})

    def _select(self) -> Select[Any]:
        return select(Mission).options(selectinload(Mission.targets))

    # ------------------------------ Aggregates ------------------------------

    def count_all(self) -> int:
        return int(self.session.execute(select(func.count(Mission.id))).scalar_one())

    def count_completed(self) -> int:
        stmt = select(func.count(Mission.id)).where(Mission.complete.is_(True))
        return int(self.session.execute(stmt).scalar_one())

    def count_active(self) -> int:
        """Missions that are assigned to a cat and not yet complete."""
        stmt = select(func.count(Mission.id)).where(
            Mission.complete.is_(False), Mission.cat_id.is_not(None)
        )
        return int(self.session.execute(stmt).scalar_one())


class TargetRepository(BaseRepository[Target]):
    """Persistence-only repository for :class:`Target`."""

    model = Target
    sort_columns = {"id": Target.id, "name": Target.name, "country": Target.country}
    filter_columns = {"mission_id": Target.mission_id, "complete": Target.complete}
    writable = frozenset({"notes", "complete"})

    def get_in_mission(self, mission_id: int, target_id: int) -> Target | None:
        """Fetch a target only if it belongs to ``mission_id``.

        :rtype: Target | None
        """
        stmt = select(Target).where(Target.id == target_id, Target.mission_id == mission_id)
        return cast(Target | None, self.session.execute(stmt).scalars().first())

    def count_for_mission(self, mission_id: int) -> int:
        stmt = select(func.count(Target.id)).where(Target.mission_id == mission_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_all(self) -> int:
        return int(self.session.execute(select(func.count(Target.id))).scalar_one())

    def count_completed(self) -> int:
        stmt = select(func.count(Target.id)).where(Target.complete.is_(True))
        return int(self.session.execute(stmt).scalar_one())
