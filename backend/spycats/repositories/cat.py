"""Cat repository."""

from __future__ import annotations

from sqlalchemy import func, select, update

from spycats.models.cat import Cat
from spycats.models.mission import Mission
from spycats.repositories.base import BaseRepository


class CatRepository(BaseRepository[Cat]):
    """Persistence-only repository for :class:`Cat`. Only the salary changes after hiring."""

    model = Cat
    sort_columns = {
        "id": Cat.id,
        "name": Cat.name,
        "breed": Cat.breed,
        "experience": Cat.experience,
        "salary": Cat.salary,
        "created_at": Cat.created_at,
    }
    filter_columns = {"breed": Cat.breed}
    writable = frozenset({"salary"})

    # ------------------------------ Mission links ------------------------------

    def has_active_mission(self, cat_id: int, *, exclude_mission_id: int | None = None) -> bool:
        """Return ``True`` if the cat is assigned to any incomplete mission.

        :param cat_id: Cat identifier.
        :type cat_id: int
        :param exclude_mission_id: Mission to ignore (the one being reassigned).
        :type exclude_mission_id: int | None
        :rtype: bool
        """
        stmt = select(Mission.id).where(Mission.cat_id == cat_id, Mission.complete.is_(False))
        if exclude_mission_id is not None:
            stmt = stmt.where(Mission.id != exclude_mission_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def detach_from_missions(self, cat_id: int) -> int:
        """Null ``cat_id`` on every mission referencing the cat.

        Mirrors ``ON DELETE SET NULL`` on backends that do not enforce foreign
        keys (SQLite without the pragma).

        :returns: Number of missions updated.
        :rtype: int
        """
        result = self.session.execute(
            update(Mission)
            .where(Mission.cat_id == cat_id)
            .values(cat_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)

    # ------------------------------ Aggregates ------------------------------

    def count_all(self) -> int:
        return int(self.session.execute(select(func.count(Cat.id))).scalar_one())

    def average_salary(self) -> float:
        """Mean salary across all cats; ``0.0`` when there are none."""
        value = self.session.execute(select(func.avg(Cat.salary))).scalar_one_or_none()
        return float(value) if value is not None else 0.0
