"""Missions and their targets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spycats.core.extensions import db

from .base import Entity

if TYPE_CHECKING:
    from .cat import Cat

MIN_TARGETS = 1
MAX_TARGETS = 3


class Mission(Entity, db.Model):
    """
    A mission carried out by at most one cat.

    Notes
    -----
    - ``cat_id`` is nulled when the cat is deleted.
    - A mission always owns between one and three targets.
    - Once ``complete`` is set the mission and its targets are frozen.
    """

    __tablename__ = "missions"

    cat_id: Mapped[int | None] = mapped_column(
        ForeignKey("cats.id", ondelete="SET NULL"), nullable=True
    )
    complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    __table_args__ = (Index("ix_missions_cat_id", "cat_id"),)

    # Relationships
    cat: Mapped[Cat | None] = relationship("Cat", back_populates="missions")
    targets: Mapped[list[Target]] = relationship(
        "Target",
        back_populates="mission",
        cascade="all, delete-orphan",
        order_by="Target.id",
        lazy="selectin",
    )

    @property
    def all_targets_complete(self) -> bool:
        return all(t.complete for t in self.targets)


class Target(Entity, db.Model):
    """A person or object to be observed during a mission."""

    __tablename__ = "targets"

    mission_id: Mapped[int] = mapped_column(
        ForeignKey("missions.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str] = mapped_column(String(500), nullable=False, default="", server_default="")
    complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    __table_args__ = (Index("ix_targets_mission_id", "mission_id"),)

    # Relationship
    mission: Mapped[Mission] = relationship("Mission", back_populates="targets")
