"""Spy cat agents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from spycats.core.extensions import db

from .base import Entity, ETagMixin

if TYPE_CHECKING:
    from .mission import Mission

MIN_EXPERIENCE = 0
MAX_EXPERIENCE = 50


class Cat(Entity, ETagMixin, db.Model):
    """
    A spy cat available for missions.

    Fields
    ------
    name : str
        Display name.
    breed : str
        Breed name, validated against the external catalog on create.
    experience : int
        Years of experience, ``0..50``.
    salary : float
        Non-negative salary; the only field editable after creation.
    """

    __tablename__ = "cats"
    __etag_fields__ = ("salary",)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    breed: Mapped[str] = mapped_column(String(50), nullable=False)
    experience: Mapped[int] = mapped_column(Integer, nullable=False)
    salary: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        CheckConstraint(
            f"experience >= {MIN_EXPERIENCE} AND experience <= {MAX_EXPERIENCE}",
            name="experience_range",
        ),
        CheckConstraint("salary >= 0", name="salary_non_negative"),
        Index("ix_cats_breed", "breed"),
    )

    # Relationships
    missions: Mapped[list[Mission]] = relationship("Mission", back_populates="cat")

    @validates("salary")
    def _validate_salary(self, key: str, value: float) -> float:
        if value is None or float(value) < 0:
            raise ValueError("Salary must be non-negative.")
        return float(value)

    @validates("experience")
    def _validate_experience(self, key: str, value: int) -> int:
        if value is None or not MIN_EXPERIENCE <= int(value) <= MAX_EXPERIENCE:
            raise ValueError(f"Experience must be between {MIN_EXPERIENCE} and {MAX_EXPERIENCE}.")
        return int(value)
