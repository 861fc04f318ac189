"""Persistence access for users, cats, missions and targets."""

from __future__ import annotations

from spycats.repositories.base import BaseRepository, Page, Pagination, paginate_select
from spycats.repositories.cat import CatRepository
from spycats.repositories.mission import MissionRepository, TargetRepository
from spycats.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CatRepository",
    "MissionRepository",
    "Page",
    "Pagination",
    "TargetRepository",
    "UserRepository",
    "paginate_select",
]
