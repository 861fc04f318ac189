"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthSessionSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from .bulk import BulkCatCreateSchema, BulkResultSchema, BulkSalarySchema
from .cat import CatCreateSchema, CatListQuerySchema, CatSalarySchema, CatSchema
from .common import MetaSchema, PaginationQuerySchema
from .mission import (
    MissionAssignSchema,
    MissionCreateSchema,
    MissionListQuerySchema,
    MissionSchema,
    TargetCreateSchema,
    TargetNotesSchema,
    TargetSchema,
)
from .stats import DashboardSchema

__all__ = [
    "AuthSessionSchema",
    "LoginSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "UserSchema",
    "BulkCatCreateSchema",
    "BulkResultSchema",
    "BulkSalarySchema",
    "CatCreateSchema",
    "CatListQuerySchema",
    "CatSalarySchema",
    "CatSchema",
    "MetaSchema",
    "PaginationQuerySchema",
    "MissionAssignSchema",
    "MissionCreateSchema",
    "MissionListQuerySchema",
    "MissionSchema",
    "TargetCreateSchema",
    "TargetNotesSchema",
    "TargetSchema",
    "DashboardSchema",
]
