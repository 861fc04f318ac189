from .dto import (
    MissionCreateIn,
    MissionListIn,
    MissionListOut,
    MissionOut,
    TargetIn,
    TargetOut,
)
from .service import MissionService
from .targets import TargetService

__all__ = [
    "MissionService",
    "TargetService",
    "MissionCreateIn",
    "MissionListIn",
    "MissionListOut",
    "MissionOut",
    "TargetIn",
    "TargetOut",
]
