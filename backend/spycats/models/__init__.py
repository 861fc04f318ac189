from spycats.models.cat import Cat
from spycats.models.mission import Mission, Target
from spycats.models.user import User

__all__ = [
    "Cat",
    "Mission",
    "Target",
    "User",
]
