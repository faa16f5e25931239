"""Repository exports."""

from .areas_repo import AreasRepository
from .creatures_repo import CreaturesRepository

__all__ = [
    "AreasRepository",
    "CreaturesRepository",
]
