"""Repository classes for DynamoDB data access."""

from visitrack.repositories.base import BaseRepository
from visitrack.repositories.visitor import VisitorRepository

__all__ = [
    "BaseRepository",
    "VisitorRepository",
]
