"""Pydantic models for visitrack entities."""

from visitrack.models.base import BaseModel, TimestampMixin
from visitrack.models.visitor import Visitor, VisitorTotals

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "Visitor",
    "VisitorTotals",
]
