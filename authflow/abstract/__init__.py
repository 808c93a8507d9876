"""Base classes for entities, repositories, and services."""

from .entity import Entity
from .repository import Repository
from .service import Service


__all__ = [
    "Entity",
    "Repository",
    "Service",
]
