"""Core infrastructure module"""

from .config import Settings
from .config import get_settings


__all__ = [
    "Settings",
    "get_settings",
]
