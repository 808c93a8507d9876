"""Shared utilities."""

from .enums import AuthErrorCode
from .enums import Environment


__all__ = [
    "AuthErrorCode",
    "Environment",
]
