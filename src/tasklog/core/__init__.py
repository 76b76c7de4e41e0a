"""Core log operations."""

from .engine import LogEngine

__all__ = ["LogEngine"]
