"""Shared topology helpers."""

from .graph import Topology

__all__ = ["Topology"]
