"""
Node record and geometry primitives.
A node wraps an opaque user payload; identity and parent linkage are derived
from the payload by the controller's provider functions, never stored here.
"""

from dataclasses import dataclass, field
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Offset(NamedTuple):
    """A point (or displacement) in layout space."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        return Offset(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Offset(self.x - other[0], self.y - other[1])

    @property
    def distance_squared(self) -> float:
        return self.x * self.x + self.y * self.y


class Size(NamedTuple):
    width: float = 0.0
    height: float = 0.0


class Rect(NamedTuple):
    """Axis-aligned box given by its top-left corner and extent."""

    x: float
    y: float
    width: float
    height: float


@dataclass(eq=False)
class Node(Generic[T]):
    """One entry of the node store. Compared by identity, like the store treats it."""

    data: T
    position: Offset = field(default_factory=Offset)
    hide_nodes: bool = False

    def distance(self, other: "Node") -> Offset:
        return self.position - other.position

    def distance_squared(self, other: "Node") -> float:
        return self.distance(other).distance_squared
