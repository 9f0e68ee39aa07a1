"""Errors raised by the org chart engine."""

from typing import Any, Optional, Sequence


class OrgChartError(Exception):
    """Base class for org chart engine errors."""


class NodeNotFoundError(OrgChartError, LookupError):
    """Raised when no stored node resolves to the requested id."""

    def __init__(self, node_id: Any):
        self.node_id = node_id
        super().__init__(f"No node with id {node_id!r}")


class MissingSetterError(OrgChartError, ValueError):
    """Raised when an operation must rewrite a parent reference but no to_setter was supplied."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"to_setter is not provided, {operation} needs it to rewrite parent references"
        )


class CyclicReferenceError(OrgChartError, ValueError):
    """Raised when walking parent references revisits a node id."""

    def __init__(self, chain: Sequence[Any], repeated: Optional[Any] = None):
        self.chain = list(chain)
        self.repeated = repeated
        path = " → ".join(str(c) for c in self.chain)
        super().__init__(f"Cyclic parent reference at {repeated!r}: {path}")
