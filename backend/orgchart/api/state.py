"""
Shared API state - sio, chart controller, mutation lock.
Initialized by main.py after creating app and controller.
"""

import copy
from typing import Any, Dict, List, Optional

# Sample chart restored by POST /api/chart/reset
EXAMPLE_ITEMS: List[Dict[str, Any]] = [
    {"title": "S", "id": "1", "to": None},
    {"title": "A", "id": "2", "to": "1"},
    {"title": "V", "id": "3", "to": "1"},
    {"title": "K", "id": "4", "to": "1"},
    {"title": "K", "id": "5", "to": "2"},
]


def example_items() -> List[Dict[str, Any]]:
    return copy.deepcopy(EXAMPLE_ITEMS)


class ChartState:
    """Mutable container for the chart. Main holds refs; routes serialize mutations on lock."""
    controller: Optional[Any] = None
    lock: Optional[Any] = None
    revision: int = 0


# Set by main.py
sio: Any = None
chart_state: Optional[ChartState] = None


def init_api_state(sio_instance, state: ChartState):
    global sio, chart_state
    sio = sio_instance
    chart_state = state
