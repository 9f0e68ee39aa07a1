"""Shared fixtures: the five-node example chart and a controller wired with recording hooks."""

import pytest

from orgchart import OrgChartController, Orientation, Size


def example_items():
    return [
        {"id": "1", "to": None, "title": "S"},
        {"id": "2", "to": "1", "title": "A"},
        {"id": "3", "to": "1", "title": "V"},
        {"id": "4", "to": "1", "title": "K"},
        {"id": "5", "to": "2", "title": "K"},
    ]


def get_id(item):
    return item.get("id")


def get_to(item):
    return item.get("to")


def set_to(item, new_id):
    item["to"] = new_id


class HookRecorder:
    """Counts apply_state / center_chart calls made by the controller."""

    def __init__(self):
        self.applied = 0
        self.centered = 0

    def apply_state(self):
        self.applied += 1

    def center_chart(self):
        self.centered += 1


def make_controller(items=None, orientation=Orientation.LEFT_TO_RIGHT, with_setter=True, **kwargs):
    return OrgChartController(
        example_items() if items is None else items,
        id_provider=get_id,
        to_provider=get_to,
        to_setter=set_to if with_setter else None,
        box_size=Size(200, 100),
        spacing=20,
        run_spacing=50,
        orientation=orientation,
        **kwargs,
    )


def positions(controller):
    return {get_id(n.data): n.position for n in controller.nodes}


@pytest.fixture
def hooks():
    return HookRecorder()


@pytest.fixture
def controller(hooks):
    return make_controller(apply_state=hooks.apply_state, center_chart=hooks.center_chart)


@pytest.fixture
def ttb_controller():
    return make_controller(orientation=Orientation.TOP_TO_BOTTOM)
