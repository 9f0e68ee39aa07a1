"""Tests for orgchart.config."""

import pytest
from pydantic import ValidationError

from orgchart import LayoutConfig, Orientation, Size


class TestLayoutConfig:
    def test_defaults(self):
        config = LayoutConfig()
        assert config.box_size == Size(200, 100)
        assert config.spacing == 20
        assert config.run_spacing == 50
        assert config.orientation == Orientation.LEFT_TO_RIGHT

    def test_aliases(self):
        config = LayoutConfig.model_validate(
            {"boxSize": [120, 60], "spacing": 8, "runSpacing": 30, "orientation": "topToBottom"}
        )
        assert config.box_size == Size(120, 60)
        assert config.run_spacing == 30
        assert config.orientation == Orientation.TOP_TO_BOTTOM

    def test_box_size_object(self):
        config = LayoutConfig.model_validate({"boxSize": {"width": 10, "height": 5}})
        assert config.box_size == Size(10, 5)

    def test_dump_by_alias(self):
        dumped = LayoutConfig().model_dump(by_alias=True, mode="json")
        assert dumped == {
            "boxSize": [200.0, 100.0],
            "spacing": 20.0,
            "runSpacing": 50.0,
            "orientation": "leftToRight",
        }

    @pytest.mark.parametrize(
        "payload",
        [{"spacing": -1}, {"runSpacing": -5}, {"boxSize": [-1, 10]}, {"orientation": "diagonal"}],
    )
    def test_rejects_invalid(self, payload):
        with pytest.raises(ValidationError):
            LayoutConfig.model_validate(payload)


class TestOrientation:
    def test_toggled(self):
        assert Orientation.TOP_TO_BOTTOM.toggled() == Orientation.LEFT_TO_RIGHT
        assert Orientation.LEFT_TO_RIGHT.toggled() == Orientation.TOP_TO_BOTTOM

    def test_from_value(self):
        assert Orientation("leftToRight") is Orientation.LEFT_TO_RIGHT
