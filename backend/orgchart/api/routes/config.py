"""Config API routes. The controller holds the live layout config; saving re-runs layout."""

from fastapi import APIRouter

from ...config import LayoutConfig
from ...errors import OrgChartError
from .. import state as api_state
from .chart import _error_response

router = APIRouter()


@router.get("")
async def get_config():
    """Return the current layout config."""
    config = api_state.chart_state.controller.config
    return {"config": config.model_dump(by_alias=True, mode="json")}


@router.post("")
async def save_config(body: LayoutConfig):
    """Replace the layout config and lay the chart out again."""
    state = api_state.chart_state
    async with state.lock:
        try:
            state.controller.apply_config(body)
        except OrgChartError as e:
            return _error_response(e)
    await api_state.sio.emit("chart-config-update", {"config": body.model_dump(by_alias=True, mode="json")})
    return {"success": True}
