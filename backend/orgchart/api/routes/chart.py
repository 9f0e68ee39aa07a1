"""Chart API - read layout, add/remove/reparent/reorder items, toggle, orientation, center."""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from loguru import logger

from ...controller import RemovalPolicy
from ...errors import NodeNotFoundError, OrgChartError
from ..schemas import (
    AddItemRequest,
    CenterNodeRequest,
    ChangeIndexRequest,
    OrientationRequest,
    SetParentRequest,
    ToggleRequest,
)
from .. import state as api_state

router = APIRouter()


def chart_payload(controller, revision: int = 0):
    """Build nodes + size + config payload for GET /api/chart and chart-update."""
    size = controller.bounding_size()
    return {
        "nodes": [
            {
                "id": controller.id_provider(n.data),
                "to": controller.to_provider(n.data),
                "title": n.data.get("title", ""),
                "position": {"x": n.position.x, "y": n.position.y},
                "hideNodes": n.hide_nodes,
            }
            for n in controller.nodes
        ],
        "size": {"width": size.width, "height": size.height},
        "config": controller.config.model_dump(by_alias=True, mode="json"),
        "revision": revision,
    }


def _error_response(e: OrgChartError) -> JSONResponse:
    logger.warning("Chart request rejected: {}", e)
    status = 404 if isinstance(e, NodeNotFoundError) else 400
    return JSONResponse(status_code=status, content={"error": str(e)})


async def _broadcast():
    state = api_state.chart_state
    payload = chart_payload(state.controller, state.revision)
    await api_state.sio.emit("chart-update", payload)
    return payload


@router.get("")
async def get_chart():
    state = api_state.chart_state
    return chart_payload(state.controller, state.revision)


@router.post("/items")
async def add_item(body: AddItemRequest):
    state = api_state.chart_state
    async with state.lock:
        item = body.model_dump()
        if item.get("id") is None:
            item["id"] = state.controller.unique_node_id
        try:
            state.controller.add_item(item)
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    return {"success": True, "id": item["id"], "chart": payload}


@router.delete("/items/{node_id}")
async def remove_item(node_id: str, policy: RemovalPolicy = Query(RemovalPolicy.UNLINK)):
    state = api_state.chart_state
    async with state.lock:
        try:
            removed = state.controller.remove_item(node_id, policy)
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    ids = [state.controller.id_provider(n.data) for n in removed]
    return {"success": True, "removed": ids, "chart": payload}


@router.post("/items/{node_id}/parent")
async def set_parent(node_id: str, body: SetParentRequest):
    state = api_state.chart_state
    async with state.lock:
        try:
            state.controller.set_parent(node_id, body.to)
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    return {"success": True, "chart": payload}


@router.post("/items/{node_id}/index")
async def change_index(node_id: str, body: ChangeIndexRequest):
    """Reorder in store only; the next layout pass picks up the new sibling order."""
    state = api_state.chart_state
    async with state.lock:
        try:
            node = state.controller.find_node(node_id)
        except OrgChartError as e:
            return _error_response(e)
        state.controller.change_node_index(node, body.index)
    return {"success": True, "order": [state.controller.id_provider(d) for d in state.controller.items]}


@router.post("/items/{node_id}/toggle")
async def toggle_item(node_id: str, body: ToggleRequest = ToggleRequest()):
    state = api_state.chart_state
    async with state.lock:
        try:
            node = state.controller.toggle_hide_nodes(node_id, body.hide)
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    return {"success": True, "hideNodes": node.hide_nodes, "chart": payload}


@router.get("/items/{node_id}/overlapping")
async def get_overlapping(node_id: str):
    controller = api_state.chart_state.controller
    try:
        node = controller.find_node(node_id)
    except OrgChartError as e:
        return _error_response(e)
    return {"id": node_id, "overlapping": [controller.id_provider(n.data) for n in controller.overlapping(node)]}


@router.post("/items/{node_id}/center")
async def center_item(node_id: str, body: CenterNodeRequest = CenterNodeRequest()):
    controller = api_state.chart_state.controller
    try:
        await controller.center_node(node_id, scale=body.scale, animate=body.animate, duration=body.duration)
    except OrgChartError as e:
        return _error_response(e)
    return {"success": True}


@router.post("/orientation")
async def switch_orientation(body: OrientationRequest = OrientationRequest()):
    state = api_state.chart_state
    async with state.lock:
        try:
            orientation = state.controller.switch_orientation(body.orientation, center=body.center)
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    return {"success": True, "orientation": orientation.value, "chart": payload}


@router.post("/reset")
async def reset_chart():
    """Restore the example chart."""
    state = api_state.chart_state
    async with state.lock:
        try:
            state.controller.items = api_state.example_items()
        except OrgChartError as e:
            return _error_response(e)
    payload = await _broadcast()
    return {"success": True, "chart": payload}
