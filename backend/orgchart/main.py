"""
Org chart demo host - FastAPI + Socket.io entry point.
Keeps one chart in memory and wires the controller's host hooks:
state flushes bump a revision, centering requests become socket events.
"""

import asyncio
from typing import Any, Dict, Optional

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .api import ChartState, register_routes
from .api.routes.chart import chart_payload
from .api.state import example_items
from .controller import OrgChartController
from .node import Rect


def payload_id(item: Dict[str, Any]) -> Optional[str]:
    return item.get("id")


def payload_to(item: Dict[str, Any]) -> Optional[str]:
    return item.get("to")


def set_payload_to(item: Dict[str, Any], new_id: Optional[str]) -> None:
    item["to"] = new_id


class SocketViewport:
    """Viewport collaborator that forwards center requests to connected clients."""

    def __init__(self, sio_server):
        self.sio = sio_server

    async def center_on_rect(self, rect: Rect, *, scale=None, animate=True, duration=0.3) -> None:
        await self.sio.emit(
            "chart-center-node",
            {"rect": rect._asdict(), "scale": scale, "animate": animate, "duration": duration},
        )


def create_controller(sio_server, chart_state: ChartState) -> OrgChartController:
    def apply_state():
        chart_state.revision += 1

    def center_chart():
        return sio_server.emit("chart-center")

    return OrgChartController(
        example_items(),
        id_provider=payload_id,
        to_provider=payload_to,
        to_setter=set_payload_to,
        apply_state=apply_state,
        center_chart=center_chart,
        viewer=SocketViewport(sio_server),
    )


# Socket.io
sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins="*")
app = FastAPI(title="Org Chart")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

chart_state = ChartState()
chart_state.lock = asyncio.Lock()
chart_state.controller = create_controller(sio, chart_state)

register_routes(app, sio, chart_state)


# Socket.io events
@sio.event
async def connect(sid, environ, auth):
    logger.info("Client connected: {}", sid)
    await sio.emit("chart-update", chart_payload(chart_state.controller, chart_state.revision), to=sid)


@sio.event
def disconnect(sid):
    logger.info("Client disconnected: {}", sid)


# ASGI app for uvicorn (Socket.io + FastAPI)
asgi_app = socketio.ASGIApp(sio, app)
