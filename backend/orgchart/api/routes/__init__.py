"""API route modules."""

from fastapi import FastAPI

from . import chart, config
from ..state import ChartState, init_api_state


def register_routes(app: FastAPI, sio, chart_state: ChartState):
    """Register all API routers. Call after app, sio and the chart controller are created."""
    init_api_state(sio, chart_state)

    app.include_router(chart.router, prefix="/api/chart", tags=["chart"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
