"""
API module - routes and schemas for the demo host.
Routes are split by domain: chart (store + layout), config.
"""

from .routes import register_routes
from .state import ChartState

__all__ = ["ChartState", "register_routes"]
