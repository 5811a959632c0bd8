"""Services layer - Application orchestration.

This module contains the application services that drive the graph
store, route engine and renderer to fulfil use cases.

Available services:
- RoutePlannerService: Load the campus map, list locations, plan routes
"""

from .route_planner import RoutePlannerService

__all__ = ["RoutePlannerService"]
