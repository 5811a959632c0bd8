"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CampusMapError,
    ConfigurationError,
    DatasetLoadError,
    MalformedDataError,
    NoRouteFoundError,
    RenderingError,
    UnknownEndpointError,
)
from .models import (
    ROUTABLE_TYPES,
    Edge,
    LoadReport,
    Node,
    NodeType,
    Point,
    RouteResult,
)

__all__ = [
    # Models
    "NodeType",
    "ROUTABLE_TYPES",
    "Point",
    "Node",
    "Edge",
    "RouteResult",
    "LoadReport",
    # Errors
    "CampusMapError",
    "DatasetLoadError",
    "MalformedDataError",
    "UnknownEndpointError",
    "NoRouteFoundError",
    "ConfigurationError",
    "RenderingError",
]
