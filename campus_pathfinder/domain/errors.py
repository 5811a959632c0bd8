"""Typed domain errors for the campus pathfinder.

Every failure the engine can report is one of these classified errors.
None of them is fatal: callers catch them and show a visible message.

All errors inherit from CampusMapError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CampusMapError(Exception):
    """Base error for the campus map domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DatasetLoadError(CampusMapError):
    """The pathway dataset could not be fetched or parsed.

    The graph store keeps whatever it held before the failed load.

    Attributes:
        source: Description of the data source (file path or URL)
    """

    source: str = ""


@dataclass
class MalformedDataError(CampusMapError):
    """The dataset was readable but violates the graph invariants.

    Raised for dangling edge references, duplicate node ids and nodes
    missing required fields when the strict load policy is active.

    Attributes:
        problems: One description per offending entry
    """

    problems: tuple[str, ...] = ()


@dataclass
class UnknownEndpointError(CampusMapError):
    """A node id does not resolve in the loaded graph.

    Attributes:
        node_id: The identifier that was not found
    """

    node_id: str = ""


@dataclass
class NoRouteFoundError(CampusMapError):
    """Both endpoints exist but no walkable path connects them.

    Attributes:
        start: Start node id
        end: End node id
    """

    start: str = ""
    end: str = ""


@dataclass
class ConfigurationError(CampusMapError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class RenderingError(CampusMapError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
