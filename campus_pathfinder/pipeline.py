"""Text presentation of routes for the Campus Pathfinder.

The engine reports distances in map units and times in fractional
minutes. Splitting a time into whole minutes and seconds, rounding
distances and composing the final message are presentation concerns
handled here, so every front end (CLI, web page, tests) shows the
same text.
"""

from __future__ import annotations

import math
from typing import Optional

from .domain.models import RouteResult
from .ports.graph import GraphStorePort


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def split_minutes(minutes: float) -> tuple[int, int]:
    """Split fractional minutes into whole minutes and rounded seconds.

    Seconds round half up; 59.5 seconds and above carry into the next
    minute.
    """
    whole = math.floor(minutes)
    seconds = math.floor((minutes - whole) * 60 + 0.5)
    if seconds >= 60:
        whole += 1
        seconds -= 60
    return int(whole), int(seconds)


def format_walking_time(minutes: float) -> str:
    """Human-readable walking time, e.g. ``"2 minutes 5 seconds"``."""
    whole, seconds = split_minutes(minutes)
    if whole == 0:
        return _plural(seconds, "second")
    if seconds == 0:
        return _plural(whole, "minute")
    return f"{_plural(whole, 'minute')} {_plural(seconds, 'second')}"


def format_distance(distance: float) -> str:
    """Distance rounded to whole map units."""
    return f"{distance:.0f}"


def describe_route(route: RouteResult, store: Optional[GraphStorePort] = None) -> str:
    """Compose the message shown to the user for a computed route.

    Node ids are replaced by display names when a store is given.
    """

    def label(node_id: str) -> str:
        if store is None:
            return node_id
        node = store.get_node(node_id)
        return node.label if node is not None else node_id

    path_str = " -> ".join(label(node_id) for node_id in route.node_ids)
    return (
        f"Route: {path_str}\n"
        f"Distance: {format_distance(route.distance)} units\n"
        f"Estimated time: {format_walking_time(route.estimated_time)}"
    )
