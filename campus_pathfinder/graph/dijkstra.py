"""Shortest-path computation using Dijkstra's algorithm.

The search is written against a neighbour callback rather than a
concrete graph type so the route engine can feed it the store's
walkable adjacency view, and tests can feed it plain dictionaries.
"""

import heapq
import itertools
from typing import Callable, Dict, Iterable, List, Set, Tuple

Neighbors = Callable[[str], Iterable[Tuple[str, float]]]


def dijkstra(neighbors: Neighbors, start: str, end: str) -> Tuple[List[str], float]:
    """Compute the shortest path between two nodes using Dijkstra.

    Parameters
    ----------
    neighbors:
        Callback returning ``(neighbor_id, weight)`` pairs for a node.
        Weights must be non-negative.
    start:
        Identifier of the start node.
    end:
        Identifier of the end node.

    Returns
    -------
    list[str], float
        The sequence of node identifiers from ``start`` to ``end``
        (inclusive) and the total distance. If no path exists, returns
        ``([], float("inf"))``.

    Notes
    -----
    The search stops as soon as ``end`` is finalized. Heap entries carry
    a discovery counter, and a tentative distance is only replaced by a
    strictly shorter one, so equal-cost alternatives resolve to whichever
    was discovered first.
    """
    if start == end:
        return [start], 0.0

    distances: Dict[str, float] = {start: 0.0}
    previous: Dict[str, str] = {}
    counter = itertools.count()

    heap: List[Tuple[float, int, str]] = [(0.0, next(counter), start)]
    visited: Set[str] = set()

    while heap:
        current_distance, _, u = heapq.heappop(heap)

        if u in visited:
            continue

        visited.add(u)

        if u == end:
            break

        for v, weight in neighbors(u):
            if v in visited:
                continue
            new_distance = current_distance + weight
            if new_distance < distances.get(v, float("inf")):
                distances[v] = new_distance
                previous[v] = u
                heapq.heappush(heap, (new_distance, next(counter), v))

    if end not in visited:
        return [], float("inf")

    path: List[str] = [end]
    current = end
    while current != start:
        current = previous[current]
        path.append(current)

    path.reverse()
    return path, distances[end]
