"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the pathway engine to external systems like:
- Dataset sources (JSON files, HTTP, CSV)
- Graph storage and routing (in-memory store, Dijkstra)
- Rendering engines (Folium)
- Caching systems (in-memory, null)
"""
