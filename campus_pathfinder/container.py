"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application:
front ends ask for a RoutePlannerService, tests register fakes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        planner = container.resolve(RoutePlannerService)

        # Testing
        container = Container()
        container.register(DatasetSourcePort, lambda: StaticDatasetSource(doc))
        source = container.resolve(DatasetSourcePort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Drop cached singletons so the next resolve builds fresh ones."""
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The dataset source is HTTP when ``graph.dataset_url`` is set and
        the JSON file under ``graph.data_dir`` otherwise.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.graph import (
            DijkstraRouteSolver,
            HttpDatasetSource,
            InMemoryGraphStore,
            JsonFileDatasetSource,
        )
        from .adapters.rendering import FoliumMapRenderer
        from .ports.cache import CachePort
        from .ports.graph import DatasetSourcePort, GraphStorePort, RouteSolverPort
        from .ports.rendering import MapRendererPort
        from .services import RoutePlannerService

        config = config or get_config()
        container = cls(config=config)

        def create_source() -> DatasetSourcePort:
            if config.graph.dataset_url:
                return HttpDatasetSource(
                    url=config.graph.dataset_url,
                    timeout_seconds=config.graph.timeout_seconds,
                )
            return JsonFileDatasetSource(config.graph.dataset_path)

        container.register(DatasetSourcePort, create_source)

        # Graph
        container.register(
            GraphStorePort,
            lambda: InMemoryGraphStore.from_config(config.graph),
        )
        container.register(
            CachePort,
            lambda: InMemoryCache(name="routes", max_size=config.routing.cache_max_size),
        )
        container.register(
            RouteSolverPort,
            lambda: DijkstraRouteSolver.from_config(
                container.resolve(GraphStorePort),
                config.routing,
                cache=container.resolve(CachePort),
            ),
        )

        # Rendering
        container.register(
            MapRendererPort,
            lambda: FoliumMapRenderer.from_config(config.rendering),
        )

        # Main service
        def create_route_planner() -> RoutePlannerService:
            return RoutePlannerService(
                store=container.resolve(GraphStorePort),
                source=container.resolve(DatasetSourcePort),
                route_solver=container.resolve(RouteSolverPort),
                map_renderer=container.resolve(MapRendererPort),
            )

        container.register(RoutePlannerService, create_route_planner)

        return container
