"""Centralized configuration using Pydantic Settings.

Every tunable of the pathfinder lives here: where the pathway dataset
comes from, how malformed entries are treated, the walking speed used
for time estimates and the canvas transform shared by renderers.

Configuration can be overridden via environment variables:
- CAMPUS_GRAPH_DATA_DIR=/path/to/data
- CAMPUS_GRAPH_DATASET_URL=https://example.edu/pathways.json
- CAMPUS_GRAPH_MALFORMED_POLICY=lenient
- CAMPUS_ROUTING_WALKING_SPEED=70
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MalformedPolicy = Literal["strict", "lenient"]


class GraphConfig(BaseSettings):
    """Pathway dataset configuration.

    Environment variables prefixed with CAMPUS_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="CAMPUS_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    dataset_file: str = "pathways.json"
    dataset_url: Optional[str] = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    malformed_policy: MalformedPolicy = "strict"

    @property
    def dataset_path(self) -> Path:
        """Full path to the JSON dataset file."""
        return self.data_dir / self.dataset_file


class RoutingConfig(BaseSettings):
    """Route engine configuration.

    Environment variables prefixed with CAMPUS_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="CAMPUS_ROUTING_")

    # map units per minute; 84 is 1.4 m/s when a unit is read as a metre
    walking_speed: float = Field(default=84.0, gt=0)
    cache_enabled: bool = True
    cache_max_size: Optional[int] = Field(default=1024, gt=0)


class RenderingConfig(BaseSettings):
    """Map rendering configuration.

    Environment variables prefixed with CAMPUS_RENDER_.
    """

    model_config = SettingsConfigDict(env_prefix="CAMPUS_RENDER_")

    scale_x: float = 1.25
    scale_y: float = 1.25
    offset_x: float = -5.5
    offset_y: float = -5.5
    canvas_width: int = Field(default=1200, gt=0)
    canvas_height: int = Field(default=800, gt=0)
    background_image: Optional[Path] = None


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with CAMPUS_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CAMPUS_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.dataset_path)
        print(config.routing.walking_speed)

    Environment variables prefixed with CAMPUS_.
    """

    model_config = SettingsConfigDict(env_prefix="CAMPUS_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
