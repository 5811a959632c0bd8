"""Dataset source adapters.

Each source turns some external location into the raw dataset document
(a mapping with ``nodes`` and ``paths`` lists). Blocking I/O runs in a
worker thread so ``fetch`` never stalls the event loop.

- JsonFileDatasetSource: a JSON document on disk
- HttpDatasetSource: a JSON document served over HTTP
- CsvDatasetSource: a nodes CSV plus a paths CSV
- StaticDatasetSource: a document already in memory
"""

from __future__ import annotations

import asyncio
import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import requests

from ...domain.errors import DatasetLoadError


@dataclass
class JsonFileDatasetSource:
    """Reads the dataset from a JSON file.

    Attributes:
        path: Location of the JSON document
    """

    path: Path
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    @property
    def description(self) -> str:
        return str(self.path)

    async def fetch(self) -> Mapping[str, Any]:
        """Read and decode the JSON file.

        Raises:
            DatasetLoadError: If the file is missing or not valid JSON.
        """
        return await asyncio.to_thread(self._read)

    def _read(self) -> Mapping[str, Any]:
        self._logger.debug("Reading dataset", extra={"path": str(self.path)})
        try:
            with self.path.open(encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise DatasetLoadError(
                f"Failed to read dataset {self.path}",
                source=str(self.path),
                cause=e,
            )


@dataclass
class HttpDatasetSource:
    """Fetches the dataset as JSON over HTTP.

    Attributes:
        url: Address of the JSON document
        timeout_seconds: Per-request timeout
        session: requests session, injectable for tests
    """

    url: str
    timeout_seconds: float = 10.0
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def description(self) -> str:
        return self.url

    async def fetch(self) -> Mapping[str, Any]:
        """Download and decode the dataset.

        Raises:
            DatasetLoadError: On network errors, non-2xx responses or
                a body that is not JSON.
        """
        return await asyncio.to_thread(self._get)

    def _get(self) -> Mapping[str, Any]:
        self._logger.debug(
            "Fetching dataset",
            extra={"url": self.url, "timeout": self.timeout_seconds},
        )
        try:
            response = self.session.get(self.url, timeout=self.timeout_seconds)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise DatasetLoadError(
                f"Failed to fetch dataset from {self.url}",
                source=self.url,
                cause=e,
            )


@dataclass
class CsvDatasetSource:
    """Reads nodes and paths from two CSV files.

    Expected columns: ``id,x,y,type,name`` for nodes and
    ``start,end,walkable`` for paths. Blank cells are treated as
    absent so field defaults apply.

    Attributes:
        nodes_path: CSV file with one node per row
        paths_path: CSV file with one path per row
    """

    nodes_path: Path
    paths_path: Path
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.nodes_path = Path(self.nodes_path)
        self.paths_path = Path(self.paths_path)
        self._logger = logging.getLogger(__name__)

    @property
    def description(self) -> str:
        return f"{self.nodes_path} + {self.paths_path}"

    async def fetch(self) -> Mapping[str, Any]:
        return await asyncio.to_thread(self._read)

    def _read(self) -> Mapping[str, Any]:
        return {
            "nodes": self._read_rows(self.nodes_path),
            "paths": self._read_rows(self.paths_path),
        }

    def _read_rows(self, path: Path) -> List[Dict[str, str]]:
        rows: List[Dict[str, str]] = []
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    cleaned = {
                        key.strip(): value.strip()
                        for key, value in row.items()
                        if key is not None and value is not None and value.strip()
                    }
                    if cleaned:
                        rows.append(cleaned)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DatasetLoadError(
                f"Failed to read CSV {path}",
                source=str(path),
                cause=e,
            )
        self._logger.debug("CSV rows read", extra={"path": str(path), "rows": len(rows)})
        return rows


@dataclass
class StaticDatasetSource:
    """Serves a dataset document that is already in memory."""

    document: Mapping[str, Any]
    name: str = "<memory>"

    @property
    def description(self) -> str:
        return self.name

    async def fetch(self) -> Mapping[str, Any]:
        return self.document
