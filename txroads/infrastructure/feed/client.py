"""Roadway feed sources: the live ArcGIS endpoint and saved GeoJSON snapshots."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import requests

from txroads.core.entities import RoadwayRecord
from txroads.infrastructure.feed.geojson import parse_feature_collection
from txroads.utils.config import DEFAULT_FEED_URL
from txroads.utils.logger import logger


@dataclass(frozen=True)
class FeedResult:
    """Outcome of one feed read.

    A failed read still yields a result: no records and a non-empty ``error``.
    """

    records: tuple[RoadwayRecord, ...] = ()
    rejected: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _result_from_payload(payload: Any, source: str) -> FeedResult:
    parsed = parse_feature_collection(payload)
    logger.info("Loaded {} roadway(s) from {}", len(parsed.records), source)
    return FeedResult(records=parsed.records, rejected=parsed.rejected)


class ArcGISRoadwayFeed:
    """Read the TxDOT top congested roadways layer as GeoJSON."""

    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def fetch_payload(self) -> Any:
        """Return the decoded JSON body, raising on transport or status errors."""
        logger.debug("Requesting roadway feed {}", self._url)
        response = self._session.get(self._url, timeout=self._timeout)
        response.raise_for_status()
        return response.json()

    def fetch(self) -> FeedResult:
        try:
            payload = self.fetch_payload()
            return _result_from_payload(payload, self._url)
        except (requests.RequestException, ValueError) as error:
            logger.error("Error fetching roadway data: {}", error)
            return FeedResult(error=str(error))


class GeoJSONFileFeed:
    """Read a FeatureCollection previously saved to disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def fetch_payload(self) -> Any:
        with self._path.open("r", encoding="utf-8") as file:
            return json.load(file)

    def fetch(self) -> FeedResult:
        try:
            payload = self.fetch_payload()
            return _result_from_payload(payload, self._path)
        except (OSError, ValueError) as error:
            logger.error("Error reading roadway snapshot {}: {}", self._path, error)
            return FeedResult(error=str(error))


__all__ = ["ArcGISRoadwayFeed", "FeedResult", "GeoJSONFileFeed"]
