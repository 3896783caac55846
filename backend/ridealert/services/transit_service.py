from typing import Callable, List, Optional

import httpx

from ridealert.config import settings
from ridealert.exceptions import BadRequest, NotFound
from ridealert.integrations.umoiq_api import create_client, umoiq_fetch
from ridealert.schemas.transit import Agency, PredictionBundle, Route, Stop, StopMatch
from ridealert.services.debug_logger import log_debug
from ridealert.services.normalizers import (
    agency_matches,
    normalize_agency,
    normalize_bundles,
    normalize_route,
    normalize_stop,
    sort_bundles_by_next_arrival,
    to_stop_match,
)


def _as_list(payload) -> list:
    return payload if isinstance(payload, list) else []


class TransitService:
    """Read-only UmoIQ operations for a single agency."""

    def __init__(
        self,
        agency: str = settings.AGENCY,
        client_factory: Callable[[], httpx.AsyncClient] = create_client,
        search_limit: int = settings.SEARCH_RESULT_LIMIT,
    ):
        self.agency = agency
        self.client_factory = client_factory
        self.search_limit = search_limit

    async def _fetch(self, path: str, params: Optional[dict] = None):
        async with self.client_factory() as client:
            return await umoiq_fetch(client, path, params)

    async def get_agency(self) -> Agency:
        keywords = settings.agency_keywords()
        agencies = await self._fetch("/agencies")
        for raw in _as_list(agencies):
            agency = normalize_agency(raw)
            if agency_matches(agency, keywords):
                return agency
        log_debug(f"[TransitService] No agency matched keywords={keywords}")
        raise NotFound("Unitrans agency not found")

    async def list_routes(self) -> List[Route]:
        routes = await self._fetch(f"/agencies/{self.agency}/routes")
        return [normalize_route(r) for r in _as_list(routes)]

    async def list_stops(self, route_id: Optional[str]) -> List[Stop]:
        if not route_id:
            raise BadRequest("Missing route parameter")
        stops = await self._fetch(f"/agencies/{self.agency}/routes/{route_id}/stops")
        return [normalize_stop(s, route_id=route_id) for s in _as_list(stops)]

    async def get_predictions(self, stop_id: Optional[str], route_id: Optional[str] = None) -> List[PredictionBundle]:
        if not stop_id:
            raise BadRequest("Missing stop parameter")
        if route_id:
            path = f"/agencies/{self.agency}/routes/{route_id}/stops/{stop_id}/predictions"
        else:
            path = f"/agencies/{self.agency}/stops/{stop_id}/predictions"
        return normalize_bundles(await self._fetch(path))

    async def get_predictions_near(
        self,
        lat: Optional[float],
        lon: Optional[float],
        limit: Optional[int] = None,
    ) -> List[PredictionBundle]:
        if lat is None or lon is None:
            raise BadRequest("Missing lat or lon parameter")
        bundles = normalize_bundles(
            await self._fetch(f"/agencies/{self.agency}/nstops/{lat},{lon}/predictions")
        )
        if limit is not None:
            return sort_bundles_by_next_arrival(bundles, limit)
        return bundles

    async def search_stops(self, query: Optional[str]) -> List[StopMatch]:
        """
        Case-insensitive substring search over every stop of every route.

        Routes are scanned one after another on a single client; the first
        ``search_limit`` matches are returned in upstream order. Any upstream
        failure aborts the whole search.
        """
        if not query:
            raise BadRequest("Missing query parameter")
        needle = query.lower()
        matches: List[StopMatch] = []

        async with self.client_factory() as client:
            routes = [normalize_route(r) for r in _as_list(await umoiq_fetch(client, f"/agencies/{self.agency}/routes"))]
            for route in routes:
                if route.id is None:
                    continue
                raw_stops = await umoiq_fetch(client, f"/agencies/{self.agency}/routes/{route.id}/stops")
                for raw in _as_list(raw_stops):
                    # nameless stops never match, not even a query for "unknown"
                    name = raw.get("name") if isinstance(raw, dict) else None
                    if isinstance(name, str) and needle in name.lower():
                        matches.append(to_stop_match(normalize_stop(raw, route_id=route.id)))

        log_debug(f"[TransitService] search '{query}' matched {len(matches)} stops across {len(routes)} routes")
        return matches[: self.search_limit]
