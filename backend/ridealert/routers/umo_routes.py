# backend/ridealert/routers/umo_routes.py
from typing import List, Optional

from fastapi import APIRouter, Query

from ridealert.core.singleton import transit_service
from ridealert.schemas.transit import Agency, PredictionBundle, Route, Stop, StopMatch

router = APIRouter(prefix="/umo_routes", tags=["UmoIQ Transit"])


@router.get("/agency", response_model=Agency)
async def get_agency():
    """Agency record for the configured locality (Unitrans / Davis)."""
    return await transit_service.get_agency()


@router.get("/routes", response_model=List[Route])
async def list_routes():
    return await transit_service.list_routes()


@router.get("/routes/{route}/stops", response_model=List[Stop])
async def list_route_stops(route: str):
    return await transit_service.list_stops(route)


@router.get("/predictions", response_model=List[PredictionBundle])
async def get_predictions(
    stop: Optional[str] = Query(None, description="UmoIQ stop id"),
    route: Optional[str] = Query(None, description="Narrow predictions to one route")
):
    return await transit_service.get_predictions(stop, route)


@router.get("/predictions/near", response_model=List[PredictionBundle])
async def get_predictions_near(
    lat: Optional[float] = Query(None, description="Latitude"),
    lon: Optional[float] = Query(None, description="Longitude"),
    limit: Optional[int] = Query(None, ge=1, description="Keep only the k soonest bundles")
):
    return await transit_service.get_predictions_near(lat, lon, limit)


@router.get("/stops/search", response_model=List[StopMatch])
async def search_stops(query: Optional[str] = Query(None, description="Case-insensitive stop name fragment")):
    return await transit_service.search_stops(query)
