"""
Reshape UmoIQ payloads into the stable schemas in ``ridealert.schemas.transit``.

The upstream schema is not contractually stable, so every function here accepts
any input (missing keys, wrong types, ``None``) and falls back to the field's
default instead of raising.
"""

from typing import Any, Iterable, List, Mapping, Optional

from ridealert.schemas.transit import (
    Agency,
    Number,
    Prediction,
    PredictionBundle,
    PredictionDirection,
    Route,
    RouteSummary,
    Stop,
    StopMatch,
    StopSummary,
)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _str(value: Any, default: Optional[str] = None) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value)


def _number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value) if value is not None else False


def normalize_agency(raw: Any) -> Agency:
    data = _mapping(raw)
    return Agency(
        id=_str(data.get("id")),
        name=_str(data.get("name"), "Unknown"),
        short_name=_str(data.get("shortName")),
        region=_str(data.get("region")),
        website=_str(data.get("website")),
        logo=_str(data.get("logo")),
        timestamp=data.get("timestamp"),
    )


def normalize_route(raw: Any) -> Route:
    data = _mapping(raw)
    return Route(
        id=_str(data.get("id")),
        title=_str(data.get("title"), "Unknown"),
        description=_str(data.get("description")),
        color=_str(data.get("color")),
        text_color=_str(data.get("textColor")),
        hidden=_flag(data.get("hidden")),
        timestamp=data.get("timestamp"),
    )


def normalize_stop(raw: Any, route_id: Optional[str] = None) -> Stop:
    data = _mapping(raw)
    return Stop(
        id=_str(data.get("id")),
        name=_str(data.get("name"), "Unknown"),
        code=_str(data.get("code")),
        lat=_number(data.get("lat")),
        lon=_number(data.get("lon")),
        hidden=_flag(data.get("hidden")),
        show_destination_selector=_flag(data.get("showDestinationSelector")),
        directions=_list(data.get("directions")),
        route=route_id,
        timestamp=data.get("timestamp"),
    )


def normalize_prediction(raw: Any) -> Prediction:
    data = _mapping(raw)
    direction = _mapping(data.get("direction"))
    return Prediction(
        timestamp=data.get("timestamp"),
        minutes=_number(data.get("minutes")),
        departure=_flag(data.get("departure")),
        occupancy_status=data.get("occupancyStatus"),
        occupancy_description=_str(data.get("occupancyDescription")),
        vehicle_id=_str(data.get("vehicleId")),
        linked_vehicle_ids=data.get("linkedVehicleIds"),
        vehicles_in_consist=_list(data.get("vehiclesInConsist")),
        direction=PredictionDirection(
            id=_str(direction.get("id")),
            name=_str(direction.get("name")),
            destination_name=_str(direction.get("destinationName")),
        ),
        trip_id=_str(data.get("tripId")),
        delay=data.get("delay"),
        affected_by_layover=_flag(data.get("affectedByLayover")),
    )


def next_minutes(predictions: Iterable[Prediction]) -> Optional[Number]:
    """Smallest numeric ``minutes`` among the predictions, or None."""
    values = [p.minutes for p in predictions if p.minutes is not None]
    return min(values) if values else None


def normalize_bundle(raw: Any) -> PredictionBundle:
    data = _mapping(raw)
    route = _mapping(data.get("route"))
    stop = _mapping(data.get("stop"))
    values = data.get("values")
    if values is None:
        values = data.get("predictions")
    # keep upstream order
    predictions = [normalize_prediction(p) for p in _list(values)]
    return PredictionBundle(
        server_timestamp=data.get("serverTimestamp"),
        route=RouteSummary(id=_str(route.get("id")), title=_str(route.get("title"), "Unknown")),
        stop=StopSummary(
            id=_str(stop.get("id")),
            name=_str(stop.get("name"), "Unknown"),
            code=_str(stop.get("code")),
        ),
        predictions=predictions,
        next_minutes=next_minutes(predictions),
    )


def normalize_bundles(raw: Any) -> List[PredictionBundle]:
    """A non-list payload (including None) normalizes to an empty list."""
    return [normalize_bundle(b) for b in _list(raw)]


def sort_bundles_by_next_arrival(bundles: List[PredictionBundle], limit: Optional[int] = None) -> List[PredictionBundle]:
    """Soonest arrival first; bundles without a numeric arrival go last."""
    ordered = sorted(
        bundles,
        key=lambda b: (b.next_minutes is None, b.next_minutes if b.next_minutes is not None else 0),
    )
    return ordered[:limit] if limit is not None else ordered


def to_stop_match(stop: Stop) -> StopMatch:
    return StopMatch(id=stop.id, name=stop.name, code=stop.code, route=stop.route)


def agency_matches(agency: Agency, keywords: Iterable[str]) -> bool:
    name = agency.name.lower()
    return any(k in name for k in keywords)

