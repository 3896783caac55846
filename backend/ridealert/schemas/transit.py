from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Agency(CamelModel):
    id: Optional[str] = None
    name: str = "Unknown"
    short_name: Optional[str] = None
    region: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    timestamp: Any = None


class Route(CamelModel):
    id: Optional[str] = None
    title: str = "Unknown"
    description: Optional[str] = None
    color: Optional[str] = None
    text_color: Optional[str] = None
    hidden: bool = False
    timestamp: Any = None


class Stop(CamelModel):
    id: Optional[str] = None
    name: str = "Unknown"
    code: Optional[str] = None
    lat: Optional[Number] = None
    lon: Optional[Number] = None
    hidden: bool = False
    show_destination_selector: bool = False
    directions: List[Any] = []
    route: Optional[str] = None
    timestamp: Any = None


class PredictionDirection(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    destination_name: Optional[str] = None


class Prediction(CamelModel):
    timestamp: Any = None
    minutes: Optional[Number] = None
    departure: bool = False
    occupancy_status: Any = None
    occupancy_description: Optional[str] = None
    vehicle_id: Optional[str] = None
    linked_vehicle_ids: Any = None
    vehicles_in_consist: List[Any] = []
    direction: PredictionDirection = PredictionDirection()
    trip_id: Optional[str] = None
    delay: Any = None
    affected_by_layover: bool = False


class RouteSummary(CamelModel):
    id: Optional[str] = None
    title: str = "Unknown"


class StopSummary(CamelModel):
    id: Optional[str] = None
    name: str = "Unknown"
    code: Optional[str] = None


class PredictionBundle(CamelModel):
    server_timestamp: Any = None
    route: RouteSummary = RouteSummary()
    stop: StopSummary = StopSummary()
    predictions: List[Prediction] = []
    next_minutes: Optional[Number] = None


class StopMatch(CamelModel):
    id: Optional[str] = None
    name: str = "Unknown"
    code: Optional[str] = None
    route: Optional[str] = None
