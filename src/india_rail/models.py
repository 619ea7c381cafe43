from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class Station:
    code: str
    name: str
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass(frozen=True)
class Quota:
    code: str
    name: str


@dataclass(frozen=True)
class Class:
    """A travel class, e.g. ``SL`` or ``3A``, and whether it is offered."""

    code: str
    name: str
    available: bool


@dataclass(frozen=True)
class Day:
    code: str
    runs: bool


@dataclass(frozen=True)
class Train:
    number: Optional[int]
    name: str
    classes: Sequence[Class] = ()
    days: Sequence[Day] = ()


@dataclass(frozen=True)
class Available:
    """Seat availability on a single journey date."""

    status: str
    date: Optional[dt.date]


@dataclass(frozen=True)
class Passenger:
    number: int
    current_status: str
    booking_status: str


@dataclass(frozen=True)
class Route:
    """A stop on a train's path.

    Actual times and dates stay ``None`` until the train has reached or left
    the stop.
    """

    station: Optional[Station]
    status: Optional[str] = None
    day: Optional[int] = None
    number: Optional[int] = None
    halt: Optional[int] = None  # minutes
    distance: Optional[float] = None
    late_by_minutes: Optional[int] = None
    has_arrived: bool = False
    has_departed: bool = False
    scheduled_arrival: Optional[dt.time] = None
    scheduled_departure: Optional[dt.time] = None
    actual_arrival: Optional[dt.time] = None
    actual_departure: Optional[dt.time] = None
    scheduled_arrival_date: Optional[dt.date] = None
    actual_arrival_date: Optional[dt.date] = None


@dataclass(frozen=True)
class ExtendedTrain:
    """A train running between two stations, with its timings on that leg."""

    train: Train
    from_station: Optional[Station] = None
    to_station: Optional[Station] = None
    source_departure: Optional[dt.time] = None
    destination_arrival: Optional[dt.time] = None
    travel_duration: Optional[dt.timedelta] = None


@dataclass(frozen=True)
class TrainWithTimings:
    train: Train
    scheduled_arrival: Optional[dt.time] = None
    scheduled_departure: Optional[dt.time] = None
    actual_arrival: Optional[dt.time] = None
    actual_departure: Optional[dt.time] = None
    delay_arrival: Optional[dt.time] = None
    delay_departure: Optional[dt.time] = None


@dataclass(frozen=True)
class TrainSemi:
    """A cancelled train service."""

    train: Train
    source: Optional[Station] = None
    destination: Optional[Station] = None
    type: Optional[str] = None
    start_date: Optional[dt.date] = None


@dataclass(frozen=True)
class RescheduledTrain:
    train: Train
    from_station: Optional[Station] = None
    to_station: Optional[Station] = None
    rescheduled_date: Optional[dt.date] = None
    rescheduled_time: Optional[dt.time] = None
    time_difference: Optional[dt.timedelta] = None


@dataclass(frozen=True)
class ResponseEnvelope:
    """Accounting fields sent with every API response."""

    debit: Optional[int] = None
    response_code: Optional[int] = None


@dataclass(frozen=True)
class PNRStatusResponse(ResponseEnvelope):
    pnr: Optional[int] = None
    chart_prepared: Optional[bool] = None
    date_of_journey: Optional[dt.date] = None
    boarding_point: Optional[Station] = None
    from_station: Optional[Station] = None
    to_station: Optional[Station] = None
    reservation_upto: Optional[Station] = None
    total_passengers: Optional[int] = None
    journey_class: Optional[Class] = None
    train: Optional[Train] = None
    passengers: Sequence[Passenger] = field(default_factory=list)


@dataclass(frozen=True)
class CheckSeatResponse(ResponseEnvelope):
    train: Optional[Train] = None
    from_station: Optional[Station] = None
    to_station: Optional[Station] = None
    quota: Optional[Quota] = None
    journey_class: Optional[Class] = None
    availability: Sequence[Available] = field(default_factory=list)


@dataclass(frozen=True)
class LiveTrainStatusResponse(ResponseEnvelope):
    train: Optional[Train] = None
    current_station: Optional[Station] = None
    route: Sequence[Route] = field(default_factory=list)
    start_date: Optional[dt.date] = None
    position: Optional[str] = None


@dataclass(frozen=True)
class TrainRouteResponse(ResponseEnvelope):
    train: Optional[Train] = None
    route: Sequence[Route] = field(default_factory=list)


@dataclass(frozen=True)
class TrainFareResponse(ResponseEnvelope):
    train: Optional[Train] = None
    from_station: Optional[Station] = None
    to_station: Optional[Station] = None
    quota: Optional[Quota] = None
    journey_class: Optional[Class] = None
    fare: Optional[float] = None
    availability: Sequence[Available] = field(default_factory=list)


@dataclass(frozen=True)
class TrainBetweenStationsResponse(ResponseEnvelope):
    trains: Sequence[ExtendedTrain] = field(default_factory=list)
    total: Optional[int] = None


@dataclass(frozen=True)
class TrainArrivalsResponse(ResponseEnvelope):
    trains: Sequence[TrainWithTimings] = field(default_factory=list)
    total: Optional[int] = None


@dataclass(frozen=True)
class StationsResponse(ResponseEnvelope):
    stations: Sequence[Station] = field(default_factory=list)


@dataclass(frozen=True)
class TrainResponse(ResponseEnvelope):
    train: Optional[Train] = None


@dataclass(frozen=True)
class TrainsResponse(ResponseEnvelope):
    trains: Sequence[Train] = field(default_factory=list)


@dataclass(frozen=True)
class CancelledTrainsResponse(ResponseEnvelope):
    trains: Sequence[TrainSemi] = field(default_factory=list)
    total: Optional[int] = None


@dataclass(frozen=True)
class RescheduledTrainsResponse(ResponseEnvelope):
    trains: Sequence[RescheduledTrain] = field(default_factory=list)
