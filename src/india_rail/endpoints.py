from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Any, ClassVar, Optional
from urllib.parse import quote

from .errors import ValidationError
from .formats import format_request_date


class WindowHour(IntEnum):
    """Search window accepted by the station arrivals endpoint."""

    TWO = 2
    FOUR = 4


@dataclass(frozen=True)
class ApiRequest:
    """A fully rendered, unauthenticated API call."""

    method: str
    path: str


class EndpointRequest:
    """Base for request parameter objects.

    Subclasses are frozen dataclasses whose fields are all required, and
    render them into a path in the endpoint's fixed order.
    """

    prefix: ClassVar[str] = ""

    def validate(self) -> None:
        missing = [f.name for f in fields(self) if _is_missing(getattr(self, f.name))]
        if missing:
            raise ValidationError(type(self).__name__, missing)

    def build(self) -> ApiRequest:
        self.validate()
        return ApiRequest(method="GET", path=self.prefix + self._path())

    def _path(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class PNRStatusRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/pnr-status"

    pnr_number: int

    def _path(self) -> str:
        return f"/pnr/{self.pnr_number}"


@dataclass(frozen=True)
class LiveTrainStatusRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/live"

    train_number: int
    date: dt.date

    def _path(self) -> str:
        return f"/train/{self.train_number}/date/{format_request_date(self.date)}"


@dataclass(frozen=True)
class TrainRouteRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/route"

    train_number: int

    def _path(self) -> str:
        return f"/train/{self.train_number}"


@dataclass(frozen=True)
class CheckSeatRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/check-seat"

    train_number: int
    from_station_code: str
    to_station_code: str
    date: dt.date
    travel_class: str  # e.g. SL, 3A, 2S
    quota: str  # e.g. GN, TQ

    def _path(self) -> str:
        return (
            f"/train/{self.train_number}"
            f"/source/{_segment(self.from_station_code)}"
            f"/dest/{_segment(self.to_station_code)}"
            f"/date/{format_request_date(self.date)}"
            f"/pref/{_segment(self.travel_class)}"
            f"/quota/{_segment(self.quota)}"
        )


@dataclass(frozen=True)
class TrainFareRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/fare"

    train_number: int
    from_station_code: str
    to_station_code: str
    age: int
    travel_class: str
    quota: str
    date: dt.date

    def _path(self) -> str:
        return (
            f"/train/{self.train_number}"
            f"/source/{_segment(self.from_station_code)}"
            f"/dest/{_segment(self.to_station_code)}"
            f"/age/{self.age}"
            f"/pref/{_segment(self.travel_class)}"
            f"/quota/{_segment(self.quota)}"
            f"/date/{format_request_date(self.date)}"
        )


@dataclass(frozen=True)
class TrainBetweenStationsRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/between"

    from_station_code: str
    to_station_code: str
    date: dt.date

    def _path(self) -> str:
        return (
            f"/source/{_segment(self.from_station_code)}"
            f"/dest/{_segment(self.to_station_code)}"
            f"/date/{format_request_date(self.date)}"
        )


@dataclass(frozen=True)
class TrainArrivalsRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/arrivals"

    station_code: str
    hours: WindowHour

    def validate(self) -> None:
        super().validate()
        if self.hours not in tuple(WindowHour):
            raise ValidationError(type(self).__name__, ["hours (must be 2 or 4)"])

    def _path(self) -> str:
        return f"/station/{_segment(self.station_code)}/hours/{int(self.hours)}"


@dataclass(frozen=True)
class StationNameToCodeRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/name-to-code"

    station_name: str

    def _path(self) -> str:
        return f"/station/{_segment(self.station_name)}"


@dataclass(frozen=True)
class StationCodeToNameRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/code-to-name"

    station_code: str

    def _path(self) -> str:
        return f"/code/{_segment(self.station_code)}"


@dataclass(frozen=True)
class SuggestStationRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/suggest-station"

    station_name: str

    def _path(self) -> str:
        return f"/name/{_segment(self.station_name)}"


@dataclass(frozen=True)
class TrainByNumberRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/name-number"

    train_number: int

    def _path(self) -> str:
        return f"/train/{self.train_number}"


@dataclass(frozen=True)
class TrainByNameRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/name-number"

    train_name: str

    def _path(self) -> str:
        return f"/train/{_segment(self.train_name)}"


@dataclass(frozen=True)
class CancelledTrainsRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/cancelled"

    date: dt.date

    def _path(self) -> str:
        return f"/date/{format_request_date(self.date)}"


@dataclass(frozen=True)
class RescheduledTrainsRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/rescheduled"

    date: dt.date

    def _path(self) -> str:
        return f"/date/{format_request_date(self.date)}"


@dataclass(frozen=True)
class SuggestTrainByNameRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/suggest-train"

    train_name: str

    def _path(self) -> str:
        return f"/train/{_segment(self.train_name)}"


@dataclass(frozen=True)
class SuggestTrainByCodeRequest(EndpointRequest):
    prefix: ClassVar[str] = "/v2/suggest-train"

    train_code: int

    def _path(self) -> str:
        return f"/train/{self.train_code}"


def _is_missing(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, int) and value == 0)


def _segment(value: Optional[str]) -> str:
    return quote(str(value), safe="")
