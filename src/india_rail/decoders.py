"""Decoders turning raw API JSON objects into typed, immutable results.

Every decoder takes the mapping for one JSON object. Plain fields are copied
across, textual dates, times, durations and ``Y``/``N`` flags go through the
matching normalizer in :mod:`india_rail.formats`. A blank optional field
stays ``None``; a present field in the wrong shape aborts the whole decode.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .errors import DecodeError, FormatError
from .formats import (
    DateLayout,
    parse_calendar_date,
    parse_clock_time,
    parse_duration,
    parse_yes_no,
)
from .models import (
    Available,
    CancelledTrainsResponse,
    CheckSeatResponse,
    Class,
    Day,
    ExtendedTrain,
    LiveTrainStatusResponse,
    Passenger,
    PNRStatusResponse,
    Quota,
    RescheduledTrain,
    RescheduledTrainsResponse,
    Route,
    Station,
    StationsResponse,
    Train,
    TrainArrivalsResponse,
    TrainBetweenStationsResponse,
    TrainFareResponse,
    TrainResponse,
    TrainRouteResponse,
    TrainSemi,
    TrainsResponse,
    TrainWithTimings,
)

T = TypeVar("T")
Payload = Mapping[str, Any]
Decoder = Callable[[Payload], T]


def decode_body(body: Union[str, bytes], decoder: Decoder[T]) -> T:
    """Decode a raw JSON response body with the given entity decoder."""

    try:
        payload = json.loads(body)
    except ValueError as exc:
        snippet = body[:200] if body else "<empty body>"
        raise DecodeError(f"response body is not valid JSON: {snippet!r}") from exc
    return decoder(_ensure_object(payload, "response body"))


# Entities


def decode_station(data: Payload) -> Station:
    return Station(
        code=_text(data, "code"),
        name=_text(data, "name"),
        latitude=_float(data, "lat") or 0.0,
        longitude=_float(data, "lng") or 0.0,
    )


def decode_quota(data: Payload) -> Quota:
    return Quota(code=_text(data, "code"), name=_text(data, "name"))


def decode_class(data: Payload) -> Class:
    return Class(
        code=_text(data, "code"),
        name=_text(data, "name"),
        available=parse_yes_no(_text(data, "available")),
    )


def decode_day(data: Payload) -> Day:
    return Day(code=_text(data, "code"), runs=parse_yes_no(_text(data, "runs")))


def decode_train(data: Payload) -> Train:
    return Train(
        number=_string_int(data, "number"),
        name=_text(data, "name"),
        classes=_list(data, "classes", decode_class),
        days=_list(data, "days", decode_day),
    )


def decode_available(data: Payload) -> Available:
    return Available(
        status=_text(data, "status"),
        date=_date(data, "date", "date", DateLayout.SHORT_NUMERIC),
    )


def decode_passenger(data: Payload) -> Passenger:
    return Passenger(
        number=_int(data, "no") or 0,
        current_status=_text(data, "current_status"),
        booking_status=_text(data, "booking_status"),
    )


def decode_route(data: Payload) -> Route:
    return Route(
        station=_nested(data, "station", decode_station),
        status=_str(data, "status"),
        day=_int(data, "day"),
        number=_int(data, "no"),
        halt=_int(data, "halt"),
        distance=_float(data, "distance"),
        late_by_minutes=_int(data, "latemin"),
        has_arrived=bool(_bool(data, "has_arrived")),
        has_departed=bool(_bool(data, "has_departed")),
        scheduled_arrival=_clock(data, "scharr", "scheduled_arrival"),
        scheduled_departure=_clock(data, "schdep", "scheduled_departure"),
        actual_arrival=_clock(data, "actarr", "actual_arrival"),
        actual_departure=_clock(data, "actdep", "actual_departure"),
        scheduled_arrival_date=_date(
            data, "scharr_date", "scheduled_arrival_date", DateLayout.NAMED_MONTH
        ),
        actual_arrival_date=_date(
            data, "actarr_date", "actual_arrival_date", DateLayout.NAMED_MONTH
        ),
    )


def decode_extended_train(data: Payload) -> ExtendedTrain:
    return ExtendedTrain(
        train=decode_train(data),
        from_station=_nested(data, "from_station", decode_station),
        to_station=_nested(data, "to_station", decode_station),
        source_departure=_clock(data, "src_departure_time", "source_departure"),
        destination_arrival=_clock(data, "dest_arrival_time", "destination_arrival"),
        travel_duration=_duration(data, "travel_time", "travel_duration"),
    )


def decode_train_with_timings(data: Payload) -> TrainWithTimings:
    return TrainWithTimings(
        train=decode_train(data),
        scheduled_arrival=_clock(data, "scharr", "scheduled_arrival"),
        scheduled_departure=_clock(data, "schdep", "scheduled_departure"),
        actual_arrival=_clock(data, "actarr", "actual_arrival"),
        actual_departure=_clock(data, "actdep", "actual_departure"),
        delay_arrival=_clock(data, "delayarr", "delay_arrival"),
        delay_departure=_clock(data, "delaydep", "delay_departure"),
    )


def decode_train_semi(data: Payload) -> TrainSemi:
    return TrainSemi(
        train=decode_train(data),
        source=_nested(data, "source", decode_station),
        destination=_nested(data, "dest", decode_station),
        type=_str(data, "type"),
        start_date=_date(data, "start_time", "start_date", DateLayout.NAMED_MONTH),
    )


def decode_rescheduled_train(data: Payload) -> RescheduledTrain:
    return RescheduledTrain(
        train=decode_train(data),
        from_station=_nested(data, "from_station", decode_station),
        to_station=_nested(data, "to_station", decode_station),
        rescheduled_date=_date(
            data, "rescheduled_date", "rescheduled_date", DateLayout.NUMERIC
        ),
        rescheduled_time=_clock(data, "rescheduled_time", "rescheduled_time"),
        time_difference=_duration(data, "time_diff", "time_difference"),
    )


# Responses


def decode_pnr_status(data: Payload) -> PNRStatusResponse:
    return PNRStatusResponse(
        pnr=_string_int(data, "pnr"),
        chart_prepared=_bool(data, "chart_prepared"),
        date_of_journey=_date(data, "doj", "date_of_journey", DateLayout.NUMERIC),
        boarding_point=_nested(data, "boarding_point", decode_station),
        from_station=_nested(data, "from_station", decode_station),
        to_station=_nested(data, "to_station", decode_station),
        reservation_upto=_nested(data, "reservation_upto", decode_station),
        total_passengers=_int(data, "total_passengers"),
        journey_class=_nested(data, "journey_class", decode_class),
        train=_nested(data, "train", decode_train),
        passengers=_list(data, "passengers", decode_passenger),
        **_envelope(data),
    )


def decode_check_seat(data: Payload) -> CheckSeatResponse:
    return CheckSeatResponse(
        train=_nested(data, "train", decode_train),
        from_station=_nested(data, "from_station", decode_station),
        to_station=_nested(data, "to_station", decode_station),
        quota=_nested(data, "quota", decode_quota),
        journey_class=_nested(data, "journey_class", decode_class),
        availability=_list(data, "availability", decode_available),
        **_envelope(data),
    )


def decode_live_train_status(data: Payload) -> LiveTrainStatusResponse:
    return LiveTrainStatusResponse(
        train=_nested(data, "train", decode_train),
        current_station=_nested(data, "current_station", decode_station),
        route=_list(data, "route", decode_route),
        start_date=_date(data, "start_date", "start_date", DateLayout.NAMED_MONTH),
        position=_str(data, "position"),
        **_envelope(data),
    )


def decode_train_route(data: Payload) -> TrainRouteResponse:
    return TrainRouteResponse(
        train=_nested(data, "train", decode_train),
        route=_list(data, "route", decode_route),
        **_envelope(data),
    )


def decode_train_fare(data: Payload) -> TrainFareResponse:
    return TrainFareResponse(
        train=_nested(data, "train", decode_train),
        from_station=_nested(data, "from_station", decode_station),
        to_station=_nested(data, "to_station", decode_station),
        quota=_nested(data, "quota", decode_quota),
        journey_class=_nested(data, "journey_class", decode_class),
        fare=_float(data, "fare"),
        availability=_list(data, "availability", decode_available),
        **_envelope(data),
    )


def decode_trains_between_stations(data: Payload) -> TrainBetweenStationsResponse:
    return TrainBetweenStationsResponse(
        trains=_list(data, "trains", decode_extended_train),
        total=_int(data, "total"),
        **_envelope(data),
    )


def decode_train_arrivals(data: Payload) -> TrainArrivalsResponse:
    return TrainArrivalsResponse(
        trains=_list(data, "trains", decode_train_with_timings),
        total=_int(data, "total"),
        **_envelope(data),
    )


def decode_stations(data: Payload) -> StationsResponse:
    return StationsResponse(
        stations=_list(data, "stations", decode_station),
        **_envelope(data),
    )


def decode_train_response(data: Payload) -> TrainResponse:
    return TrainResponse(train=_nested(data, "train", decode_train), **_envelope(data))


def decode_trains(data: Payload) -> TrainsResponse:
    return TrainsResponse(trains=_list(data, "trains", decode_train), **_envelope(data))


def decode_cancelled_trains(data: Payload) -> CancelledTrainsResponse:
    return CancelledTrainsResponse(
        trains=_list(data, "trains", decode_train_semi),
        total=_int(data, "total"),
        **_envelope(data),
    )


def decode_rescheduled_trains(data: Payload) -> RescheduledTrainsResponse:
    return RescheduledTrainsResponse(
        trains=_list(data, "trains", decode_rescheduled_train),
        **_envelope(data),
    )


# Field helpers


def _envelope(data: Payload) -> dict[str, Optional[int]]:
    return {"debit": _int(data, "debit"), "response_code": _int(data, "response_code")}


def _clock(data: Payload, key: str, field: str):
    text = _text(data, key)
    # Placeholders such as "SOURCE" mean no time; digits of the wrong size are a bad time.
    if len(text) != 5 and any(ch.isdigit() for ch in text):
        raise FormatError(text, "HH:MM", field=field, key=key)
    return parse_clock_time(text, field=field, key=key)


def _date(data: Payload, key: str, field: str, layout: DateLayout):
    return parse_calendar_date(_text(data, key), layout, field=field, key=key)


def _duration(data: Payload, key: str, field: str):
    return parse_duration(_text(data, key), field=field, key=key)


def _ensure_object(value: Any, what: str) -> Payload:
    if not isinstance(value, Mapping):
        raise DecodeError(f"expected a JSON object for {what}, got {type(value).__name__}")
    return value


def _nested(data: Payload, key: str, decoder: Decoder[T]) -> Optional[T]:
    value = data.get(key)
    if value is None:
        return None
    return decoder(_ensure_object(value, key))


def _list(data: Payload, key: str, decoder: Decoder[T]) -> list[T]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"expected a JSON array for {key}, got {type(value).__name__}")
    return [decoder(_ensure_object(item, key)) for item in value]


def _text(data: Payload, key: str) -> str:
    return _str(data, key) or ""


def _str(data: Payload, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(f"expected a string for {key}, got {value!r}")


def _bool(data: Payload, key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise DecodeError(f"expected a boolean for {key}, got {value!r}")


def _int(data: Payload, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise DecodeError(f"expected an integer for {key}, got {value!r}")


def _string_int(data: Payload, key: str) -> Optional[int]:
    """Read an integer the API sends as a JSON string, e.g. ``"14311"``."""

    value = data.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value)
    raise DecodeError(f"expected a numeric string for {key}, got {value!r}")


def _float(data: Payload, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise DecodeError(f"expected a number for {key}, got {value!r}")
