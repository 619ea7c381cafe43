from __future__ import annotations

import datetime as dt
from typing import Optional

from .models import (
    CancelledTrainsResponse,
    LiveTrainStatusResponse,
    PNRStatusResponse,
    RescheduledTrainsResponse,
    Route,
    Station,
    StationsResponse,
    Train,
    TrainArrivalsResponse,
    TrainBetweenStationsResponse,
    TrainResponse,
    TrainRouteResponse,
)


def format_pnr_status(resp: PNRStatusResponse) -> str:
    """Render a PNR status summary."""

    lines = [f"PNR {resp.pnr or '?'}: {_format_train(resp.train)}"]
    journey = f"{_station_label(resp.from_station)} ➜ {_station_label(resp.to_station)}"
    lines.append(f"{journey} on {_format_date(resp.date_of_journey)}")
    if resp.journey_class:
        lines.append(f"Class: {resp.journey_class.name or resp.journey_class.code}")
    lines.append("Chart prepared" if resp.chart_prepared else "Chart not prepared")

    if not resp.passengers:
        lines.append("No passenger details available.")
    for passenger in resp.passengers:
        lines.append(
            f"{passenger.number}. {passenger.current_status} (booked {passenger.booking_status})"
        )
    return "\n".join(lines)


def format_live_status(resp: LiveTrainStatusResponse) -> str:
    """Render the live running status of a train."""

    header = f"{_format_train(resp.train)} started {_format_date(resp.start_date)}"
    lines = [header]
    if resp.position:
        lines.append(resp.position)
    if resp.current_station:
        lines.append(f"Current station: {_station_label(resp.current_station)}")
    lines.extend(_format_stop(stop) for stop in resp.route)
    return "\n".join(lines)


def format_route(resp: TrainRouteResponse) -> str:
    lines = [_format_train(resp.train)]
    lines.extend(_format_stop(stop) for stop in resp.route)
    return "\n".join(lines)


def format_trains_between(resp: TrainBetweenStationsResponse) -> str:
    if not resp.trains:
        return "No trains found between those stations."

    lines = []
    for idx, item in enumerate(resp.trains, start=1):
        duration = _format_duration(item.travel_duration)
        lines.append(
            f"{idx}. {_format_train(item.train)}: "
            f"{_format_time(item.source_departure)} ➜ {_format_time(item.destination_arrival)}"
            f" ({duration})"
        )
    return "\n".join(lines)


def format_arrivals(resp: TrainArrivalsResponse) -> str:
    if not resp.trains:
        return "No trains arriving in that window."

    lines = []
    for item in resp.trains:
        timing = f"Due {_format_time(item.scheduled_arrival)}"
        if item.actual_arrival and item.actual_arrival != item.scheduled_arrival:
            timing += f" (exp. {_format_time(item.actual_arrival)})"
        if item.delay_arrival is not None and item.delay_arrival != dt.time(0, 0):
            timing += f", late by {_format_time(item.delay_arrival)}"
        lines.append(f"{_format_train(item.train)}: {timing}")
    return "\n".join(lines)


def format_stations(resp: StationsResponse) -> str:
    if not resp.stations:
        return "No stations found for that search term."
    return "\n".join(f"{station.name} — {station.code}" for station in resp.stations)


def format_train(resp: TrainResponse) -> str:
    if resp.train is None:
        return "No matching train found."

    train = resp.train
    running = [day.code for day in train.days if day.runs]
    classes = [cls.code for cls in train.classes if cls.available]
    return "\n".join(
        [
            _format_train(train),
            "Runs on: " + (", ".join(running) or "unknown"),
            "Classes: " + (", ".join(classes) or "unknown"),
        ]
    )


def format_cancelled(resp: CancelledTrainsResponse) -> str:
    if not resp.trains:
        return "No cancelled trains."
    return "\n".join(
        f"{_format_train(item.train)} from {_station_label(item.source)}"
        f" started {_format_date(item.start_date)}"
        for item in resp.trains
    )


def format_rescheduled(resp: RescheduledTrainsResponse) -> str:
    if not resp.trains:
        return "No rescheduled trains."
    return "\n".join(
        f"{_format_train(item.train)}: now {_format_date(item.rescheduled_date)}"
        f" {_format_time(item.rescheduled_time)} ({_format_duration(item.time_difference)} late)"
        for item in resp.trains
    )


def _format_stop(stop: Route) -> str:
    station = _station_label(stop.station)
    arrival = _format_time(stop.scheduled_arrival)
    departure = _format_time(stop.scheduled_departure)
    line = f"- {station}: arr {arrival}, dep {departure}"
    if stop.actual_arrival:
        line += f" (arrived {_format_time(stop.actual_arrival)})"
    if stop.late_by_minutes:
        line += f", {stop.late_by_minutes} min late"
    return line


def _format_train(train: Optional[Train]) -> str:
    if train is None:
        return "Unknown train"
    return f"{train.number or '?'} {train.name}".strip()


def _station_label(station: Optional[Station]) -> str:
    if station is None:
        return "Unknown"
    return f"{station.name} ({station.code})"


def _format_time(value: Optional[dt.time]) -> str:
    return value.strftime("%H:%M") if value else "--:--"


def _format_date(value: Optional[dt.date]) -> str:
    return value.strftime("%d %b %Y") if value else "unknown date"


def _format_duration(value: Optional[dt.timedelta]) -> str:
    if value is None:
        return "duration unknown"
    minutes = int(value.total_seconds()) // 60
    sign = "-" if minutes < 0 else ""
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours}h{minutes:02d}m"

