import datetime as dt
import json

import pytest

from india_rail.decoders import (
    decode_available,
    decode_body,
    decode_cancelled_trains,
    decode_check_seat,
    decode_class,
    decode_day,
    decode_extended_train,
    decode_live_train_status,
    decode_pnr_status,
    decode_rescheduled_train,
    decode_route,
    decode_station,
    decode_stations,
    decode_train,
    decode_train_fare,
    decode_train_route,
    decode_train_semi,
    decode_train_with_timings,
    decode_trains,
)
from india_rail.errors import DecodeError, FormatError
from india_rail.models import Station


class TestSmallEntities:
    def test_station(self, station_payload):
        assert decode_station(station_payload) == Station(
            code="NDLS", name="NEW DELHI", latitude=28.6430, longitude=77.2192
        )

    def test_station_with_null_coordinates(self):
        station = decode_station({"code": "BE", "name": "BAREILLY", "lat": None, "lng": None})
        assert (station.latitude, station.longitude) == (0.0, 0.0)

    def test_class_and_day_flags(self):
        assert decode_class({"code": "SL", "name": "SLEEPER", "available": "Y"}).available is True
        assert decode_class({"code": "SL", "name": "SLEEPER", "available": "N"}).available is False
        assert decode_class({"code": "SL", "name": "SLEEPER"}).available is False
        assert decode_day({"code": "SUN", "runs": "Y"}).runs is True
        assert decode_day({"code": "SUN", "runs": "x"}).runs is False

    def test_train(self, train_payload):
        train = decode_train(train_payload)

        assert train.number == 12138
        assert train.name == "PUNJAB MAIL"
        assert [c.code for c in train.classes] == ["SL", "1A"]
        assert [d.runs for d in train.days] == [True, False]

    def test_train_number_must_be_numeric(self):
        with pytest.raises(DecodeError):
            decode_train({"number": "12a38", "name": "X"})

    def test_train_number_rejects_non_ascii_digits(self):
        with pytest.raises(DecodeError):
            decode_train({"number": "\u00b2", "name": "X"})
        with pytest.raises(DecodeError):
            decode_pnr_status({"pnr": "\u0661\u0662"})

    def test_available_uses_short_numeric_dates(self):
        available = decode_available({"status": "AVAILABLE 12", "date": "5-4-2018"})
        assert available.date == dt.date(2018, 4, 5)

    def test_available_with_blank_date(self):
        assert decode_available({"status": "NOT AVAILABLE", "date": ""}).date is None


class TestRoute:
    def test_blank_scheduled_arrival_is_absent(self):
        route = decode_route({"scharr": "", "schdep": "08:25"})

        assert route.scheduled_arrival is None
        assert route.scheduled_departure == dt.time(8, 25)

    def test_placeholder_text_is_absent(self):
        route = decode_route({"scharr": "SOURCE", "schdep": "Destination"})

        assert route.scheduled_arrival is None
        assert route.scheduled_departure is None

    def test_malformed_scheduled_arrival_names_the_field(self):
        with pytest.raises(FormatError) as excinfo:
            decode_route({"scharr": "9AM"})

        assert excinfo.value.field == "scheduled_arrival"
        assert excinfo.value.key == "scharr"
        assert excinfo.value.value == "9AM"

    def test_full_stop(self, station_payload):
        route = decode_route(
            {
                "no": 4,
                "station": station_payload,
                "scharr": "10:05",
                "schdep": "10:10",
                "actarr": "10:20",
                "actdep": "10:25",
                "scharr_date": "5 Apr 2018",
                "actarr_date": "6 Apr 2018",
                "has_arrived": True,
                "has_departed": True,
                "status": "15 mins late",
                "latemin": 15,
                "distance": 112.5,
                "day": 1,
                "halt": 5,
            }
        )

        assert route.number == 4
        assert route.station.code == "NDLS"
        assert route.actual_arrival == dt.time(10, 20)
        assert route.actual_departure == dt.time(10, 25)
        assert route.scheduled_arrival_date == dt.date(2018, 4, 5)
        assert route.actual_arrival_date == dt.date(2018, 4, 6)
        assert route.has_arrived and route.has_departed
        assert route.late_by_minutes == 15
        assert route.distance == 112.5
        assert route.halt == 5

    def test_route_dates_use_named_month_layout(self):
        with pytest.raises(FormatError) as excinfo:
            decode_route({"scharr_date": "05-04-2018"})
        assert excinfo.value.field == "scheduled_arrival_date"


class TestTrainShapes:
    def test_extended_train(self, train_payload, station_payload):
        payload = dict(
            train_payload,
            from_station=station_payload,
            to_station=station_payload,
            src_departure_time="21:15",
            dest_arrival_time="19:10",
            travel_time="21:55",
        )

        extended = decode_extended_train(payload)

        assert extended.train.number == 12138
        assert extended.source_departure == dt.time(21, 15)
        assert extended.destination_arrival == dt.time(19, 10)
        assert extended.travel_duration == dt.timedelta(hours=21, minutes=55)

    def test_extended_train_with_bad_travel_time(self, train_payload):
        with pytest.raises(FormatError) as excinfo:
            decode_extended_train(dict(train_payload, travel_time="xx:yy"))
        assert excinfo.value.field == "travel_duration"

    def test_train_with_timings(self, train_payload):
        timings = decode_train_with_timings(
            dict(
                train_payload,
                scharr="10:00",
                schdep="10:05",
                actarr="10:30",
                actdep="",
                delayarr="00:30",
                delaydep="",
            )
        )

        assert timings.scheduled_arrival == dt.time(10, 0)
        assert timings.actual_arrival == dt.time(10, 30)
        assert timings.actual_departure is None
        assert timings.delay_arrival == dt.time(0, 30)
        assert timings.delay_departure is None

    def test_cancelled_train(self, train_payload, station_payload):
        semi = decode_train_semi(
            dict(
                train_payload,
                source=station_payload,
                dest=station_payload,
                type="MAIL",
                start_time="5 Apr 2018",
            )
        )

        assert semi.start_date == dt.date(2018, 4, 5)
        assert semi.type == "MAIL"
        assert semi.destination.code == "NDLS"

    def test_rescheduled_train(self, train_payload):
        rescheduled = decode_rescheduled_train(
            dict(
                train_payload,
                rescheduled_date="05-04-2018",
                rescheduled_time="14:45",
                time_diff="02:30",
            )
        )

        assert rescheduled.rescheduled_date == dt.date(2018, 4, 5)
        assert rescheduled.rescheduled_time == dt.time(14, 45)
        assert rescheduled.time_difference == dt.timedelta(hours=2, minutes=30)

    def test_rescheduled_date_uses_numeric_layout(self, train_payload):
        with pytest.raises(FormatError) as excinfo:
            decode_rescheduled_train(dict(train_payload, rescheduled_date="5 Apr 2018"))
        assert excinfo.value.field == "rescheduled_date"


class TestResponses:
    def test_pnr_status(self, pnr_payload):
        resp = decode_pnr_status(pnr_payload)

        assert resp.date_of_journey == dt.date(2018, 4, 5)
        assert resp.pnr == 2144287856
        assert resp.chart_prepared is False
        assert resp.total_passengers == 2
        assert [p.number for p in resp.passengers] == [1, 2]
        assert [p.current_status for p in resp.passengers] == ["CNF", "RAC 4"]
        assert resp.reservation_upto.code == "CSMT"
        assert resp.debit == 3
        assert resp.response_code == 200

    def test_pnr_status_with_blank_journey_date(self, pnr_payload):
        resp = decode_pnr_status(dict(pnr_payload, doj=""))
        assert resp.date_of_journey is None

    def test_pnr_status_with_bad_journey_date_aborts(self, pnr_payload):
        with pytest.raises(FormatError) as excinfo:
            decode_pnr_status(dict(pnr_payload, doj="5 Apr 2018"))
        assert excinfo.value.field == "date_of_journey"

    def test_live_train_status(self, live_status_payload):
        resp = decode_live_train_status(live_status_payload)

        assert resp.start_date == dt.date(2018, 4, 5)
        assert len(resp.route) == 1
        assert resp.route[0].scheduled_arrival == dt.time(8, 10)
        assert resp.route[0].actual_arrival is None
        assert resp.route[0].actual_arrival_date is None
        assert resp.current_station.code == "NDLS"
        assert resp.position.startswith("Train has reached")

    def test_live_train_status_error_in_route_aborts(self, live_status_payload):
        live_status_payload["route"].append({"scharr": "08:1x"})

        with pytest.raises(FormatError):
            decode_live_train_status(live_status_payload)

    def test_empty_response_keeps_defaults(self):
        resp = decode_live_train_status({"response_code": 404, "debit": 1})

        assert resp.train is None
        assert resp.route == []
        assert resp.start_date is None
        assert resp.response_code == 404

    def test_train_route(self, train_payload, live_status_payload):
        resp = decode_train_route(
            {"train": train_payload, "route": live_status_payload["route"], "response_code": 200}
        )
        assert resp.train.name == "PUNJAB MAIL"
        assert resp.route[0].halt == 15

    def test_check_seat_and_fare(self, train_payload, station_payload):
        payload = {
            "train": train_payload,
            "from_station": station_payload,
            "to_station": station_payload,
            "quota": {"code": "GN", "name": "GENERAL QUOTA"},
            "journey_class": {"code": "SL", "name": "SLEEPER CLASS"},
            "availability": [
                {"status": "AVAILABLE 5", "date": "5-4-2018"},
                {"status": "GNWL10/WL5", "date": "6-4-2018"},
            ],
            "fare": 445,
            "response_code": 200,
        }

        seat = decode_check_seat(payload)
        fare = decode_train_fare(payload)

        assert [a.date for a in seat.availability] == [dt.date(2018, 4, 5), dt.date(2018, 4, 6)]
        assert seat.quota.code == "GN"
        assert fare.fare == 445.0

    def test_stations_and_trains(self, station_payload, train_payload):
        stations = decode_stations({"stations": [station_payload, station_payload]})
        trains = decode_trains({"trains": [train_payload]})

        assert len(stations.stations) == 2
        assert trains.trains[0].number == 12138

    def test_cancelled_trains(self, train_payload):
        resp = decode_cancelled_trains(
            {"trains": [dict(train_payload, start_time="5 Apr 2018")], "total": 1}
        )
        assert resp.total == 1
        assert resp.trains[0].start_date == dt.date(2018, 4, 5)

    def test_list_field_must_be_an_array(self):
        with pytest.raises(DecodeError):
            decode_train_route({"route": {"scharr": "08:00"}})


class TestDecodeBody:
    def test_live_status_end_to_end(self):
        body = json.dumps(
            {"start_date": "5 Apr 2018", "route": [{"scharr": "08:10", "actarr": ""}]}
        )

        resp = decode_body(body, decode_live_train_status)

        assert resp.start_date == dt.date(2018, 4, 5)
        assert len(resp.route) == 1
        assert resp.route[0].scheduled_arrival == dt.time(8, 10)
        assert resp.route[0].actual_arrival is None

    def test_bytes_body(self, pnr_payload):
        resp = decode_body(json.dumps(pnr_payload).encode(), decode_pnr_status)
        assert len(resp.passengers) == len(pnr_payload["passengers"])

    @pytest.mark.parametrize("body", ["Boom", "", "[1, 2]"])
    def test_invalid_body(self, body):
        with pytest.raises(DecodeError):
            decode_body(body, decode_pnr_status)
