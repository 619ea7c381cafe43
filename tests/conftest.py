"""Shared response payloads modelled on real railwayapi.com responses."""

import pytest

from india_rail.config import RailwaySettings


@pytest.fixture
def settings():
    return RailwaySettings(api_key="test-key", base_url="https://api.test")


@pytest.fixture
def station_payload():
    return {"code": "NDLS", "name": "NEW DELHI", "lat": 28.6430, "lng": 77.2192}


@pytest.fixture
def train_payload():
    return {
        "number": "12138",
        "name": "PUNJAB MAIL",
        "classes": [
            {"code": "SL", "name": "SLEEPER CLASS", "available": "Y"},
            {"code": "1A", "name": "FIRST AC", "available": "N"},
        ],
        "days": [
            {"code": "MON", "runs": "Y"},
            {"code": "TUE", "runs": "N"},
        ],
    }


@pytest.fixture
def pnr_payload(station_payload, train_payload):
    return {
        "response_code": 200,
        "debit": 3,
        "pnr": "2144287856",
        "doj": "05-04-2018",
        "chart_prepared": False,
        "total_passengers": 2,
        "boarding_point": station_payload,
        "from_station": station_payload,
        "to_station": {"code": "CSMT", "name": "MUMBAI CST", "lat": 18.94, "lng": 72.83},
        "reservation_upto": {"code": "CSMT", "name": "MUMBAI CST", "lat": 18.94, "lng": 72.83},
        "journey_class": {"code": "SL", "name": "SLEEPER CLASS"},
        "train": train_payload,
        "passengers": [
            {"no": 1, "current_status": "CNF", "booking_status": "S5,41,GN"},
            {"no": 2, "current_status": "RAC 4", "booking_status": "WL 12,GN"},
        ],
    }


@pytest.fixture
def live_status_payload(train_payload, station_payload):
    return {
        "response_code": 200,
        "debit": 1,
        "start_date": "5 Apr 2018",
        "position": "Train has reached Destination and late by 10 minutes.",
        "train": train_payload,
        "current_station": station_payload,
        "route": [
            {
                "no": 1,
                "station": station_payload,
                "scharr": "08:10",
                "schdep": "08:25",
                "actarr": "",
                "actdep": "",
                "scharr_date": "5 Apr 2018",
                "actarr_date": "",
                "has_arrived": False,
                "has_departed": False,
                "status": "",
                "latemin": 0,
                "distance": 0,
                "day": 1,
                "halt": 15,
            }
        ],
    }
