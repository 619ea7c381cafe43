from __future__ import annotations

import datetime as dt
import logging
import re
from http import HTTPStatus
from typing import Optional, TypeVar
from urllib.parse import quote

import httpx

from .config import RailwaySettings
from .decoders import (
    Decoder,
    decode_body,
    decode_cancelled_trains,
    decode_check_seat,
    decode_live_train_status,
    decode_pnr_status,
    decode_rescheduled_trains,
    decode_stations,
    decode_train_arrivals,
    decode_train_fare,
    decode_train_response,
    decode_train_route,
    decode_trains,
    decode_trains_between_stations,
)
from .endpoints import (
    CancelledTrainsRequest,
    CheckSeatRequest,
    EndpointRequest,
    LiveTrainStatusRequest,
    PNRStatusRequest,
    RescheduledTrainsRequest,
    StationCodeToNameRequest,
    StationNameToCodeRequest,
    SuggestStationRequest,
    SuggestTrainByCodeRequest,
    SuggestTrainByNameRequest,
    TrainArrivalsRequest,
    TrainBetweenStationsRequest,
    TrainByNameRequest,
    TrainByNumberRequest,
    TrainFareRequest,
    TrainRouteRequest,
    WindowHour,
)
from .errors import ApiStatusError, MissingApiKeyError, TransportError
from .models import (
    CancelledTrainsResponse,
    CheckSeatResponse,
    LiveTrainStatusResponse,
    PNRStatusResponse,
    RescheduledTrainsResponse,
    StationsResponse,
    TrainArrivalsResponse,
    TrainBetweenStationsResponse,
    TrainFareResponse,
    TrainResponse,
    TrainRouteResponse,
    TrainsResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_API_KEY_SEGMENT = re.compile(r"(/apikey/)[^/?#\s\"]+")


def _redact(text: str) -> str:
    return _API_KEY_SEGMENT.sub(r"\1***", text)


class _ApiKeyFilter(logging.Filter):
    """Masks the API key path segment in records from the HTTP libraries."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _redact(record.getMessage())
        record.args = ()
        return True


for _name in ("httpx", "httpcore"):
    logging.getLogger(_name).addFilter(_ApiKeyFilter())


class RailwayApiClient:
    """Async client for the railwayapi.com v2 REST API.

    Each call is independent, so one client may be shared by concurrent tasks.
    """

    def __init__(
        self,
        settings: RailwaySettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RailwayApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def execute(self, request: EndpointRequest, decoder: Decoder[T]) -> T:
        """Send a request and decode its JSON body with ``decoder``."""

        if not self._settings.api_key:
            raise MissingApiKeyError("no railwayapi.com API key configured")

        api_request = request.build()
        logger.debug("%s %s", api_request.method, api_request.path)

        api_key = quote(self._settings.api_key, safe="")
        path = f"{api_request.path.rstrip('/')}/apikey/{api_key}"
        try:
            response = await self._client.request(api_request.method, path)
        except httpx.HTTPError as exc:
            logger.warning("request to %s failed: %s", api_request.path, exc)
            raise TransportError(f"HTTP request to {api_request.path} failed: {exc}") from exc

        if response.status_code != HTTPStatus.OK:
            url = self._masked_url(response)
            logger.warning("request to %s returned %d", url, response.status_code)
            raise ApiStatusError(response.status_code, url, response.reason_phrase)

        return decode_body(response.content, decoder)

    async def pnr_status(self, pnr_number: int) -> PNRStatusResponse:
        """Get PNR status details."""

        return await self.execute(PNRStatusRequest(pnr_number), decode_pnr_status)

    async def live_train_status(
        self, train_number: int, date: dt.date
    ) -> LiveTrainStatusResponse:
        """Get the live running status of a train started on ``date``."""

        return await self.execute(
            LiveTrainStatusRequest(train_number, date), decode_live_train_status
        )

    async def train_route(self, train_number: int) -> TrainRouteResponse:
        """Get every station on the train's route."""

        return await self.execute(TrainRouteRequest(train_number), decode_train_route)

    async def check_seat(
        self,
        train_number: int,
        from_station_code: str,
        to_station_code: str,
        travel_class: str,
        quota: str,
        date: dt.date,
    ) -> CheckSeatResponse:
        """Get seat availability for a class and quota."""

        request = CheckSeatRequest(
            train_number=train_number,
            from_station_code=from_station_code,
            to_station_code=to_station_code,
            date=date,
            travel_class=travel_class,
            quota=quota,
        )
        return await self.execute(request, decode_check_seat)

    async def train_fare(
        self,
        train_number: int,
        from_station_code: str,
        to_station_code: str,
        age: int,
        travel_class: str,
        quota: str,
        date: dt.date,
    ) -> TrainFareResponse:
        request = TrainFareRequest(
            train_number=train_number,
            from_station_code=from_station_code,
            to_station_code=to_station_code,
            age=age,
            travel_class=travel_class,
            quota=quota,
            date=date,
        )
        return await self.execute(request, decode_train_fare)

    async def trains_between_stations(
        self, from_station_code: str, to_station_code: str, date: dt.date
    ) -> TrainBetweenStationsResponse:
        request = TrainBetweenStationsRequest(from_station_code, to_station_code, date)
        return await self.execute(request, decode_trains_between_stations)

    async def train_arrivals(
        self, station_code: str, hours: WindowHour = WindowHour.TWO
    ) -> TrainArrivalsResponse:
        """Get trains arriving at a station within the next two or four hours."""

        return await self.execute(
            TrainArrivalsRequest(station_code, hours), decode_train_arrivals
        )

    async def station_name_to_code(self, name: str) -> StationsResponse:
        """Get a station and its nearby stations from a partial name."""

        return await self.execute(StationNameToCodeRequest(name), decode_stations)

    async def station_code_to_name(self, code: str) -> StationsResponse:
        return await self.execute(StationCodeToNameRequest(code), decode_stations)

    async def suggest_station(self, name: str) -> StationsResponse:
        """Suggest full station names for a partial name."""

        return await self.execute(SuggestStationRequest(name), decode_stations)

    async def train_by_number(self, train_number: int) -> TrainResponse:
        return await self.execute(TrainByNumberRequest(train_number), decode_train_response)

    async def train_by_name(self, train_name: str) -> TrainResponse:
        return await self.execute(TrainByNameRequest(train_name), decode_train_response)

    async def cancelled_trains(self, date: dt.date) -> CancelledTrainsResponse:
        """List every train cancelled on ``date``."""

        return await self.execute(CancelledTrainsRequest(date), decode_cancelled_trains)

    async def rescheduled_trains(self, date: dt.date) -> RescheduledTrainsResponse:
        """List every train rescheduled on ``date``."""

        return await self.execute(RescheduledTrainsRequest(date), decode_rescheduled_trains)

    async def suggest_train_by_name(self, train_name: str) -> TrainsResponse:
        return await self.execute(SuggestTrainByNameRequest(train_name), decode_trains)

    async def suggest_train_by_code(self, train_code: int) -> TrainsResponse:
        return await self.execute(SuggestTrainByCodeRequest(train_code), decode_trains)

    def _masked_url(self, response: httpx.Response) -> str:
        return _redact(str(response.request.url))


def create_railway_client(settings: RailwaySettings) -> RailwayApiClient:
    """Factory helper to create a railwayapi.com client."""

    return RailwayApiClient(settings)
