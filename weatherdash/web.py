# ABOUTME: ASGI web entry point serving weather snapshots and saved locations as JSON.
# ABOUTME: Creates a Starlette app around fetch_weather, search_locations and a LocationStore.

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weatherdash.config import Settings
from weatherdash.deps import DashboardDeps, create_http_client
from weatherdash.errors import WeatherFetchError
from weatherdash.geocoding import search_locations
from weatherdash.locations import InMemoryLocationStore, LocationStore
from weatherdash.models import Coordinates, SavedLocation
from weatherdash.presenter import present
from weatherdash.weather_service import fetch_weather

logger = logging.getLogger(__name__)


def parse_coordinates(params) -> Coordinates:
    """Read lat/lon from a mapping, raising ValueError when missing or out of range."""
    try:
        latitude = float(params["lat"])
        longitude = float(params["lon"])
    except (KeyError, TypeError) as e:
        raise ValueError("lat and lon are required") from e
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise ValueError(f"Coordinates out of range: {latitude},{longitude}")
    return Coordinates(latitude=latitude, longitude=longitude)


def _dump(locations: list[SavedLocation]) -> list[dict]:
    return [location.model_dump(mode="json") for location in locations]


def create_app(deps: DashboardDeps, store: LocationStore) -> Starlette:
    """Build the Starlette app. Deps and store are closed over by the handlers."""

    async def weather(request: Request) -> JSONResponse:
        try:
            coords = parse_coordinates(request.query_params)
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        use_24_hour = request.query_params.get("clock", "24") != "12"
        fahrenheit = request.query_params.get("unit", "c").lower() == "f"

        try:
            snapshot = await fetch_weather(deps, coords.latitude, coords.longitude, use_24_hour)
        except WeatherFetchError as e:
            logger.exception("Weather fetch failed for %s,%s", coords.latitude, coords.longitude)
            return JSONResponse({"error": str(e)}, status_code=502)
        return JSONResponse({"snapshot": snapshot.model_dump(mode="json"), "display": present(snapshot, fahrenheit)})

    async def search(request: Request) -> JSONResponse:
        results = await search_locations(deps, request.query_params.get("q", ""))
        return JSONResponse({"results": _dump(results)})

    async def list_locations(request: Request) -> JSONResponse:
        return JSONResponse({"locations": _dump(store.get())})

    async def save_location(request: Request) -> JSONResponse:
        try:
            body = await request.json()
            location = SavedLocation(name=body["name"], coordinates=parse_coordinates(body))
        except (ValueError, KeyError, TypeError) as e:
            return JSONResponse({"error": f"Invalid location: {e}"}, status_code=400)
        return JSONResponse({"locations": _dump(store.put(location))}, status_code=201)

    async def delete_location(request: Request) -> JSONResponse:
        try:
            coords = parse_coordinates(request.query_params)
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        return JSONResponse({"locations": _dump(store.delete(coords))})

    return Starlette(
        routes=[
            Route("/api/weather", weather, methods=["GET"]),
            Route("/api/locations/search", search, methods=["GET"]),
            Route("/api/locations", list_locations, methods=["GET"]),
            Route("/api/locations", save_location, methods=["POST"]),
            Route("/api/locations", delete_location, methods=["DELETE"]),
        ]
    )


_settings = Settings.from_env()

app = create_app(
    DashboardDeps(http_client=create_http_client(_settings), settings=_settings),
    InMemoryLocationStore(),
)
