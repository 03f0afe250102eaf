from unittest.mock import Mock

import pytest
import requests
from rest_framework.test import APIClient

from campus_nav.places.models import Place
from campus_nav.routes.models import Route
from campus_nav.routing.geocoding import GeocodingService


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def mapbox_token(settings):
    settings.MAPBOX_ACCESS_TOKEN = "pk.test-token"
    return settings.MAPBOX_ACCESS_TOKEN


@pytest.fixture
def no_mapbox_token(settings):
    settings.MAPBOX_ACCESS_TOKEN = ""


@pytest.fixture
def weather_key(settings):
    settings.OPENWEATHER_API_KEY = "owm-test-key"
    return settings.OPENWEATHER_API_KEY


@pytest.fixture
def make_place(db):
    def factory(name="NIT Warangal Library", **kwargs):
        fields = {
            "description": "Central library",
            "category": "library",
            "latitude": 17.9840,
            "longitude": 79.5310,
        }
        fields.update(kwargs)
        return Place.objects.create(name=name, **fields)

    return factory


@pytest.fixture
def make_route(db):
    def factory(name="Library Walk", waypoints=None, **kwargs):
        if waypoints is None:
            waypoints = [
                {"latitude": 17.99, "longitude": 79.54, "name": "Gate", "order": 0},
                {"latitude": 17.98, "longitude": 79.53, "name": "Library", "order": 1},
            ]
        return Route.objects.create(name=name, waypoints=waypoints, **kwargs)

    return factory


@pytest.fixture
def geocoded():
    def factory(lat, lng, address="Somewhere, Warangal"):
        return Mock(latitude=lat, longitude=lng, address=address, raw={"address": {"city": "Warangal"}})

    return factory


@pytest.fixture
def geolocator():
    return Mock()


@pytest.fixture
def sleeper():
    return Mock()


@pytest.fixture
def geocoder(geolocator, sleeper):
    return GeocodingService(min_delay=1.0, geolocator=geolocator, sleep=sleeper)


@pytest.fixture
def http_response():
    def factory(payload, status_code=200):
        resp = Mock(status_code=status_code)
        resp.json.return_value = payload
        if status_code >= 400:
            resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
        else:
            resp.raise_for_status.return_value = None
        return resp

    return factory
