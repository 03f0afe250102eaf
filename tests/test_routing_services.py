from unittest.mock import Mock, patch

import pytest
import requests
from geopy.exc import GeocoderTimedOut

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError
from campus_nav.routing.directions import DirectionsService
from campus_nav.routing.formatting import format_distance, format_duration
from campus_nav.routing.geo import Bounds, grid_points, haversine_meters
from campus_nav.routing.geocoding import GeocodingService
from campus_nav.routing.search import PlaceSearchService
from campus_nav.routing.types import Location
from campus_nav.routing.weather import WeatherService

START = Location("Gate", 79.53, 17.98)
END = Location("Library", 79.54, 17.99)

ROUTE_PAYLOAD = {
    "code": "Ok",
    "routes": [
        {
            "geometry": {"type": "LineString", "coordinates": [[79.53, 17.98], [79.535, 17.985], [79.54, 17.99]]},
            "duration": 600,
            "distance": 800,
        }
    ],
}


class TestFormatting:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(600, "10m"), (59, "0m"), (3600, "1h 0m"), (3725, "1h 2m"), (7199.9, "1h 59m")],
    )
    def test_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_distance(self):
        assert format_distance(800) == "0.80 km (0.50 mi)"
        assert format_distance(12340) == "12.34 km (7.67 mi)"


class TestDirectionsService:
    def test_missing_token(self, no_mapbox_token):
        with pytest.raises(ConfigurationError):
            DirectionsService()

    def test_request_shape_and_result(self, mapbox_token, http_response):
        with patch("campus_nav.routing.directions.requests.get", return_value=http_response(ROUTE_PAYLOAD)) as get:
            result = DirectionsService().get_directions(START, END, "walking")

        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        assert url == "https://api.mapbox.com/directions/v5/mapbox/walking/79.53,17.98;79.54,17.99"
        assert params["geometries"] == "geojson"
        assert params["overview"] == "full"
        assert params["access_token"] == "pk.test-token"
        assert result.duration == 600.0
        assert result.distance == 800.0
        assert result.coordinates[0] == [79.53, 17.98]

    def test_unknown_profile(self, mapbox_token):
        with pytest.raises(ValueError):
            DirectionsService().get_directions(START, END, "flying")

    def test_no_route(self, mapbox_token, http_response):
        payload = {"code": "NoRoute", "message": "No route found", "routes": []}
        with patch("campus_nav.routing.directions.requests.get", return_value=http_response(payload)):
            with pytest.raises(UpstreamServiceError) as exc_info:
                DirectionsService().get_directions(START, END)

        assert "No route found" in str(exc_info.value.detail)

    def test_network_error(self, mapbox_token):
        with patch("campus_nav.routing.directions.requests.get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(UpstreamServiceError):
                DirectionsService().get_directions(START, END)


class TestPlaceSearchService:
    FEATURE = {
        "place_name": "Central Library, NIT Warangal, Telangana",
        "text": "Central Library",
        "center": [79.531, 17.984],
        "context": [{"text": "Warangal"}, {"text": "Telangana"}],
        "properties": {"category": "library, books"},
    }

    def test_forward_search_is_biased_to_campus(self, mapbox_token, http_response):
        with patch(
            "campus_nav.routing.search.requests.get", return_value=http_response({"features": [self.FEATURE]})
        ) as get:
            features = PlaceSearchService().search("central library")

        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        assert url.endswith("/geocoding/v5/mapbox.places/central%20library.json")
        assert params["proximity"] == "79.53,17.9833"
        assert params["bbox"] == "79.4,17.9,79.65,18.05"
        assert params["limit"] == 5

        feature = features[0]
        assert (feature.text, feature.lng, feature.lat) == ("Central Library", 79.531, 17.984)
        assert feature.context == "Warangal, Telangana"
        assert feature.categories == ("library", "books")

    def test_blank_query_skips_request(self, mapbox_token):
        with patch("campus_nav.routing.search.requests.get") as get:
            assert PlaceSearchService().search("  ") == []
        get.assert_not_called()

    def test_reverse(self, mapbox_token, http_response):
        with patch("campus_nav.routing.search.requests.get", return_value=http_response({"features": []})) as get:
            PlaceSearchService().reverse(79.53, 17.98)

        assert get.call_args.args[0].endswith("/mapbox.places/79.53,17.98.json")
        assert get.call_args.kwargs["params"]["types"] == "poi"

    def test_http_error(self, mapbox_token, http_response):
        with patch("campus_nav.routing.search.requests.get", return_value=http_response({}, 401)):
            with pytest.raises(UpstreamServiceError):
                PlaceSearchService().search("library")


class TestGeocodingService:
    @pytest.mark.parametrize("configured, expected", [(0.2, 1.0), (0, 1.0), (2.5, 2.5)])
    def test_delay_never_below_one_second(self, settings, configured, expected):
        settings.GEOCODE_MIN_DELAY_SECONDS = configured

        assert GeocodingService(geolocator=Mock()).min_delay == expected
        assert GeocodingService(min_delay=configured, geolocator=Mock()).min_delay == expected

    def test_returns_none_on_provider_error(self, geocoder, geolocator):
        geolocator.geocode.side_effect = GeocoderTimedOut("slow")

        assert geocoder.geocode("Library") is None

    def test_result(self, geocoder, geolocator, geocoded, sleeper):
        geolocator.geocode.return_value = geocoded(17.984, 79.531, address="Library, Warangal")

        result = geocoder.geocode("Library", "Hanamkonda")

        sleeper.assert_called_once_with(1.0)
        geolocator.geocode.assert_called_once_with("Library, Hanamkonda", exactly_one=True, addressdetails=True)
        assert (result.latitude, result.longitude, result.display_name) == (17.984, 79.531, "Library, Warangal")
        assert result.address == {"city": "Warangal"}


class TestWeatherService:
    OK = {
        "cod": 200,
        "name": "Warangal",
        "main": {"temp": 31.2, "feels_like": 33.0, "humidity": 48},
        "weather": [{"description": "scattered clouds", "icon": "03d"}],
        "wind": {"speed": 3.6},
    }

    def test_missing_key(self, settings):
        settings.OPENWEATHER_API_KEY = ""
        with pytest.raises(ConfigurationError):
            WeatherService()

    def test_reshapes_payload(self, weather_key, http_response):
        with patch("campus_nav.routing.weather.requests.get", return_value=http_response(self.OK)) as get:
            data = WeatherService().get_current(17.98, 79.53)

        assert get.call_args.kwargs["params"]["units"] == "metric"
        assert get.call_args.kwargs["params"]["lon"] == 79.53
        assert data == {
            "temp": 31.2,
            "feelsLike": 33.0,
            "description": "scattered clouds",
            "icon": "03d",
            "humidity": 48,
            "windSpeed": 3.6,
            "location": "Warangal",
        }

    def test_provider_error_keeps_status(self, weather_key, http_response):
        payload = {"cod": "401", "message": "Invalid API key"}
        with patch("campus_nav.routing.weather.requests.get", return_value=http_response(payload, 401)):
            with pytest.raises(UpstreamServiceError) as exc_info:
                WeatherService().get_current(17.98, 79.53)

        assert exc_info.value.provider_status == 401
        assert str(exc_info.value.detail) == "Invalid API key"


class TestGeo:
    def test_haversine(self):
        # one hundredth of a degree of latitude is about 1.11 km
        assert haversine_meters(17.98, 79.53, 17.99, 79.53) == pytest.approx(1112, rel=0.01)

    def test_bounds(self):
        bounds = Bounds.from_coordinates([[79.54, 17.99], [79.53, 17.98], [79.535, 17.995]])

        assert bounds.as_list() == [[79.53, 17.98], [79.54, 17.995]]
        assert bounds.contains(79.535, 17.985)
        assert Bounds.from_coordinates([]) is None

    def test_grid(self):
        points = grid_points(79.53, 17.98, 0.01, 0.005)

        assert len(points) == 25
        assert points[0] == (79.52, 17.97)
        assert points[-1] == (79.54, 17.99)
