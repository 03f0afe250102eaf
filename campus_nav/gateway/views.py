import logging

from django.conf import settings

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError, error_response
from campus_nav.navigator.annotations import ROUTE_FAILED_MESSAGE, MapAnnotationLayer
from campus_nav.navigator.suggestions import SuggestionSearch
from campus_nav.navigator.surface import SceneSurface
from campus_nav.navigator.types import NavigationRequest
from campus_nav.places.queries import get_active_places
from campus_nav.places.serializers import PlaceSerializer
from campus_nav.routes.models import Route
from campus_nav.routes.serializers import RouteSerializer
from campus_nav.routing.directions import DirectionsService
from campus_nav.routing.search import PlaceSearchService
from campus_nav.routing.weather import WeatherService

logger = logging.getLogger(__name__)


def require_map_token():
    if not settings.MAPBOX_ACCESS_TOKEN:
        raise ConfigurationError("Mapbox access token is not set. Add MAPBOX_ACCESS_TOKEN to the environment.")


class HealthView(APIView):

    def get(self, request):
        return Response({"status": "OK", "message": "Server is running"})


class WeatherView(APIView):

    def get(self, request):
        lat = request.query_params.get("lat")
        lng = request.query_params.get("lng")
        if not lat or not lng:
            return error_response("Latitude and longitude are required")

        try:
            lat, lng = float(lat), float(lng)
        except ValueError:
            return error_response("Latitude and longitude must be numbers")

        service = WeatherService()
        try:
            return Response(service.get_current(lat, lng))
        except UpstreamServiceError as e:
            code = e.provider_status if e.provider_status and e.provider_status >= 400 else e.status_code
            return error_response(str(e.detail), code)


class DirectionsView(APIView):

    def post(self, request):
        try:
            nav_request = NavigationRequest.from_dict(request.data if isinstance(request.data, dict) else {})
        except ValueError as e:
            return error_response(str(e))

        surface = SceneSurface()
        layer = MapAnnotationLayer(surface, directions=DirectionsService())
        info = layer.show_navigation(nav_request)
        if info is None:
            return error_response(ROUTE_FAILED_MESSAGE, status.HTTP_502_BAD_GATEWAY)

        nav_line = surface.lines_of_kind("navigation")[0]
        return Response(
            {
                **info.as_dict(),
                "profile": nav_request.profile,
                "geometry": {"type": "LineString", "coordinates": nav_line.coordinates},
                "scene": surface.as_dict(),
            }
        )


class SuggestionsView(APIView):

    def get(self, request):
        query = request.query_params.get("q", "")
        places = PlaceSerializer(get_active_places(), many=True).data
        search_service = PlaceSearchService() if settings.MAPBOX_ACCESS_TOKEN else None

        suggestions = SuggestionSearch(places, search_service).suggest(query)
        return Response([s.as_dict() for s in suggestions])


class MapSceneView(APIView):

    def get(self, request):
        require_map_token()

        selected = request.query_params.get("selected")
        try:
            selected = int(selected) if selected else None
        except ValueError:
            return error_response("selected must be a route id")

        surface = SceneSurface()
        layer = MapAnnotationLayer(surface)
        layer.set_places(PlaceSerializer(get_active_places(), many=True).data)
        layer.set_routes(RouteSerializer(Route.objects.filter(is_active=True), many=True).data, selected)

        return Response({**surface.as_dict(), "selectedRoute": layer.selected_route_id})
