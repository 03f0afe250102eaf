import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from campus_nav.core.exceptions import NotFound

from .models import Route
from .serializers import RouteSerializer

logger = logging.getLogger(__name__)


def get_route_or_404(pk) -> Route:
    try:
        return Route.objects.get(pk=pk)
    except (Route.DoesNotExist, ValueError):
        raise NotFound("Route not found")


class RouteListView(APIView):

    def get(self, request):
        routes = Route.objects.all().order_by("-created_at")
        return Response(RouteSerializer(routes, many=True).data)

    def post(self, request):
        serializer = RouteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        route = serializer.save()
        logger.info("Created route %s (%s) with %d waypoints", route.pk, route.name, len(route.waypoints))
        return Response(RouteSerializer(route).data, status=status.HTTP_201_CREATED)


class RouteDetailView(APIView):

    def get(self, request, pk):
        return Response(RouteSerializer(get_route_or_404(pk)).data)

    def put(self, request, pk):
        route = get_route_or_404(pk)
        serializer = RouteSerializer(route, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        route = serializer.save()
        return Response(RouteSerializer(route).data)

    def delete(self, request, pk):
        route = get_route_or_404(pk)
        data = RouteSerializer(route).data
        route.delete()
        logger.info("Deleted route %s (%s)", pk, data["name"])
        return Response({"message": "Route deleted successfully", "route": data})
