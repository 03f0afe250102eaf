import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from campus_nav.core.exceptions import ConfigurationError, NotFound, error_response

from .hours import current_status, weekly_schedule
from .models import Place, PlaceCategory
from .population import PlacePopulator
from .queries import get_active_places, get_active_places_by_category
from .serializers import PlaceSerializer

logger = logging.getLogger(__name__)


def get_place_or_404(pk) -> Place:
    try:
        return Place.objects.get(pk=pk)
    except (Place.DoesNotExist, ValueError):
        raise NotFound("Place not found")


class PlaceListView(APIView):

    def get(self, request):
        if request.query_params.get("group") == "category":
            grouped = get_active_places_by_category()
            return Response({category: PlaceSerializer(places, many=True).data for category, places in grouped.items()})
        category = request.query_params.get("category") or None
        places = get_active_places(category)
        return Response(PlaceSerializer(places, many=True).data)

    def post(self, request):
        serializer = PlaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        place = serializer.save()
        logger.info("Created place %s (%s)", place.pk, place.name)
        return Response(PlaceSerializer(place).data, status=status.HTTP_201_CREATED)


class PlaceCategoryView(APIView):

    def get(self, request, category):
        if category not in PlaceCategory.values:
            return Response([])
        return Response(PlaceSerializer(get_active_places(category), many=True).data)


class PlaceDetailView(APIView):

    def get(self, request, pk):
        place = get_place_or_404(pk)
        data = PlaceSerializer(place).data
        data["today_status"] = current_status(place.opening_hours)
        data["weekly_hours"] = weekly_schedule(place.opening_hours)
        return Response(data)

    def put(self, request, pk):
        place = get_place_or_404(pk)
        serializer = PlaceSerializer(place, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        place = serializer.save()
        return Response(PlaceSerializer(place).data)

    def delete(self, request, pk):
        place = get_place_or_404(pk)
        data = PlaceSerializer(place).data
        place.delete()
        logger.info("Deleted place %s (%s)", pk, data["name"])
        return Response({"message": "Place deleted successfully", "place": data})


class _BulkImportView(APIView):
    """Shared error handling for the bulk ingest endpoints."""

    label = ""

    def run(self, populator: PlacePopulator, request):
        raise NotImplementedError

    def post(self, request):
        try:
            results = self.run(PlacePopulator(), request)
        except ValueError as e:
            return error_response(str(e))
        except ConfigurationError:
            raise
        except Exception as e:
            logger.exception("%s failed", self.label)
            return error_response(f"Internal server error: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(results.as_response(self.label), status=status.HTTP_200_OK)


def _places_payload(request) -> list:
    places = request.data.get("places") if isinstance(request.data, dict) else None
    if not isinstance(places, list):
        raise ValueError("Places array is required")
    return places


class PopulateCollegePlacesView(_BulkImportView):
    label = "College places populated"

    def run(self, populator, request):
        return populator.populate_college_places()


class ImportFromOsmView(_BulkImportView):
    label = "Import completed"

    def run(self, populator, request):
        return populator.import_from_osm(_places_payload(request))


class BulkImportView(_BulkImportView):
    label = "Bulk import completed"

    def run(self, populator, request):
        return populator.bulk_import(_places_payload(request))


class FetchFromMapboxView(_BulkImportView):
    label = "Mapbox fetch completed"

    def run(self, populator, request):
        return populator.fetch_from_mapbox()
