from django.urls import path

from .views import (
    BulkImportView,
    FetchFromMapboxView,
    ImportFromOsmView,
    PlaceCategoryView,
    PlaceDetailView,
    PlaceListView,
    PopulateCollegePlacesView,
)

urlpatterns = [
    path("places", PlaceListView.as_view(), name="place_list"),
    path("places/category/<str:category>", PlaceCategoryView.as_view(), name="place_category"),
    path("places/populate-college-places", PopulateCollegePlacesView.as_view(), name="populate_college_places"),
    path("places/import-from-osm", ImportFromOsmView.as_view(), name="import_from_osm"),
    path("places/bulk-import", BulkImportView.as_view(), name="bulk_import"),
    path("places/fetch-from-mapbox", FetchFromMapboxView.as_view(), name="fetch_from_mapbox"),
    path("places/<int:pk>", PlaceDetailView.as_view(), name="place_detail"),
]
