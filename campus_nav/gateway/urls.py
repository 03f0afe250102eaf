from django.urls import path

from .views import DirectionsView, HealthView, MapSceneView, SuggestionsView, WeatherView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("weather", WeatherView.as_view(), name="weather"),
    path("navigation/directions", DirectionsView.as_view(), name="directions"),
    path("search/suggestions", SuggestionsView.as_view(), name="search_suggestions"),
    path("map/scene", MapSceneView.as_view(), name="map_scene"),
]
