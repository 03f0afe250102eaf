from django.urls import path

from .views import RouteDetailView, RouteListView

urlpatterns = [
    path("routes", RouteListView.as_view(), name="route_list"),
    path("routes/<int:pk>", RouteDetailView.as_view(), name="route_detail"),
]
