from django.contrib import admin
from django.urls import include, path

API_PREFIX = "api"

urlpatterns = [
    path("admin/", admin.site.urls),
    path(f"{API_PREFIX}/", include("campus_nav.places.urls")),
    path(f"{API_PREFIX}/", include("campus_nav.routes.urls")),
    path(f"{API_PREFIX}/", include("campus_nav.gateway.urls")),
]
