from django.contrib import admin

from .models import Place


@admin.register(Place)
class PlaceAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "latitude", "longitude", "is_active", "updated_at")
    list_filter = ("category", "is_active")
    search_fields = ("name", "description")
