from django.db import models

DEFAULT_ROUTE_COLOR = "#3b82f6"


class Route(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    # [{"latitude", "longitude", "name", "order"}], kept sorted by order
    waypoints = models.JSONField(default=list)

    color = models.CharField(max_length=7, default=DEFAULT_ROUTE_COLOR)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="route_created_at_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({len(self.waypoints)} waypoints)"

    @property
    def ordered_waypoints(self) -> list[dict]:
        return sorted(self.waypoints or [], key=lambda wp: wp.get("order", 0))

    @property
    def coordinates(self) -> list[list[float]]:
        return [[wp["longitude"], wp["latitude"]] for wp in self.ordered_waypoints]
