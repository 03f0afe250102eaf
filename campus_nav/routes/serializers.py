from rest_framework import serializers

from .models import DEFAULT_ROUTE_COLOR, Route

MIN_WAYPOINTS = 2


class WaypointSerializer(serializers.Serializer):
    latitude = serializers.FloatField(
        min_value=-90.0,
        max_value=90.0,
        error_messages={"invalid": "Valid latitude is required", "required": "Valid latitude is required"},
    )
    longitude = serializers.FloatField(
        min_value=-180.0,
        max_value=180.0,
        error_messages={"invalid": "Valid longitude is required", "required": "Valid longitude is required"},
    )
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True, default="")
    order = serializers.IntegerField(required=False)

    def validate(self, attrs):
        # (0, 0) is what an untouched waypoint row holds, never a real campus point
        if attrs["latitude"] == 0 and attrs["longitude"] == 0:
            raise serializers.ValidationError("Waypoint coordinates cannot be (0, 0)")
        return attrs


def clean_waypoints(value) -> list[dict]:
    """Validate raw waypoints and return them sorted by ``order``."""
    if not isinstance(value, list):
        raise serializers.ValidationError("Waypoints must be a list")
    if len(value) < MIN_WAYPOINTS:
        raise serializers.ValidationError(f"At least {MIN_WAYPOINTS} waypoints are required")

    items = WaypointSerializer(data=value, many=True)
    if not items.is_valid():
        raise serializers.ValidationError(items.errors)

    waypoints = []
    for index, wp in enumerate(items.validated_data):
        wp = dict(wp)
        if wp.get("order") is None:
            wp["order"] = index
        waypoints.append(wp)

    orders = [wp["order"] for wp in waypoints]
    if len(set(orders)) != len(orders):
        raise serializers.ValidationError("Waypoint order values must be unique")

    return sorted(waypoints, key=lambda wp: wp["order"])


class RouteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        max_length=255,
        trim_whitespace=True,
        error_messages={"blank": "Route name is required", "required": "Route name is required"},
    )
    description = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True, default="")
    waypoints = serializers.JSONField(
        error_messages={"required": f"At least {MIN_WAYPOINTS} waypoints are required"},
    )
    color = serializers.RegexField(
        r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$",
        required=False,
        default=DEFAULT_ROUTE_COLOR,
        error_messages={"invalid": "Color must be a hex value such as #3b82f6"},
    )

    class Meta:
        model = Route
        fields = ["id", "name", "description", "waypoints", "color", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_waypoints(self, value):
        return clean_waypoints(value)
