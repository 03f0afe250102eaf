from unittest.mock import Mock

import pytest

from campus_nav.navigator.client import ApiError, CampusNavClient
from campus_nav.navigator.editors import EditorValidationError, PlaceEditor, RouteEditor
from campus_nav.routes.serializers import clean_waypoints


@pytest.fixture
def client():
    return Mock(spec=CampusNavClient)


class TestRouteEditor:
    def test_drawing_captures_clicks_in_order(self, client):
        editor = RouteEditor(client)
        assert editor.map_click_callback is None

        editor.toggle_drawing()
        editor.map_click_callback(79.53, 17.98)
        editor.map_click_callback(79.54, 17.99)

        assert editor.waypoints == [
            {"latitude": 17.98, "longitude": 79.53, "name": "", "order": 0},
            {"latitude": 17.99, "longitude": 79.54, "name": "", "order": 1},
        ]

    def test_move_and_remove_renumber(self, client):
        editor = RouteEditor(client)
        for lng in (79.51, 79.52, 79.53):
            editor.add_waypoint_from_map(lng, 17.98)

        editor.move_waypoint(2, "up")
        assert [(wp["longitude"], wp["order"]) for wp in editor.waypoints] == [(79.51, 0), (79.53, 1), (79.52, 2)]

        editor.move_waypoint(0, "up")
        editor.remove_waypoint(0)
        assert [(wp["longitude"], wp["order"]) for wp in editor.waypoints] == [(79.53, 0), (79.52, 1)]

    def test_validation(self, client):
        editor = RouteEditor(client)
        editor.add_waypoint()

        errors = editor.validate()

        assert errors == {
            "name": "Route name is required",
            "waypoints": "At least 2 waypoints are required",
            "waypoint_0": "Waypoint coordinates cannot be (0, 0)",
        }
        with pytest.raises(EditorValidationError):
            editor.submit()
        client.create_route.assert_not_called()

    def test_update_waypoint_parses_numbers(self, client):
        editor = RouteEditor(client)
        editor.add_waypoint()

        editor.update_waypoint(0, "latitude", "17.985")
        editor.update_waypoint(0, "longitude", "not a number")

        assert editor.waypoints[0]["latitude"] == 17.985
        assert editor.waypoints[0]["longitude"] == 0.0

    def test_create_then_update(self, client):
        client.create_route.return_value = {"id": 7, "name": "Library Walk"}
        editor = RouteEditor(client)
        editor.name = " Library Walk "
        editor.set_drawing(True)
        editor.add_waypoint_from_map(79.53, 17.98)
        editor.add_waypoint_from_map(79.54, 17.99)

        editor.submit()

        payload = client.create_route.call_args.args[0]
        assert payload["name"] == "Library Walk"
        assert payload["color"] == "#3b82f6"
        assert not editor.drawing

        editor.submit()
        client.update_route.assert_called_once()
        assert client.update_route.call_args.args[0] == 7

    @pytest.mark.parametrize("orders", [(5, 7), (1, 2)])
    def test_drawn_point_goes_last_on_loaded_route(self, client, orders):
        route = {
            "id": 4,
            "name": "Gapped",
            "waypoints": [
                {"latitude": 17.99, "longitude": 79.55, "name": "B", "order": orders[1]},
                {"latitude": 17.98, "longitude": 79.53, "name": "A", "order": orders[0]},
            ],
        }
        editor = RouteEditor(client, route)
        editor.set_drawing(True)

        editor.map_click_callback(79.54, 17.995)
        editor.add_waypoint()

        stored = clean_waypoints(editor.payload()["waypoints"][:3])
        assert [wp["name"] for wp in stored] == ["A", "B", ""]
        assert stored[-1]["longitude"] == 79.54
        assert editor.waypoints[-1]["order"] == orders[1] + 2

    def test_loads_existing_route(self, client):
        route = {"id": 3, "name": "Loop", "color": "#ff0000", "waypoints": [{"latitude": 1, "longitude": 2}]}

        editor = RouteEditor(client, route)
        editor.waypoints[0]["name"] = "changed"

        assert route["waypoints"][0] == {"latitude": 1, "longitude": 2}
        assert editor.color == "#ff0000"


class TestPlaceEditor:
    def test_validation(self, client):
        editor = PlaceEditor(client)
        editor.category = "nightlife"

        assert editor.validate() == {
            "name": "Name is required",
            "latitude": "Valid latitude is required",
            "longitude": "Valid longitude is required",
            "category": "Valid category is required",
        }

    def test_defaults_and_submit(self, client):
        client.create_place.return_value = {"id": 5}
        editor = PlaceEditor(client)
        editor.name = "Juice Point"
        editor.set_location(79.529, 17.981)
        editor.set_hours("sunday", "closed", True)
        editor.set_contact("phone", "0870-2459191")

        editor.submit()

        payload = client.create_place.call_args.args[0]
        assert payload["category"] == "other"
        assert payload["latitude"] == 17.981
        assert payload["opening_hours"]["sunday"]["closed"] is True
        assert payload["opening_hours"]["monday"] == {"open": "09:00", "close": "17:00", "closed": False}
        assert payload["contact_info"] == {"phone": "0870-2459191", "email": "", "website": ""}
        assert editor.place_id == 5

    def test_unknown_weekday(self, client):
        with pytest.raises(ValueError):
            PlaceEditor(client).set_hours("funday", "open", "10:00")

    def test_existing_place_updates(self, client):
        editor = PlaceEditor(client, {"id": 9, "name": "Gate", "latitude": 17.98, "longitude": 79.53})

        editor.submit()

        client.update_place.assert_called_once()
        assert client.update_place.call_args.args[0] == 9


class TestCampusNavClient:
    def response(self, status_code, payload):
        resp = Mock(status_code=status_code)
        resp.json.return_value = payload
        return resp

    def test_request(self):
        session = Mock()
        session.request.return_value = self.response(200, [{"id": 1}])

        places = CampusNavClient("http://campus.test/api/", session=session).list_places("library")

        session.request.assert_called_once_with(
            "GET", "http://campus.test/api/places", timeout=15, params={"category": "library"}
        )
        assert places == [{"id": 1}]

    def test_error_exposes_field_errors(self):
        session = Mock()
        session.request.return_value = self.response(400, {"errors": {"name": ["Route name is required"]}})

        with pytest.raises(ApiError) as exc_info:
            CampusNavClient(session=session).create_route({})

        assert exc_info.value.status_code == 400
        assert exc_info.value.field_errors == {"name": ["Route name is required"]}
