from unittest.mock import Mock

import pytest

from campus_nav.core.exceptions import UpstreamServiceError
from campus_nav.navigator.panel import NavigationPanel, NavigationPanelError
from campus_nav.navigator.picking import PickController, PickRole
from campus_nav.navigator.suggestions import (
    Debouncer,
    PlaceCache,
    Suggestion,
    SuggestionSearch,
    match_local_places,
    merge_suggestions,
)
from campus_nav.navigator.types import NavigationRequest
from campus_nav.routing.types import GeocodedFeature, Location

PLACES = [
    {
        "id": 1,
        "name": "NIT Warangal Library",
        "description": "Central library",
        "category": "library",
        "latitude": 17.984,
        "longitude": 79.531,
    },
    {
        "id": 2,
        "name": "Canteen",
        "description": "Snacks near the library",
        "category": "eateries",
        "latitude": 17.981,
        "longitude": 79.529,
    },
    {
        "id": 3,
        "name": "Staff Quarters",
        "description": "",
        "category": "staff_quarters",
        "latitude": 17.99,
        "longitude": 79.52,
    },
]


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestPickController:
    def test_second_pick_replaces_first(self):
        pick = PickController()
        pick.start(PickRole.START)
        pick.start(PickRole.END)

        result = pick.resolve(79.53, 17.98)

        assert result.role is PickRole.END
        assert pick.resolve(79.54, 17.99) is None

    def test_cancel(self):
        pick = PickController()
        pick.start("start")
        pick.cancel()

        assert not pick.is_active
        assert pick.resolve(79.53, 17.98) is None

    def test_on_resolve_callback(self):
        seen = Mock()
        pick = PickController(on_resolve=seen)
        pick.start("end")

        result = pick.resolve(79.53, 17.98, "Gate")

        seen.assert_called_once_with(result)
        assert result.location == Location("Gate", 79.53, 17.98)

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            PickController().start("middle")


class TestLocalMatching:
    def test_matches_name_or_description_case_insensitively(self):
        matches = match_local_places(PLACES, "LIBRARY")

        assert [m.name for m in matches] == ["NIT Warangal Library", "Canteen"]
        assert matches[0].context == "Library"
        assert matches[0].place_id == 1

    def test_category_label(self):
        assert match_local_places(PLACES, "staff")[0].context == "Staff quarters"

    def test_local_always_first(self):
        local = [Suggestion("Canteen", 79.529, 17.981, "Eateries", True)]
        external = [Suggestion("Kazipet Junction", 79.5, 17.97, "Kazipet", False)]

        merged = merge_suggestions(local, external)

        assert [s.is_local for s in merged] == [True, False]


class TestSuggestionSearch:
    def service(self):
        service = Mock()
        service.search.return_value = [
            GeocodedFeature(name="Library Road, Hanamkonda", text="Library Road", lng=79.56, lat=18.0)
        ]
        return service

    def test_short_query_is_ignored(self):
        service = self.service()

        assert SuggestionSearch(PLACES, service).suggest("l") == []
        service.search.assert_not_called()

    def test_local_then_external(self):
        results = SuggestionSearch(PLACES, self.service()).suggest("library")

        assert [s.name for s in results] == ["NIT Warangal Library", "Canteen", "Library Road, Hanamkonda"]
        assert results[-1].context == "External Location"
        assert results[-1].as_dict()["isLocal"] is False

    def test_external_failure_keeps_local(self):
        service = Mock()
        service.search.side_effect = UpstreamServiceError("Place search failed: timeout")

        results = SuggestionSearch(PLACES, service).suggest("canteen")

        assert [s.name for s in results] == ["Canteen"]

    def test_debounce_only_searches_settled_query(self):
        clock = FakeClock()
        service = self.service()
        search = SuggestionSearch(PLACES, service, debounce=0.3, clock=clock)

        search.type("li")
        clock.now = 0.1
        search.type("lib")
        clock.now = 0.35
        assert search.poll() is None

        clock.now = 0.41
        results = search.poll()

        service.search.assert_called_once_with("lib")
        assert results == search.suggestions
        assert search.poll() is None

    def test_place_cache_refreshes(self):
        clock = FakeClock()
        fetch = Mock(side_effect=[PLACES[:1], PLACES])
        cache = PlaceCache(fetch, refresh_interval=60, clock=clock)
        search = SuggestionSearch(cache)

        assert [s.name for s in search.suggest("canteen")] == []
        clock.now = 30
        assert [s.name for s in search.suggest("canteen")] == []
        clock.now = 61
        assert [s.name for s in search.suggest("canteen")] == ["Canteen"]
        assert fetch.call_count == 2

    def test_place_cache_keeps_last_list_on_error(self):
        clock = FakeClock()
        fetch = Mock(side_effect=[PLACES, ConnectionError("offline")])
        cache = PlaceCache(fetch, refresh_interval=60, clock=clock)

        assert cache.get() == PLACES
        clock.now = 120
        assert cache.get() == PLACES


class TestDebouncer:
    def test_pending(self):
        clock = FakeClock()
        debouncer = Debouncer(0.3, clock)

        assert not debouncer.pending
        debouncer.push("ab")
        assert debouncer.pending
        clock.now = 0.3
        assert debouncer.pop_ready() == "ab"
        assert not debouncer.pending


class TestNavigationPanel:
    def test_requires_both_endpoints(self):
        panel = NavigationPanel()
        panel.select_suggestion("start", Suggestion("Gate", 79.53, 17.98, "Other", True))

        with pytest.raises(NavigationPanelError, match="Please set both start and end locations"):
            panel.calculate()

    def test_map_pick_fills_role_with_default_name(self):
        panel = NavigationPanel()
        panel.set_from_map("end")
        assert panel.is_setting("end")

        panel.pick.resolve(79.54, 17.99)

        assert panel.end == Location("End Location", 79.54, 17.99)
        assert not panel.is_setting("end")

    def test_calculate(self):
        panel = NavigationPanel()
        panel.select_suggestion("start", Suggestion("Gate", 79.53, 17.98, "Other", True))
        panel.pick.start("end")
        panel.pick.resolve(79.54, 17.99, "Library")
        panel.set_profile("cycling")

        request = panel.calculate()

        assert request == NavigationRequest(
            Location("Gate", 79.53, 17.98), Location("Library", 79.54, 17.99), "cycling"
        )

    def test_unknown_profile(self):
        with pytest.raises(NavigationPanelError):
            NavigationPanel().set_profile("flying")

    def test_search_location_keeps_per_role_suggestions(self):
        panel = NavigationPanel(search=SuggestionSearch(PLACES))

        panel.search_location("start", "canteen")

        assert [s.name for s in panel.suggestions[PickRole.START]] == ["Canteen"]
        assert panel.suggestions[PickRole.END] == []

        panel.select_suggestion("start", panel.suggestions[PickRole.START][0])
        assert panel.suggestions[PickRole.START] == []

    def test_clear(self):
        panel = NavigationPanel()
        panel.set_from_map("start")
        panel.select_suggestion("end", Suggestion("Gate", 79.53, 17.98, "Other", True))

        panel.clear()

        assert panel.start is None and panel.end is None
        assert not panel.pick.is_active


class TestNavigationRequest:
    def test_from_dict(self):
        request = NavigationRequest.from_dict(
            {"start": {"lng": 79.53, "lat": 17.98}, "end": {"longitude": "79.54", "latitude": "17.99", "name": "Lib"}}
        )

        assert request.start == Location("Start Location", 79.53, 17.98)
        assert request.end == Location("Lib", 79.54, 17.99)
        assert request.profile == "driving"

    @pytest.mark.parametrize(
        "data",
        [
            {"start": {"lng": 79.53, "lat": 17.98}},
            {"start": {"lng": "x", "lat": 17.98}, "end": {"lng": 79.54, "lat": 17.99}},
            {"start": {"lng": 79.53, "lat": 17.98}, "end": {"lng": 79.54, "lat": 17.99}, "profile": "boat"},
        ],
    )
    def test_rejects(self, data):
        with pytest.raises(ValueError):
            NavigationRequest.from_dict(data)
