from __future__ import annotations

from typing import Optional

from campus_nav.routing.directions import PROFILES
from campus_nav.routing.types import Location

from .picking import PickController, PickResult, PickRole
from .suggestions import Suggestion, SuggestionSearch
from .types import NavigationRequest

DEFAULT_NAMES = {PickRole.START: "Start Location", PickRole.END: "End Location"}


class NavigationPanelError(ValueError):
    pass


class NavigationPanel:
    """Start/end/profile form for a directions lookup; owns the location pick."""

    def __init__(self, search: Optional[SuggestionSearch] = None):
        self.search = search
        self.pick = PickController(on_resolve=self.apply_pick)
        self.locations: dict[PickRole, Optional[Location]] = {PickRole.START: None, PickRole.END: None}
        self.suggestions: dict[PickRole, list[Suggestion]] = {PickRole.START: [], PickRole.END: []}
        self.profile = "driving"

    @property
    def start(self) -> Optional[Location]:
        return self.locations[PickRole.START]

    @property
    def end(self) -> Optional[Location]:
        return self.locations[PickRole.END]

    def set_profile(self, profile: str) -> None:
        if profile not in PROFILES:
            raise NavigationPanelError(f"Unknown travel profile: {profile}")
        self.profile = profile

    def set_from_map(self, role) -> None:
        """Arm the next map or place-marker click to fill ``role``."""
        self.pick.start(role)

    def is_setting(self, role) -> bool:
        pending = self.pick.pending
        return pending is not None and pending.role == PickRole(role)

    def apply_pick(self, result: PickResult) -> None:
        loc = result.location
        self.locations[result.role] = Location(name=loc.name or DEFAULT_NAMES[result.role], lng=loc.lng, lat=loc.lat)

    def search_location(self, role, query: str) -> list[Suggestion]:
        role = PickRole(role)
        self.suggestions[role] = self.search.suggest(query) if self.search is not None else []
        return self.suggestions[role]

    def select_suggestion(self, role, suggestion: Suggestion) -> None:
        role = PickRole(role)
        self.locations[role] = Location(name=suggestion.name, lng=suggestion.lng, lat=suggestion.lat)
        self.suggestions[role] = []

    def calculate(self) -> NavigationRequest:
        if self.start is None or self.end is None:
            raise NavigationPanelError("Please set both start and end locations")
        return NavigationRequest(start=self.start, end=self.end, profile=self.profile)

    def clear(self) -> None:
        self.locations = {PickRole.START: None, PickRole.END: None}
        self.suggestions = {PickRole.START: [], PickRole.END: []}
        self.pick.cancel()
