from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from campus_nav.routing.types import Location

logger = logging.getLogger(__name__)


class PickRole(str, enum.Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class PendingPick:
    role: PickRole


@dataclass(frozen=True)
class PickResult:
    role: PickRole
    location: Location


class PickController:
    """
    Owner of the single "next map click sets this navigation endpoint" mode.

    At most one pick is pending. Starting another replaces it; there is no
    queue. The controller is handed to the map and place-marker click
    handlers, which call :meth:`resolve`.
    """

    def __init__(self, on_resolve: Optional[Callable[[PickResult], None]] = None):
        self._pending: Optional[PendingPick] = None
        self._on_resolve = on_resolve

    @property
    def pending(self) -> Optional[PendingPick]:
        return self._pending

    @property
    def is_active(self) -> bool:
        return self._pending is not None

    def start(self, role) -> PendingPick:
        role = PickRole(role)
        if self._pending is not None and self._pending.role != role:
            logger.debug("Discarding pending %s pick in favour of %s", self._pending.role.value, role.value)
        self._pending = PendingPick(role)
        return self._pending

    def cancel(self) -> None:
        self._pending = None

    def resolve(self, lng: float, lat: float, name: str = "") -> Optional[PickResult]:
        if self._pending is None:
            return None

        result = PickResult(role=self._pending.role, location=Location(name=name or "", lng=lng, lat=lat))
        self._pending = None
        if self._on_resolve is not None:
            self._on_resolve(result)
        return result
