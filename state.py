"""
Session state for one Trailmark page.

SessionState is immutable: transitions return a new instance through
dataclasses.replace. The InteractionController owns the current value and
notifies subscribers whenever it commits a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from core.activity import Activity, Location
from core.errors import UnknownActivityReference


class Phase(str, Enum):
    AWAITING_POSITION = "awaiting_position"
    MAP_READY = "map_ready"
    FORM_OPEN = "form_open"


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.AWAITING_POSITION
    activities: Tuple[Activity, ...] = ()
    pending_location: Optional[Location] = None

    def with_activity(self, activity: Activity) -> "SessionState":
        """Append-only: the only way the collection grows."""
        return replace(self, activities=self.activities + (activity,))

    def find_activity(self, activity_id) -> Activity:
        """Linear lookup by id; raises UnknownActivityReference when absent."""
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        raise UnknownActivityReference(activity_id)

    @property
    def map_ready(self) -> bool:
        return self.phase is not Phase.AWAITING_POSITION
