"""Error taxonomy for activity logging."""

from __future__ import annotations


class TrailmarkError(Exception):
    """Base class for all recoverable activity-logging errors."""


class InvalidActivityError(TrailmarkError, ValueError):
    """An Activity was constructed with a non-positive, non-finite, or malformed field."""


class InvalidInputError(TrailmarkError):
    """A form submission carried unusable numeric fields or no location."""


class PositionUnavailableError(TrailmarkError):
    """The position service could not supply the user's location."""


class UnknownActivityReference(TrailmarkError, LookupError):
    """A list entry referenced an id not present in the session."""

    def __init__(self, activity_id):
        super().__init__(f"No activity with id {activity_id!r}")
        self.activity_id = activity_id
