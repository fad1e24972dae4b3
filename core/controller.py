"""
core/controller.py
──────────────────
Interaction state machine for the activity logger.

Two layers:
  • Pure transition functions: (SessionState, payload) -> Transition(state, effects).
    They decide what happens and never touch a collaborator.
  • InteractionController: holds the current SessionState plus the injected
    collaborators (map service, form, list renderer), runs a transition,
    applies its effects in order, then commits the new state. If an effect
    raises, markers and list entries already rendered for that transition
    are removed again and the state is left as it was.

Phases: AWAITING_POSITION -> MAP_READY -> FORM_OPEN -> (valid submit) -> MAP_READY
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from constants import DEFAULT_ZOOM, FIELD_DISTANCE, UI_COPY
from core.activity import (
    Activity,
    ActivityKind,
    Location,
    activity_summary,
    create_activity,
)
from core.errors import (
    InvalidActivityError,
    InvalidInputError,
    PositionUnavailableError,
    UnknownActivityReference,
)
from core.validation import coerce_number, is_valid_positive_set
from state import Phase, SessionState

logger = logging.getLogger(__name__)


# --- EVENT PAYLOADS ---

@dataclass(frozen=True)
class FormSubmission:
    """Raw form values as read from the UI; numeric fields are not yet coerced."""

    kind: Any
    distance: Any
    duration: Any
    cadence: Any = None
    elevation: Any = None


# --- EFFECTS (requested side effects on collaborators) ---

@dataclass(frozen=True)
class InitializeMap:
    center: Location
    zoom: int


@dataclass(frozen=True)
class RegisterMapClick:
    pass


@dataclass(frozen=True)
class ShowForm:
    pass


@dataclass(frozen=True)
class FocusField:
    name: str


@dataclass(frozen=True)
class ToggleField:
    name: str


@dataclass(frozen=True)
class AddMarker:
    location: Location
    label: str
    icon_glyph: str
    kind: str


@dataclass(frozen=True)
class AppendEntry:
    summary: Dict[str, Any]


@dataclass(frozen=True)
class ClearFields:
    pass


@dataclass(frozen=True)
class HideForm:
    pass


@dataclass(frozen=True)
class Recenter:
    location: Location
    zoom: int
    animated: bool = True


@dataclass(frozen=True)
class Alert:
    message: str


class Transition(NamedTuple):
    state: SessionState
    effects: Tuple[Any, ...] = ()


# --- PURE TRANSITIONS ---

def _as_location(coords) -> Location:
    """Accept (lat, lng) or a Leaflet-style dict; out-of-range longitude is wrapped."""
    if isinstance(coords, dict):
        lat = coords.get('lat', coords.get('latitude'))
        lng = coords.get('lng', coords.get('longitude'))
    else:
        lat, lng = coords
    lat, lng = float(lat), float(lng)
    if -180 <= lng <= 180:
        return (lat, lng)
    return (lat, ((lng + 180) % 360) - 180)


def on_position_acquired(state: SessionState, coords, zoom: int = DEFAULT_ZOOM) -> Transition:
    """Center a new map on the user's position and start listening for clicks."""
    if state.phase is not Phase.AWAITING_POSITION:
        # Position acquisition is one-shot.
        return Transition(state)
    center = _as_location(coords)
    return Transition(
        replace(state, phase=Phase.MAP_READY),
        (InitializeMap(center=center, zoom=zoom), RegisterMapClick()),
    )


def on_position_unavailable(state: SessionState, error: Optional[PositionUnavailableError] = None) -> Transition:
    return Transition(state, (Alert(UI_COPY['position_unavailable']),))


def on_map_click(state: SessionState, latlng) -> Transition:
    """Record the clicked point as pending and open the form. A newer click overwrites."""
    if state.phase is Phase.AWAITING_POSITION:
        return Transition(state)
    return Transition(
        replace(state, phase=Phase.FORM_OPEN, pending_location=_as_location(latlng)),
        (ShowForm(), FocusField(FIELD_DISTANCE)),
    )


def on_kind_change(state: SessionState, kind) -> Transition:
    """Present exactly the kind-specific field that matches the selected kind."""
    try:
        kind = ActivityKind(kind)
    except ValueError:
        return Transition(state)
    return Transition(state, (ToggleField(kind.profile['specific_field']),))


def parse_submission(submission: FormSubmission) -> Tuple[ActivityKind, float, float, float]:
    """
    Coerce and validate the submitted fields.

    Returns (kind, distance_km, duration_min, kind_value).
    Raises InvalidInputError for an unknown kind or any field that is not
    a finite number > 0.
    """
    try:
        kind = ActivityKind(submission.kind)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown activity kind: {submission.kind!r}") from exc

    distance = coerce_number(submission.distance)
    duration = coerce_number(submission.duration)
    raw_specific = submission.cadence if kind is ActivityKind.RUN else submission.elevation
    kind_value = coerce_number(raw_specific)

    if not is_valid_positive_set((distance, duration, kind_value)):
        raise InvalidInputError(UI_COPY['invalid_input'])
    return kind, distance, duration, kind_value


def on_submit(state: SessionState, submission: FormSubmission, now: Optional[datetime] = None) -> Transition:
    """Validate, create, append, and render an Activity; or alert and change nothing."""
    if state.pending_location is None:
        return Transition(state, (Alert(UI_COPY['missing_location']),))

    try:
        kind, distance, duration, kind_value = parse_submission(submission)
        activity = create_activity(
            kind,
            state.pending_location,
            duration,
            distance,
            kind_value,
            now=now,
        )
    except InvalidInputError:
        return Transition(state, (Alert(UI_COPY['invalid_input']),))
    except InvalidActivityError as exc:
        logger.warning("Activity construction rejected validated input: %s", exc)
        return Transition(state, (Alert(UI_COPY['invalid_input']),))

    # pending_location is read, not cleared; the next map click replaces it.
    new_state = replace(state.with_activity(activity), phase=Phase.MAP_READY)
    return Transition(
        new_state,
        (
            AddMarker(
                location=activity.location,
                label=activity.title,
                icon_glyph=activity.icon,
                kind=activity.kind.value,
            ),
            AppendEntry(activity_summary(activity)),
            ClearFields(),
            HideForm(),
        ),
    )


def on_list_activation(state: SessionState, activity_id, zoom: int = DEFAULT_ZOOM) -> Transition:
    """Recenter the map on the activated entry; unknown or missing ids are a no-op."""
    if activity_id is None:
        return Transition(state)
    try:
        activity = state.find_activity(str(activity_id))
    except UnknownActivityReference as exc:
        logger.debug("Ignoring list activation: %s", exc)
        return Transition(state)
    return Transition(state, (Recenter(location=activity.location, zoom=zoom, animated=True),))


# --- CONTROLLER ---

class InteractionController:
    """Owns the session state and drives the map, form, and list collaborators."""

    def __init__(
        self,
        map_service,
        form,
        list_renderer,
        *,
        zoom: int = DEFAULT_ZOOM,
        state: Optional[SessionState] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Parameters
        ----------
        map_service : MapView-like
            initialize(center, zoom), on_click(handler), add_marker(location, label, icon_glyph) -> marker,
            remove_marker(marker), recenter(location, zoom, animated)
        form : WorkoutForm-like
            show_form(), hide_form(), focus_field(name), clear_fields(), toggle_field(name), alert(message)
        list_renderer : ActivityList-like
            append_entry(summary) -> entry, remove_entry(entry)
        zoom : int
            Zoom used when the map is created and when recentering.
        clock : callable | None
            Returns the creation timestamp for new activities.
        """
        self.map_service = map_service
        self.form = form
        self.list_renderer = list_renderer
        self.zoom = zoom
        self.clock = clock or datetime.now
        self._state = state or SessionState()
        self._listeners: List[Callable[[SessionState], Any]] = []

        self._effect_handlers = {
            InitializeMap: lambda e: self.map_service.initialize(e.center, e.zoom),
            RegisterMapClick: lambda e: self.map_service.on_click(self.handle_map_click),
            ShowForm: lambda e: self.form.show_form(),
            FocusField: lambda e: self.form.focus_field(e.name),
            ToggleField: lambda e: self.form.toggle_field(e.name),
            AddMarker: lambda e: self.map_service.add_marker(e.location, e.label, e.icon_glyph, kind=e.kind),
            AppendEntry: lambda e: self.list_renderer.append_entry(e.summary),
            ClearFields: lambda e: self.form.clear_fields(),
            HideForm: lambda e: self.form.hide_form(),
            Recenter: lambda e: self.map_service.recenter(e.location, e.zoom, e.animated),
            Alert: lambda e: self.form.alert(e.message),
        }

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def activities(self) -> Tuple[Activity, ...]:
        return self._state.activities

    def subscribe(self, listener: Callable[[SessionState], Any]) -> None:
        """Register a callback invoked with the new state after every committed change."""
        self._listeners.append(listener)

    # --- Event handlers ---

    def request_position(self, position_service):
        """Ask the position service for a one-shot fix; returns whatever the service returns."""
        return position_service.get_current_position(
            self.handle_position_acquired,
            self.handle_position_unavailable,
        )

    def handle_position_acquired(self, coords) -> None:
        self._run(on_position_acquired(self._state, coords, self.zoom))

    def handle_position_unavailable(self, error: Optional[PositionUnavailableError] = None) -> None:
        logger.warning("Position unavailable: %s", error or 'no reason given')
        self._run(on_position_unavailable(self._state, error))

    def handle_map_click(self, latlng) -> None:
        self._run(on_map_click(self._state, latlng))

    def handle_kind_change(self, kind) -> None:
        self._run(on_kind_change(self._state, kind))

    def handle_submit(self, submission: FormSubmission) -> Optional[Activity]:
        """Returns the created Activity, or None when the submission was rejected."""
        before = len(self._state.activities)
        self._run(on_submit(self._state, submission, now=self.clock()))
        if len(self._state.activities) == before:
            logger.warning("Rejected %s submission", submission.kind)
            return None
        activity = self._state.activities[-1]
        logger.info("Logged %s activity %s at %s", activity.kind.value, activity.id, activity.location)
        return activity

    def handle_list_activation(self, activity_id) -> None:
        self._run(on_list_activation(self._state, activity_id, self.zoom))

    # --- Effect application ---

    def _run(self, transition: Transition) -> None:
        undo: List[Callable[[], Any]] = []
        try:
            for effect in transition.effects:
                result = self._apply(effect)
                compensate = self._compensation_for(effect, result)
                if compensate is not None:
                    undo.append(compensate)
        except Exception:
            self._roll_back(undo)
            raise
        self._commit(transition.state)

    def _compensation_for(self, effect, result) -> Optional[Callable[[], Any]]:
        """Undo step for effects that leave something rendered behind."""
        if isinstance(effect, AddMarker):
            return lambda: self.map_service.remove_marker(result)
        if isinstance(effect, AppendEntry):
            return lambda: self.list_renderer.remove_entry(result)
        return None

    def _roll_back(self, undo: List[Callable[[], Any]]) -> None:
        for compensate in reversed(undo):
            try:
                compensate()
            except Exception:
                logger.exception("Failed to roll back a rendered effect")

    def _apply(self, effect) -> Any:
        handler = self._effect_handlers.get(type(effect))
        if handler is None:
            raise TypeError(f"Unsupported effect: {effect!r}")
        try:
            return handler(effect)
        except Exception:
            logger.exception("Failed to apply %s", type(effect).__name__)
            raise

    def _commit(self, new_state: SessionState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
