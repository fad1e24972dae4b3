"""Shared constants: map defaults, activity kind profiles, and UI copy."""

from __future__ import annotations

from typing import Dict, Tuple

APP_TITLE = 'Trailmark'
DEFAULT_PORT = 8080

# ── Map ──────────────────────────────────────────────────────────────
DEFAULT_ZOOM = 17
RECENTER_DURATION_SEC = 1
MAP_TILE_URL = r'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
MAP_TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)
GEOLOCATION_TIMEOUT_SEC = 60.0

MONTHS: Tuple[str, ...] = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

# ── Form field names ─────────────────────────────────────────────────
FIELD_DISTANCE = 'distance'
FIELD_DURATION = 'duration'
FIELD_CADENCE = 'cadence'
FIELD_ELEVATION = 'elevation'

# ── Kind display profiles ────────────────────────────────────────────
# Keys are ActivityKind values.
KIND_PROFILES: Dict[str, Dict[str, str]] = {
    'running': {
        'label': 'Running',
        'icon': '🏃‍♂️',
        'metric_label': 'PACE',
        'metric_icon': '⚡️',
        'metric_unit': 'min/km',
        'specific_field': FIELD_CADENCE,
        'specific_label': 'CADENCE',
        'specific_icon': '🦶🏼',
        'specific_unit': 'spm',
        'color': '#34d399',  # Emerald
    },
    'cycling': {
        'label': 'Cycling',
        'icon': '🚴‍♀️',
        'metric_label': 'SPEED',
        'metric_icon': '⚡️',
        'metric_unit': 'km/h',
        'specific_field': FIELD_ELEVATION,
        'specific_label': 'ELEV GAIN',
        'specific_icon': '⛰️',
        'specific_unit': 'm',
        'color': '#f97316',  # Orange
    },
}

DISTANCE_UNIT = 'km'
DURATION_UNIT = 'min'
DURATION_ICON = '⏱'

KIND_OPTIONS: Dict[str, str] = {kind: profile['label'] for kind, profile in KIND_PROFILES.items()}
DEFAULT_KIND = 'running'

UI_COPY: Dict[str, str] = {
    'invalid_input': 'Inputs have to be positive numbers!',
    'missing_location': 'Click on the map to choose where the activity happened.',
    'position_unavailable': 'Unable to get your current position',
    'locating': 'Locating you...',
    'empty_list': 'Click on the map to log your first activity.',
    'export_empty': 'No data to export',
    'export_done': 'CSV saved! (check your Downloads folder)',
}
