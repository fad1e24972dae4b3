"""
components/geolocation.py
─────────────────────────
Browser position service.

Asks the connected client for navigator.geolocation through
ui.run_javascript and reports the outcome through exactly one of two
callbacks.
"""
from __future__ import annotations

import logging

from nicegui import ui

from constants import GEOLOCATION_TIMEOUT_SEC
from core.errors import PositionUnavailableError

logger = logging.getLogger(__name__)

_GET_POSITION_JS = '''
new Promise((resolve) => {
    if (!navigator.geolocation) {
        resolve({error: 'Geolocation is not supported by this browser'});
        return;
    }
    navigator.geolocation.getCurrentPosition(
        (position) => resolve({
            latitude: position.coords.latitude,
            longitude: position.coords.longitude,
        }),
        (err) => resolve({error: err && err.message ? err.message : 'Position unavailable'}),
    );
})
'''


class BrowserPositionService:
    """One-shot geolocation through the current NiceGUI client."""

    def __init__(self, timeout=GEOLOCATION_TIMEOUT_SEC):
        self.timeout = timeout

    async def get_current_position(self, on_success, on_failure):
        """
        Resolve the browser position.

        Calls on_success((latitude, longitude)) or on_failure(PositionUnavailableError),
        never both.
        """
        try:
            result = await ui.run_javascript(_GET_POSITION_JS, timeout=self.timeout)
        except TimeoutError:
            logger.warning("Geolocation request timed out after %.0fs", self.timeout)
            on_failure(PositionUnavailableError('Timed out waiting for the browser position'))
            return

        if not isinstance(result, dict) or 'error' in result:
            reason = result.get('error') if isinstance(result, dict) else 'Malformed geolocation response'
            on_failure(PositionUnavailableError(reason))
            return

        try:
            coords = (float(result['latitude']), float(result['longitude']))
        except (KeyError, TypeError, ValueError):
            on_failure(PositionUnavailableError('Malformed geolocation response'))
            return
        on_success(coords)
