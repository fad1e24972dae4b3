"""
components/map_view.py
──────────────────────
Leaflet map service backed by ui.leaflet.

Owns:
  • Lazy map creation inside the shell's map container
  • Click forwarding as (lat, lng)
  • Activity markers with a permanently open popup, and their removal
  • Animated recentering

Does not own:
  • Deciding when any of this happens (InteractionController)
"""
from __future__ import annotations

import html
import logging

from nicegui import ui

from constants import (
    KIND_PROFILES,
    MAP_TILE_ATTRIBUTION,
    MAP_TILE_URL,
    RECENTER_DURATION_SEC,
)

logger = logging.getLogger(__name__)


class MapView:
    """Map service adapter. initialize() must run before any other call."""

    def __init__(self, container=None):
        self.container = container
        self.map = None
        self.markers = []

    def _require_map(self):
        if self.map is None:
            raise RuntimeError("Map has not been initialized")
        return self.map

    def initialize(self, center, zoom):
        """Create the Leaflet map centered on `center`."""
        if self.map is not None:
            logger.warning("Map already initialized; ignoring second initialize()")
            return self.map

        def _build():
            m = ui.leaflet(center=tuple(center), zoom=zoom, options={
                'zoomControl': True,
                'attributionControl': True,
            }).classes('w-full h-full')
            m.tile_layer(
                url_template=MAP_TILE_URL,
                options={'maxZoom': 19, 'attribution': MAP_TILE_ATTRIBUTION},
            )
            return m

        if self.container is not None:
            self.container.clear()
            with self.container:
                self.map = _build()
        else:
            self.map = _build()
        return self.map

    def on_click(self, handler):
        """Forward map clicks to handler((lat, lng))."""
        m = self._require_map()

        def _forward(e):
            latlng = (e.args or {}).get('latlng') or {}
            if 'lat' not in latlng or 'lng' not in latlng:
                return
            handler((latlng['lat'], latlng['lng']))

        m.on('map-click', _forward)

    def add_marker(self, location, label, icon_glyph, kind=None):
        """Drop a marker at `location` with an open popup showing glyph and label."""
        m = self._require_map()
        profile = KIND_PROFILES.get(kind, {})
        color = profile.get('color', '#10b981')
        content = (
            f'<h3 style="margin:0;font-size:14px;border-left:4px solid {color};padding-left:8px;">'
            f'{html.escape(icon_glyph)} {html.escape(label)}</h3>'
        )

        marker = m.marker(latlng=tuple(location))
        marker.run_method('bindPopup', content, {
            'maxWidth': 250,
            'minWidth': 100,
            'autoClose': False,
            'closeOnClick': False,
            'className': f'{kind or "activity"}-popup',
        })
        marker.run_method('openPopup')
        self.markers.append(marker)
        return marker

    def recenter(self, location, zoom, animated=True):
        m = self._require_map()
        m.run_map_method('setView', list(location), zoom, {
            'animate': bool(animated),
            'duration': RECENTER_DURATION_SEC,
        })

    def remove_marker(self, marker):
        if marker is None or marker not in self.markers:
            return
        self._require_map().remove_layer(marker)
        self.markers.remove(marker)
