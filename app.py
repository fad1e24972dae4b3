"""
Trailmark - map-based activity logger
"""

# Standard library imports
import logging

# Third-party imports
from nicegui import Client, ui

# Local imports
from constants import APP_TITLE, DEFAULT_PORT, DEFAULT_ZOOM, UI_COPY
from core.controller import InteractionController
from core.data_manager import DataManager
from components.activity_list import ActivityList
from components.geolocation import BrowserPositionService
from components.layout import AppShell
from components.map_view import MapView
from components.workout_form import WorkoutForm

logger = logging.getLogger(__name__)


class MuteFrameworkNoise(logging.Filter):
    def filter(self, record):
        # Filter out the specific NiceGUI warning about event listeners
        return "Event listeners changed after initial definition" not in record.getMessage()


# --- MAIN APPLICATION CLASS ---
class TrailmarkApp:
    """One activity-logging session, bound to a single client page."""

    def __init__(self, zoom=DEFAULT_ZOOM, position_service=None, data_manager=None):
        self.data_manager = data_manager or DataManager()
        self.position_service = position_service or BrowserPositionService()

        # ── UI components (callbacks resolved lazily via self.controller) ──
        self.workout_form = WorkoutForm(callbacks={
            'on_submit': lambda submission: self.controller.handle_submit(submission),
            'on_kind_change': lambda kind: self.controller.handle_kind_change(kind),
        })
        self.activity_list = ActivityList(callbacks={
            'on_activate': lambda activity_id: self.controller.handle_list_activation(activity_id),
        })
        self.layout = AppShell(
            workout_form=self.workout_form,
            activity_list=self.activity_list,
            callbacks={'on_export_csv': self.export_csv},
        )

        # Build UI
        self.layout.build()
        self.map_view = MapView(container=self.layout.map_container)

        # ── Interaction controller owns the session state ────────────────
        self.controller = InteractionController(
            map_service=self.map_view,
            form=self.workout_form,
            list_renderer=self.activity_list,
            zoom=zoom,
        )
        self.controller.subscribe(self._on_state_changed)
        self.layout.update_stats(self.data_manager.session_totals(()))

    def _on_state_changed(self, state):
        self.layout.update_stats(self.data_manager.session_totals(state.activities))

    async def locate_user(self):
        """Request the one-shot browser position; the controller handles both outcomes."""
        await self.controller.request_position(self.position_service)

    def export_csv(self):
        activities = self.controller.activities
        if not activities:
            ui.notify(UI_COPY['export_empty'], type='warning')
            return
        try:
            path = self.data_manager.export_csv(activities)
        except OSError as e:
            logger.warning("CSV export failed: %s", e)
            ui.notify(f'Export failed: {e}', type='negative')
            return
        logger.info("Exported %d activities to %s", len(activities), path)
        ui.notify(UI_COPY['export_done'], type='positive', timeout=5000)


@ui.page('/')
async def index(client: Client):
    trailmark = TrailmarkApp()
    await client.connected()
    await trailmark.locate_user()


def main():
    """Application entry point."""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    # Suppress known NiceGUI framework listener-churn warning noise
    nicegui_logger = logging.getLogger('nicegui')
    nicegui_logger.addFilter(MuteFrameworkNoise())

    try:
        ui.run(
            title=APP_TITLE,
            port=DEFAULT_PORT,
            reload=False,
            dark=True,
        )
    except KeyboardInterrupt:
        # Graceful terminal interrupt during local development.
        pass


if __name__ in {"__main__", "__mp_main__"}:
    main()
