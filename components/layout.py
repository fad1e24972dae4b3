"""
components/layout.py
────────────────────
Application shell for Trailmark.

Owns:
  • Sidebar scaffolding (branding, entry form slot, session stats, export, activity list)
  • Full-height map container

Does not own:
  • Domain/business handlers (injected callbacks)
  • The form, list, and map widgets themselves (injected components)
"""
from __future__ import annotations

from nicegui import ui

from constants import APP_TITLE, UI_COPY


class AppShell:
    """Encapsulates app-level shell scaffolding and shell-owned UI state."""

    def __init__(self, workout_form, activity_list, callbacks=None):
        self.workout_form = workout_form
        self.activity_list = activity_list
        self.callbacks = callbacks or {}

        # Sidebar refs
        self.stats_label = None
        self.export_btn = None

        # Main-content refs
        self.map_container = None

    def build(self):
        """Build the full shell (sidebar + map)."""
        with ui.row().classes('w-full h-screen m-0 p-0 gap-0 no-wrap overflow-hidden'):
            self.build_sidebar()
            self.build_main_content()
        return self

    def build_sidebar(self):
        on_export_csv = self.callbacks.get('on_export_csv')

        with ui.column().classes('w-96 bg-zinc-900 p-4 h-screen flex-shrink-0 gap-3'):
            ui.label(f'🗺️ {APP_TITLE}').classes('text-2xl font-black tracking-tight text-white mb-4')

            self.workout_form.build()

            with ui.row().classes('w-full items-center justify-between'):
                self.stats_label = ui.label('').classes('text-xs text-zinc-400 font-bold tracking-wide')
                self.export_btn = ui.button(
                    'EXPORT CSV',
                    on_click=on_export_csv,
                    icon='download',
                ).classes('bg-zinc-800 text-white hover:bg-zinc-700').props('flat dense disable')

            ui.separator().classes('bg-zinc-800')

            with ui.scroll_area().classes('w-full flex-1'):
                self.activity_list.build()

    def build_main_content(self):
        with ui.column().classes('flex-1 h-screen p-0 gap-0'):
            self.map_container = ui.column().classes('w-full h-full items-center justify-center')
            with self.map_container:
                ui.spinner(size='lg')
                ui.label(UI_COPY['locating']).classes('text-zinc-400')

    def update_stats(self, totals):
        """Refresh the session stats line and export availability."""
        count = totals.get('count', 0)
        if count == 0:
            self.stats_label.set_text('')
            self.export_btn.props('disable')
            return

        parts = [
            f"{count} activit{'ies' if count != 1 else 'y'}",
            f"{totals.get('total_distance_km', 0):g} km",
            f"{totals.get('total_duration_min', 0):g} min",
        ]
        if totals.get('avg_pace_min_per_km') is not None:
            parts.append(f"avg pace {totals['avg_pace_min_per_km']:g} min/km")
        if totals.get('avg_speed_kmh') is not None:
            parts.append(f"avg speed {totals['avg_speed_kmh']:g} km/h")
        self.stats_label.set_text(' · '.join(parts))
        self.export_btn.props(remove='disable')
