"""
components/activity_list.py
───────────────────────────
List renderer: one card per logged activity, in creation order.

Cards are built from the plain summary record produced by
core.activity.activity_summary; clicking a card calls
on_activate(activity_id).
"""
from __future__ import annotations

from nicegui import ui

from constants import UI_COPY


def _format_value(value):
    """Drop a trailing .0 so 5.0 km renders as 5."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def create_activity_card(summary, *, on_activate=None):
    """Render a single activity card."""
    activity_id = summary.get('id')
    color = summary.get('color', '#10b981')
    units = summary.get('units', {})
    icons = summary.get('icons', {})

    card = ui.card().classes(
        'w-full p-3 bg-zinc-800 cursor-pointer hover:bg-zinc-700 transition-all'
    ).style(f'border-left: 5px solid {color};')
    card.props(f'data-id="{activity_id}"')

    if activity_id and on_activate:
        card.on('click', lambda aid=activity_id: on_activate(aid))

    with card:
        ui.label(summary.get('title', '')).classes('text-sm font-bold text-zinc-200')
        with ui.row().classes('w-full gap-4 items-center'):
            for key in ('distance_km', 'duration_min', 'derived_metric', 'kind_specific_value'):
                unit_key = {'distance_km': 'distance', 'duration_min': 'duration'}.get(key, key)
                with ui.row().classes('items-baseline gap-1'):
                    ui.label(icons.get(unit_key, '')).classes('text-sm')
                    ui.label(_format_value(summary.get(key, 0))).classes('text-base font-bold text-white')
                    ui.label(units.get(unit_key, '')).classes('text-[10px] text-zinc-400 font-bold uppercase')

    return card


class ActivityList:
    """Sidebar activity list."""

    def __init__(self, callbacks=None):
        """
        Required callbacks in `callbacks`:
          - on_activate(activity_id)
        """
        self.callbacks = callbacks or {}
        self.container = None
        self.empty_label = None
        self.entries = []

    def build(self):
        self.container = ui.column().classes('w-full gap-2')
        with self.container:
            self.empty_label = ui.label(UI_COPY['empty_list']).classes('text-xs text-zinc-500')
        return self

    def append_entry(self, summary):
        if self.empty_label is not None:
            self.empty_label.delete()
            self.empty_label = None
        with self.container:
            card = create_activity_card(summary, on_activate=self.callbacks.get('on_activate'))
        self.entries.append(card)
        return card

    def remove_entry(self, card):
        if card is None or card not in self.entries:
            return
        self.entries.remove(card)
        card.delete()
        if not self.entries and self.empty_label is None:
            with self.container:
                self.empty_label = ui.label(UI_COPY['empty_list']).classes('text-xs text-zinc-500')
