"""
components/workout_form.py
──────────────────────────
Activity entry form (kind selector + four numeric inputs).

Owns:
  • Form card visibility, field focus, and clearing
  • Showing exactly one of the cadence / elevation inputs
  • Reading raw field values into a FormSubmission on Enter / Save

Does NOT own:
  • Coercion or validation of the values (core.controller / core.validation)
"""
from __future__ import annotations

from nicegui import ui

from constants import (
    DEFAULT_KIND,
    FIELD_CADENCE,
    FIELD_DISTANCE,
    FIELD_DURATION,
    FIELD_ELEVATION,
    KIND_OPTIONS,
    KIND_PROFILES,
)
from core.controller import FormSubmission


class WorkoutForm:
    """Form/UI collaborator for the interaction controller."""

    def __init__(self, callbacks=None):
        """
        Required callbacks in `callbacks`:
          - on_submit(FormSubmission)
          - on_kind_change(kind)
        """
        self.callbacks = callbacks or {}
        self.card = None
        self.kind_select = None
        self.fields = {}

    def build(self):
        on_kind_change = self.callbacks.get('on_kind_change')

        self.card = ui.card().classes('w-full bg-zinc-800 p-4 gap-2')
        with self.card:
            with ui.grid(columns=2).classes('w-full gap-x-4 gap-y-2'):
                self.kind_select = ui.select(
                    options=KIND_OPTIONS,
                    value=DEFAULT_KIND,
                    label='Type',
                    on_change=lambda e: on_kind_change and on_kind_change(e.value),
                ).props('outlined dense dark behavior="menu"')

                self._add_field(FIELD_DISTANCE, 'Distance', 'km')
                self._add_field(FIELD_DURATION, 'Duration', 'min')
                self._add_field(FIELD_CADENCE, 'Cadence', 'step/min')
                self._add_field(FIELD_ELEVATION, 'Elev Gain', 'meters')

            ui.button('SAVE', icon='check', on_click=self._submit).classes(
                'w-full bg-zinc-700 text-white hover:bg-zinc-600'
            ).props('flat')

        self.toggle_field(KIND_PROFILES[DEFAULT_KIND]['specific_field'])
        self.card.set_visibility(False)
        return self

    def _add_field(self, name, label, placeholder):
        field = ui.input(label=label, placeholder=placeholder).props('outlined dense dark')
        field.on('keydown.enter', self._submit)
        self.fields[name] = field

    def _value(self, name):
        return self.fields[name].value

    def _submit(self, *_):
        on_submit = self.callbacks.get('on_submit')
        if not callable(on_submit):
            return
        on_submit(FormSubmission(
            kind=self.kind_select.value,
            distance=self._value(FIELD_DISTANCE),
            duration=self._value(FIELD_DURATION),
            cadence=self._value(FIELD_CADENCE),
            elevation=self._value(FIELD_ELEVATION),
        ))

    # --- Form collaborator API ---

    def show_form(self):
        self.card.set_visibility(True)

    def hide_form(self):
        self.fields[FIELD_DISTANCE].run_method('blur')
        self.card.set_visibility(False)

    def focus_field(self, name):
        self.fields[name].run_method('focus')

    def clear_fields(self):
        for name in (FIELD_DISTANCE, FIELD_DURATION, FIELD_CADENCE, FIELD_ELEVATION):
            self.fields[name].set_value('')

    def toggle_field(self, name):
        """Present `name` (cadence or elevation) and hide its sibling."""
        sibling = FIELD_ELEVATION if name == FIELD_CADENCE else FIELD_CADENCE
        self.fields[name].set_visibility(True)
        self.fields[sibling].set_visibility(False)

    def alert(self, message):
        ui.notify(message, type='negative')
