"""Base screen class for Octopai screens."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from textual.screen import Screen

from octopai.controller import KeyInput

if TYPE_CHECKING:
    from textual import events

    from octopai.app import OctopaiApp
    from octopai.state import AppState


class OctopaiScreen(Screen):
    """Screen that forwards every key to the dashboard and redraws from state."""

    inherit_bindings = False

    @property
    def octopai_app(self) -> OctopaiApp:
        return cast("OctopaiApp", self.app)

    @property
    def app_state(self) -> AppState:
        return self.octopai_app.dashboard.state

    def on_mount(self) -> None:
        self.sync_state()

    def on_screen_resume(self) -> None:
        self.sync_state()

    async def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        await self.octopai_app.handle_input(KeyInput.from_event(event))

    def sync_state(self) -> None:
        """Redraw every widget from the current ``AppState``."""
        raise NotImplementedError
