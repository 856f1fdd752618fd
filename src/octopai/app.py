"""Main Octopai TUI application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App

from octopai.adapters import GitClient, GitHubClient, LocalIssueStore, TmuxClient
from octopai.controller import Dashboard, KeyResult
from octopai.debug_log import (
    debug_export_enabled,
    export_logs_to_file,
    log,
    setup_debug_logging,
)
from octopai.paths import get_debug_log_path
from octopai.process import ProcessCommandRunner
from octopai.state import Screen
from octopai.terminal import supports_truecolor
from octopai.theme import OCTOPAI_THEME, OCTOPAI_THEME_256
from octopai.ui.screens import BoardScreen, RepoSelectScreen

if TYPE_CHECKING:
    from pathlib import Path

    from octopai.controller import KeyInput
    from octopai.preflight import PreflightResult
    from octopai.process import CommandRunner
    from octopai.ui.screens.base import OctopaiScreen


class OctopaiApp(App):
    """Octopai TUI application: issues, worktrees, pull requests and sessions."""

    TITLE = "octopai"
    CSS_PATH = "styles/octopai.tcss"

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        config_path: Path | None = None,
        local_issues: LocalIssueStore | None = None,
        preflight: PreflightResult | None = None,
    ):
        super().__init__()
        self._preflight = preflight

        self.register_theme(OCTOPAI_THEME)
        self.register_theme(OCTOPAI_THEME_256)
        self.theme = "octopai" if supports_truecolor() else "octopai-256"

        if runner is None:
            runner = ProcessCommandRunner()
        self.dashboard = Dashboard(
            github=GitHubClient(runner),
            git=GitClient(runner),
            tmux=TmuxClient(runner),
            local_issues=local_issues or LocalIssueStore(),
            config_path=config_path,
            on_loading=self.sync_view,
        )

    async def on_mount(self) -> None:
        setup_debug_logging()
        await self.dashboard.start(self._preflight)
        await self.push_screen(self._screen_for_state())
        self.log("Dashboard started", screen=self.dashboard.state.screen.name)

    def _screen_for_state(self) -> OctopaiScreen:
        if self.dashboard.state.screen is Screen.BOARD:
            return BoardScreen()
        return RepoSelectScreen()

    async def handle_input(self, key: KeyInput) -> None:
        """Apply one key to the dashboard, then redraw or quit."""
        result = await self.dashboard.handle_key(key)
        if result is KeyResult.QUIT:
            self.exit()
            return
        await self.sync_view()

    async def sync_view(self) -> None:
        wanted = BoardScreen if self.dashboard.state.screen is Screen.BOARD else RepoSelectScreen
        if isinstance(self.screen, wanted):
            self.screen.sync_state()
        else:
            # Not awaited: the outgoing screen is the one dispatching this key.
            self.switch_screen(self._screen_for_state())

    def on_unmount(self) -> None:
        if debug_export_enabled():
            count = export_logs_to_file(get_debug_log_path())
            log.info("Debug log exported", entries=count)


def run() -> None:
    """Run the Octopai application."""
    app = OctopaiApp()
    app.run()


if __name__ == "__main__":
    run()
