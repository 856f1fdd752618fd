"""tmux helpers for per-issue work sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from octopai.adapters.base import CliAdapterBase
from octopai.models import Card, IssueRef

if TYPE_CHECKING:
    from collections.abc import Sequence

_SESSION_FORMAT = "#{session_name}\t#{session_windows}\t#{session_attached}"


def parse_session_list(output: str) -> list[Card]:
    """Parse ``tmux list-sessions`` output produced with ``_SESSION_FORMAT``."""
    cards: list[Card] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        name, _, rest = line.partition("\t")
        windows, _, attached = rest.partition("\t")
        is_attached = attached.strip() not in ("", "0")
        window_count = int(windows) if windows.strip().isdigit() else 0

        related = {f"wt-{name}"}
        if (ref := IssueRef.parse(name)) is not None:
            related.add(ref.card_id)

        cards.append(
            Card(
                id=f"session-{name}",
                title=name,
                description=f"{window_count} window{'s' if window_count != 1 else ''}",
                tag="attached" if is_attached else "detached",
                tag_color="green" if is_attached else "grey50",
                related=frozenset(related),
            )
        )
    return cards


class TmuxClient(CliAdapterBase):
    """Terminal multiplexer collaborator backed by the tmux CLI."""

    executable = "tmux"

    async def list_sessions(self) -> list[Card]:
        # list-sessions exits non-zero when no server is running.
        result = await self._run("list-sessions", "-F", _SESSION_FORMAT)
        if not result.ok:
            return []
        return parse_session_list(result.stdout_text())

    async def new_session(self, name: str, cwd: str, command: Sequence[str]) -> None:
        """Start a detached session running ``command`` in its first pane."""
        await self._run_checked("tmux error", "new-session", "-d", "-s", name, "-c", cwd, *command)

    async def split_window(self, target: str, cwd: str) -> None:
        await self._run_checked("tmux split error", "split-window", "-h", "-t", target, "-c", cwd)

    async def send_keys(self, target: str, text: str) -> None:
        """Type ``text`` into the active pane of ``target`` and press Enter."""
        await self._run_checked("tmux send-keys error", "send-keys", "-t", target, text, "Enter")

    async def kill_session(self, name: str) -> None:
        await self._run_checked("tmux kill-session error", "kill-session", "-t", name)


__all__ = ["TmuxClient", "parse_session_list"]
