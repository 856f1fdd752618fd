"""Tests for tmux session parsing and commands."""

from __future__ import annotations

import pytest

from octopai.adapters import CommandError, TmuxClient
from octopai.adapters.tmux import parse_session_list
from tests.helpers import FakeCommandRunner

pytestmark = pytest.mark.unit


def test_parse_session_list() -> None:
    cards = parse_session_list("issue-7\t2\t1\nscratch\t1\t0\n")

    assert [card.id for card in cards] == ["session-issue-7", "session-scratch"]
    assert cards[0].tag == "attached"
    assert cards[0].description == "2 windows"
    assert cards[0].related == frozenset({"wt-issue-7", "issue-7"})
    assert cards[1].tag == "detached"
    assert cards[1].description == "1 window"
    assert cards[1].related == frozenset({"wt-scratch"})


async def test_list_sessions_without_server_is_empty() -> None:
    runner = FakeCommandRunner()
    runner.fail("tmux", "list-sessions", stderr="no server running on /tmp/tmux-1000/default")

    assert await TmuxClient(runner).list_sessions() == []


async def test_session_commands() -> None:
    runner = FakeCommandRunner()
    tmux = TmuxClient(runner)

    await tmux.new_session("issue-7", "../widgets-issue-7", ("nvim", "."))
    await tmux.split_window("issue-7", "../widgets-issue-7")
    await tmux.send_keys("issue-7", "echo hi")
    await tmux.kill_session("issue-7")

    assert runner.calls == [
        ("tmux", "new-session", "-d", "-s", "issue-7", "-c", "../widgets-issue-7", "nvim", "."),
        ("tmux", "split-window", "-h", "-t", "issue-7", "-c", "../widgets-issue-7"),
        ("tmux", "send-keys", "-t", "issue-7", "echo hi", "Enter"),
        ("tmux", "kill-session", "-t", "issue-7"),
    ]


async def test_split_failure_is_labelled() -> None:
    runner = FakeCommandRunner()
    runner.fail("tmux", "split-window", stderr="can't find session: issue-7")

    with pytest.raises(CommandError, match="^tmux split error: can't find session: issue-7$"):
        await TmuxClient(runner).split_window("issue-7", "/tmp")
