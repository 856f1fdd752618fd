"""Subprocess execution for external collaborators (gh, git, tmux)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from octopai.debug_log import log

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ProcessResult:
    """Captured result of a subprocess execution."""

    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def stdout_text(self) -> str:
        """Decode stdout as UTF-8 with replacement."""
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        """Decode stderr as UTF-8 with replacement."""
        return self.stderr.decode("utf-8", errors="replace")


class CommandRunner(Protocol):
    """Narrow boundary every external command goes through."""

    async def run(
        self,
        executable: str,
        *args: str,
        cwd: str | Path | None = None,
    ) -> ProcessResult: ...


async def run_exec_capture(
    executable: str,
    *args: str,
    cwd: str | Path | None = None,
) -> ProcessResult:
    """Run an exec subprocess to completion and capture stdout/stderr.

    There is no timeout: the caller waits for as long as the command runs.
    Spawn failures (missing executable, bad cwd) propagate as ``OSError``.
    """
    process = await asyncio.create_subprocess_exec(
        executable,
        *args,
        cwd=None if cwd is None else str(cwd),
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    return ProcessResult(
        returncode=process.returncode if process.returncode is not None else 1,
        stdout=stdout or b"",
        stderr=stderr or b"",
    )


class ProcessCommandRunner:
    """Run commands as real subprocesses."""

    def __init__(self, cwd: str | Path | None = None) -> None:
        self._cwd = cwd

    async def run(
        self,
        executable: str,
        *args: str,
        cwd: str | Path | None = None,
    ) -> ProcessResult:
        log.debug("exec", command=" ".join((executable, *args)))
        result = await run_exec_capture(executable, *args, cwd=cwd or self._cwd)
        if not result.ok:
            log.debug("exec failed", command=executable, returncode=result.returncode)
        return result


__all__ = [
    "CommandRunner",
    "ProcessCommandRunner",
    "ProcessResult",
    "run_exec_capture",
]
