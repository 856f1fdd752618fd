"""Shared command execution for CLI-backed adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from octopai.process import ProcessCommandRunner

if TYPE_CHECKING:
    from pathlib import Path

    from octopai.process import CommandRunner, ProcessResult


class CommandError(RuntimeError):
    """Raised when an external command fails; the text is shown to the operator."""


class CliAdapterBase:
    """Base helper binding an adapter to one executable and a command runner."""

    executable: str = ""

    def __init__(self, runner: CommandRunner | None = None, *, cwd: str | Path | None = None):
        self._runner = runner or ProcessCommandRunner()
        self._cwd = cwd

    async def _run(self, *args: str, cwd: str | Path | None = None) -> ProcessResult:
        try:
            return await self._runner.run(self.executable, *args, cwd=cwd or self._cwd)
        except OSError as exc:
            raise CommandError(f"Failed to run {self.executable}: {exc}") from exc

    async def _run_checked(
        self, label: str, *args: str, cwd: str | Path | None = None
    ) -> ProcessResult:
        """Run and raise ``CommandError("<label>: <stderr>")`` on a non-zero exit."""
        result = await self._run(*args, cwd=cwd)
        if not result.ok:
            detail = result.stderr_text().strip() or result.stdout_text().strip()
            raise CommandError(f"{label}: {detail or f'exit status {result.returncode}'}")
        return result
