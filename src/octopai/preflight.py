"""Pre-flight checks for the external tools Octopai drives.

Pure detection logic with no TUI dependencies. The CLI runs it before the
app starts; the dashboard puts anything missing into its status line, and
``octopai --check`` prints the full report.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from octopai.constants import ASSISTANT_EXECUTABLE
from octopai.debug_log import log

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from octopai.process import CommandRunner, ProcessResult


class IssueSeverity(Enum):
    BLOCKING = "blocking"
    WARNING = "warning"


class PackageManager(Enum):
    BREW = "brew"
    APT = "apt"
    DNF = "dnf"
    PACMAN = "pacman"
    UNKNOWN = "unknown"


_INSTALL_TEMPLATES: dict[PackageManager, str] = {
    PackageManager.BREW: "brew install {}",
    PackageManager.APT: "sudo apt install -y {}",
    PackageManager.DNF: "sudo dnf install -y {}",
    PackageManager.PACMAN: "sudo pacman -S --noconfirm {}",
}
_SYSTEM_PACKAGES = frozenset({"gh", "git", "tmux"})
_NPM_INSTALLS = {"claude": "npm install -g @anthropic-ai/claude-code"}


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    severity: IssueSeverity
    version_flag: str = "--version"

    @property
    def required(self) -> bool:
        return self.severity is IssueSeverity.BLOCKING


TOOLS: tuple[Tool, ...] = (
    Tool("git", "Version control with worktree support", IssueSeverity.BLOCKING),
    Tool("gh", "GitHub CLI for repositories, issues and pull requests", IssueSeverity.WARNING),
    Tool("tmux", "Terminal multiplexer for work sessions", IssueSeverity.WARNING, "-V"),
    Tool(
        ASSISTANT_EXECUTABLE,
        "Coding assistant started in every new session",
        IssueSeverity.BLOCKING,
    ),
)


@dataclass(frozen=True)
class ToolStatus:
    tool: Tool
    available: bool
    version: str | None = None
    install_hint: str | None = None


@dataclass
class PreflightResult:
    tools: list[ToolStatus] = field(default_factory=list)

    @property
    def missing(self) -> list[ToolStatus]:
        """Unavailable tools, required ones first."""
        absent = [status for status in self.tools if not status.available]
        return sorted(absent, key=lambda status: not status.tool.required)

    @property
    def has_blocking_issues(self) -> bool:
        return any(status.tool.required for status in self.missing)

    def summary(self) -> str | None:
        """One line naming every missing tool with its install hint, or None."""
        missing = self.missing
        if not missing:
            return None
        parts = []
        for status in missing:
            label = "required" if status.tool.required else "recommended"
            if status.install_hint:
                label = f"{label}; {status.install_hint}"
            parts.append(f"{status.tool.name} ({label})")
        return f"Missing tools: {', '.join(parts)}"


def detect_package_manager(
    which: Callable[[str], str | None] = shutil.which,
) -> PackageManager:
    for manager in (
        PackageManager.BREW,
        PackageManager.APT,
        PackageManager.DNF,
        PackageManager.PACMAN,
    ):
        if which(manager.value) is not None:
            return manager
    return PackageManager.UNKNOWN


def install_command(tool_name: str, manager: PackageManager) -> str | None:
    """Shell command that installs ``tool_name``, or None when there is no known one."""
    if tool_name in _NPM_INSTALLS:
        return _NPM_INSTALLS[tool_name]
    template = _INSTALL_TEMPLATES.get(manager)
    if template is None or tool_name not in _SYSTEM_PACKAGES:
        return None
    return template.format(tool_name)


def _first_line(result: ProcessResult) -> str | None:
    text = result.stdout_text().strip() or result.stderr_text().strip()
    return text.splitlines()[0] if text else None


async def _check_tool(
    tool: Tool,
    runner: CommandRunner,
    which: Callable[[str], str | None],
    manager: PackageManager,
) -> ToolStatus:
    available = False
    version = None
    if which(tool.name) is not None:
        try:
            result = await runner.run(tool.name, tool.version_flag)
        except OSError as exc:
            log.warning("Version check failed", tool=tool.name, error=str(exc))
        else:
            available = result.ok
            version = _first_line(result)
    if available:
        return ToolStatus(tool, True, version)
    return ToolStatus(tool, False, None, install_command(tool.name, manager))


async def check_dependencies(
    runner: CommandRunner,
    *,
    tools: Sequence[Tool] = TOOLS,
    which: Callable[[str], str | None] = shutil.which,
) -> PreflightResult:
    """Locate each tool on PATH and record the first line of its version output."""
    manager = detect_package_manager(which)
    statuses = [await _check_tool(tool, runner, which, manager) for tool in tools]
    for status in statuses:
        if not status.available:
            log.warning(
                "Tool not available",
                tool=status.tool.name,
                severity=status.tool.severity.value,
            )
    return PreflightResult(statuses)


__all__ = [
    "TOOLS",
    "IssueSeverity",
    "PackageManager",
    "PreflightResult",
    "Tool",
    "ToolStatus",
    "check_dependencies",
    "detect_package_manager",
    "install_command",
]
