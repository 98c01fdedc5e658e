"""Ordered converter-location strategies.

Each strategy takes a :class:`ResolutionContext` and returns a
:class:`ResolvedExecutable` or ``None``. A strategy only ever returns a path
that passed the executability check for the context's platform.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from pandoc_export.application.ports import FileSystem, ProcessRunner
from pandoc_export.application.results import ResolvedExecutable
from pandoc_export.platform import TOOL_NAME, PlatformFacts
from pandoc_export.resolution.shell_profile import (
    extract_path_entries,
    parse_path_output,
    startup_file_for,
)
from pandoc_export.schemas import DEFAULT_HINT
from pandoc_export.types import OsFamily, Provenance

logger = logging.getLogger(__name__)

ALL_FAMILIES: frozenset[OsFamily] = frozenset({"windows", "macos", "linux"})
MACOS_ONLY: frozenset[OsFamily] = frozenset({"macos"})
NON_BINARY_SUFFIXES = (".html", ".txt")


@dataclass
class ResolutionContext:
    """Per-call inputs shared by all strategies."""

    hint: str
    platform: PlatformFacts
    fs: FileSystem
    runner: ProcessRunner
    probe_timeout: float = 10.0
    searched: set[str] = field(default_factory=set)

    def check(self, path: str) -> str | None:
        """Return ``path`` (or its suffixed variant) if it is executable."""
        if self.fs.is_executable(path):
            return path
        suffix = self.platform.profile.executable_suffix
        if suffix and not path.lower().endswith(suffix):
            suffixed = path + suffix
            if self.fs.is_executable(suffixed):
                return suffixed
        return None

    def probe_dir(self, directory: str) -> str | None:
        self.searched.add(directory)
        candidate = self.platform.join(directory, self.platform.profile.tool_filename)
        if self.fs.is_executable(candidate):
            return candidate
        return None


StrategyFunc = Callable[[ResolutionContext], ResolvedExecutable | None]


@dataclass(frozen=True)
class Strategy:
    """Named strategy restricted to a set of OS families."""

    name: str
    func: StrategyFunc
    families: frozenset[OsFamily] = ALL_FAMILIES

    def applies_to(self, family: OsFamily) -> bool:
        return family in self.families

    def __call__(self, ctx: ResolutionContext) -> ResolvedExecutable | None:
        return self.func(ctx)


def user_absolute(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Use the hint as-is when it is an absolute path."""
    if not ctx.platform.is_absolute(ctx.hint):
        return None
    found = ctx.check(ctx.hint)
    if found is None:
        logger.debug("configured path is missing or not executable: %s", ctx.hint)
        return None
    return ResolvedExecutable(path=found, provenance="user-absolute")


def user_relative(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Resolve a non-default relative hint against the working directory."""
    if ctx.hint == DEFAULT_HINT or ctx.platform.is_absolute(ctx.hint):
        return None
    path_module = ctx.platform.profile.path_module
    candidate = path_module.normpath(ctx.platform.join(ctx.platform.cwd, ctx.hint))
    found = ctx.check(candidate)
    if found is None:
        logger.debug("relative path is missing or not executable: %s", candidate)
        return None
    return ResolvedExecutable(path=found, provenance="user-relative")


def candidate_directories(platform: PlatformFacts) -> list[tuple[str, Provenance]]:
    """PATH entries followed by well-known install directories, deduplicated."""
    seen: set[str] = set()
    ordered: list[tuple[str, Provenance]] = []
    sources: list[tuple[tuple[str, ...], Provenance]] = [
        (platform.search_path, "path-search"),
        (platform.profile.well_known_dirs, "well-known-location"),
    ]
    for directories, provenance in sources:
        for directory in directories:
            if not directory or directory in seen:
                continue
            seen.add(directory)
            ordered.append((directory, provenance))
    return ordered


def path_search(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Probe every PATH entry and well-known directory in order."""
    for directory, provenance in candidate_directories(ctx.platform):
        found = ctx.probe_dir(directory)
        if found is not None:
            return ResolvedExecutable(path=found, provenance=provenance)
    return None


def _login_shell_path(ctx: ResolutionContext) -> list[str]:
    shell = ctx.platform.login_shell
    try:
        completed = ctx.runner.run(
            [shell, "-l", "-c", "echo $PATH"],
            env=ctx.platform.environ,
            timeout=ctx.probe_timeout,
        )
    except Exception as exc:
        logger.debug("unable to read PATH from %s: %s", shell, exc)
        return []
    if completed.returncode != 0:
        logger.debug("%s exited with %s while printing PATH", shell, completed.returncode)
        return []
    return parse_path_output(completed.stdout, ctx.platform.profile.path_separator)


def _shell_profile_dirs(ctx: ResolutionContext) -> Iterator[str]:
    platform = ctx.platform
    startup = platform.join(platform.home, startup_file_for(platform.login_shell))
    text = ctx.fs.read_text(startup)
    if text is not None:
        yield from extract_path_entries(text, platform.home)
    yield from _login_shell_path(ctx)


def shell_introspection(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Probe directories taken from the shell startup file and login shell."""
    for directory in _shell_profile_dirs(ctx):
        if directory in ctx.searched:
            continue
        found = ctx.probe_dir(directory)
        if found is not None:
            return ResolvedExecutable(path=found, provenance="shell-introspection")
    return None


def filesystem_search(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Ask the Spotlight index for files named like the converter."""
    completed = ctx.runner.run(
        ["mdfind", "-name", TOOL_NAME],
        env=ctx.platform.environ,
        timeout=ctx.probe_timeout,
    )
    for line in completed.stdout.splitlines():
        candidate = line.strip()
        if not candidate or candidate.lower().endswith(NON_BINARY_SUFFIXES):
            continue
        if ctx.fs.is_executable(candidate):
            return ResolvedExecutable(path=candidate, provenance="filesystem-search")
    return None


def which_command(ctx: ResolutionContext) -> ResolvedExecutable | None:
    """Run ``which``/``where`` through the platform's default shell."""
    platform = ctx.platform
    lookup = f"{platform.profile.lookup_command} {TOOL_NAME}"
    flag = "/c" if platform.os_family == "windows" else "-c"
    completed = ctx.runner.run(
        [platform.default_shell, flag, lookup],
        env=platform.environ,
        timeout=ctx.probe_timeout,
    )
    if completed.returncode != 0:
        return None
    lines = [line.strip() for line in completed.stdout.splitlines() if line.strip()]
    if not lines:
        return None
    found = ctx.check(lines[0])
    if found is None:
        logger.debug("%s printed a non-executable path: %s", lookup, lines[0])
        return None
    return ResolvedExecutable(path=found, provenance="which-command")


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    Strategy("user-absolute", user_absolute),
    Strategy("user-relative", user_relative),
    Strategy("path-search", path_search),
    Strategy("shell-introspection", shell_introspection, MACOS_ONLY),
    Strategy("filesystem-search", filesystem_search, MACOS_ONLY),
    Strategy("which-command", which_command),
)
