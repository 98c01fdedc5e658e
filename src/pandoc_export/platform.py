"""Platform facts and per-OS-family command conventions."""

from __future__ import annotations

import ntpath
import os
import platform as _platform
import posixpath
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from pandoc_export.types import Environ, OsFamily

TOOL_NAME = "pandoc"


def _quote_double(value: str) -> str:
    return f'"{value}"'


def _quote_single(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


@dataclass(frozen=True)
class PlatformProfile:
    """Static conventions for one OS family.

    Parameters
    ----------
    family : {"windows", "macos", "linux"}
        OS family the profile applies to.
    path_module : ModuleType
        ``ntpath`` or ``posixpath``; used so paths for any family can be
        handled on any host.
    executable_suffix : str
        Suffix retried when an executable check fails (``.exe`` on windows).
    quote_style : {"double", "single"}
        How paths are quoted inside a command line.
    shell_wrapped : bool
        Whether the command line is handed to an explicit ``<shell> -c``.
    lookup_command : str
        Utility that prints the location of a command found on PATH.
    well_known_dirs : tuple[str, ...]
        Installation directories probed after the PATH entries.
    typical_paths : tuple[str, ...]
        Example absolute converter paths shown in user-facing messages.
    """

    family: OsFamily
    path_module: ModuleType
    executable_suffix: str
    quote_style: str
    shell_wrapped: bool
    lookup_command: str
    well_known_dirs: tuple[str, ...]
    typical_paths: tuple[str, ...]

    @property
    def path_separator(self) -> str:
        return self.path_module.pathsep

    @property
    def tool_filename(self) -> str:
        return f"{TOOL_NAME}{self.executable_suffix}"

    def quote(self, value: str) -> str:
        if self.quote_style == "double":
            return _quote_double(value)
        return _quote_single(value)


PROFILES: Mapping[OsFamily, PlatformProfile] = {
    "windows": PlatformProfile(
        family="windows",
        path_module=ntpath,
        executable_suffix=".exe",
        quote_style="double",
        shell_wrapped=False,
        lookup_command="where",
        well_known_dirs=("C:\\Program Files\\Pandoc", "C:\\Pandoc"),
        typical_paths=("C:\\Program Files\\Pandoc\\pandoc.exe",),
    ),
    "macos": PlatformProfile(
        family="macos",
        path_module=posixpath,
        executable_suffix="",
        quote_style="single",
        shell_wrapped=True,
        lookup_command="which",
        well_known_dirs=(
            "/usr/local/bin",
            "/opt/homebrew/bin",
            "/opt/local/bin",
            "/usr/local/Homebrew/bin",
            "/usr/bin",
            "/opt/bin",
            "/opt/homebrew/sbin",
            "/opt/homebrew/opt/pandoc/bin",
        ),
        typical_paths=("/usr/local/bin/pandoc", "/opt/homebrew/bin/pandoc"),
    ),
    "linux": PlatformProfile(
        family="linux",
        path_module=posixpath,
        executable_suffix="",
        quote_style="single",
        shell_wrapped=True,
        lookup_command="which",
        well_known_dirs=("/usr/bin", "/usr/local/bin", "/opt/bin"),
        typical_paths=("/usr/bin/pandoc",),
    ),
}


@dataclass(frozen=True)
class PlatformFacts:
    """Snapshot of the host environment for a single call.

    Never cached between calls; build a fresh one with :func:`detect_platform`.
    """

    os_family: OsFamily
    arch: str
    home: str
    cwd: str
    search_path: tuple[str, ...]
    default_shell: str
    login_shell: str
    environ: Environ = field(default_factory=dict, repr=False, compare=False)

    @property
    def profile(self) -> PlatformProfile:
        return PROFILES[self.os_family]

    def is_absolute(self, path: str) -> bool:
        return self.profile.path_module.isabs(path)

    def join(self, *parts: str) -> str:
        return self.profile.path_module.join(*parts)

    def dirname(self, path: str) -> str:
        return self.profile.path_module.dirname(path)

    def basename(self, path: str) -> str:
        return self.profile.path_module.basename(path)


def os_family_for(sys_platform: str) -> OsFamily:
    """Map a ``sys.platform`` value onto an OS family."""
    if sys_platform.startswith(("win32", "cygwin")):
        return "windows"
    if sys_platform == "darwin":
        return "macos"
    return "linux"


def _lookup(environ: Environ, key: str, family: OsFamily) -> str | None:
    if key in environ:
        return environ[key]
    if family == "windows":
        # Windows variable names are case-insensitive (``Path`` vs ``PATH``).
        for name, value in environ.items():
            if name.upper() == key:
                return value
    return None


def _default_shell(family: OsFamily, environ: Environ) -> str:
    if family == "windows":
        return _lookup(environ, "COMSPEC", family) or "cmd.exe"
    if family == "macos":
        return "/bin/zsh"
    return "/bin/bash"


def detect_platform(
    environ: Environ | None = None,
    *,
    sys_platform: str | None = None,
    machine: str | None = None,
    cwd: str | None = None,
) -> PlatformFacts:
    """Compute :class:`PlatformFacts` from the current host.

    Parameters
    ----------
    environ : Mapping[str, str] | None, optional
        Environment to read; defaults to a copy of ``os.environ``.
    sys_platform : str | None, optional
        Override for ``sys.platform``.
    machine : str | None, optional
        Override for the CPU architecture.
    cwd : str | None, optional
        Override for the current working directory.

    Returns
    -------
    PlatformFacts
        Fresh snapshot; callers must not reuse it across export requests.
    """
    env = dict(os.environ if environ is None else environ)
    family = os_family_for(sys_platform or sys.platform)
    profile = PROFILES[family]

    raw_path = _lookup(env, "PATH", family) or ""
    search_path = tuple(entry for entry in raw_path.split(profile.path_separator) if entry)

    home = (
        _lookup(env, "USERPROFILE" if family == "windows" else "HOME", family)
        or str(Path.home())
    )
    default_shell = _default_shell(family, env)
    login_shell = default_shell
    if family != "windows":
        login_shell = _lookup(env, "SHELL", family) or default_shell

    return PlatformFacts(
        os_family=family,
        arch=machine or _platform.machine() or "unknown",
        home=home,
        cwd=cwd or os.getcwd(),
        search_path=search_path,
        default_shell=default_shell,
        login_shell=login_shell,
        environ=env,
    )
