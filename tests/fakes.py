"""In-memory fakes for the filesystem and process ports."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from pandoc_export.application.ports import CompletedCommand, DirEntry
from pandoc_export.platform import PlatformFacts
from pandoc_export.types import Environ, OsFamily

SHELLS: dict[OsFamily, str] = {
    "windows": "C:\\Windows\\System32\\cmd.exe",
    "macos": "/bin/zsh",
    "linux": "/bin/bash",
}


def make_platform(
    family: OsFamily = "linux",
    *,
    search_path: Iterable[str] = (),
    home: str | None = None,
    cwd: str | None = None,
    arch: str = "x86_64",
    login_shell: str | None = None,
    environ: Environ | None = None,
) -> PlatformFacts:
    """Build deterministic platform facts for tests."""
    if home is None:
        home = "C:\\Users\\ada" if family == "windows" else "/home/ada"
    if cwd is None:
        cwd = "C:\\work" if family == "windows" else "/work"
    shell = SHELLS[family]
    return PlatformFacts(
        os_family=family,
        arch=arch,
        home=home,
        cwd=cwd,
        search_path=tuple(search_path),
        default_shell=shell,
        login_shell=login_shell or shell,
        environ=dict(environ or {"PATH": "test"}),
    )


class FakeFileSystem:
    """Filesystem with a fixed set of files, executables and directories."""

    def __init__(
        self,
        executables: Iterable[str] = (),
        files: dict[str, str] | None = None,
        dirs: dict[str, list[DirEntry]] | None = None,
    ) -> None:
        self.executables = set(executables)
        self.files = dict(files or {})
        self.dirs = dict(dirs or {})
        self.probes: list[str] = []

    def is_executable(self, path: str) -> bool:
        self.probes.append(path)
        return path in self.executables

    def exists(self, path: str) -> bool:
        return path in self.executables or path in self.files or path in self.dirs

    def read_text(self, path: str) -> str | None:
        return self.files.get(path)

    def list_dir(self, path: str) -> list[DirEntry]:
        if path not in self.dirs:
            raise FileNotFoundError(path)
        return sorted(self.dirs[path], key=lambda entry: entry.name)


Responder = Callable[[Sequence[str]], CompletedCommand | BaseException]


class FakeRunner:
    """Process runner returning scripted results and recording every call."""

    def __init__(self, responder: Responder | None = None) -> None:
        self.responder = responder
        self.calls: list[tuple[tuple[str, ...], dict[str, str] | None, float | None]] = []

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Environ | None = None,
        timeout: float | None = None,
    ) -> CompletedCommand:
        self.calls.append((tuple(argv), dict(env) if env is not None else None, timeout))
        if self.responder is None:
            return CompletedCommand(returncode=1, stdout="", stderr="")
        outcome = self.responder(argv)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> CompletedCommand:
    return CompletedCommand(returncode=returncode, stdout=stdout, stderr=stderr)
