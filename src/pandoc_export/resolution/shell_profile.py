"""Extract PATH hints from a user's shell startup file."""

from __future__ import annotations

import re

_EXPORT_PATH_RE = re.compile(r"export\s+PATH=([^:\n]+)")
_KEEP_MARKERS = ("homebrew", "opt", "bin")
_HOME_TOKENS = ("${HOME}", "$HOME")

STARTUP_FILES = {
    "zsh": ".zshrc",
    "bash": ".bash_profile",
}


def startup_file_for(shell: str) -> str:
    """Return the startup file name read for a login shell path."""
    name = shell.replace("\\", "/").rsplit("/", 1)[-1]
    return STARTUP_FILES.get(name, ".profile")


def extract_path_entries(text: str, home: str) -> list[str]:
    """Return the first segment of each ``export PATH=...`` assignment.

    Only segments mentioning ``homebrew``, ``opt`` or ``bin`` are kept.
    ``$HOME`` and a leading ``~`` are expanded against ``home``.
    """
    entries: list[str] = []
    for match in _EXPORT_PATH_RE.finditer(text):
        value = match.group(1).strip().strip("\"'")
        for token in _HOME_TOKENS:
            value = value.replace(token, home)
        if value.startswith("~"):
            value = home + value[1:]
        if not value or "$" in value:
            continue
        if any(marker in value for marker in _KEEP_MARKERS) and value not in entries:
            entries.append(value)
    return entries


def parse_path_output(stdout: str, separator: str = ":") -> list[str]:
    """Split the PATH echoed by a shell into directories.

    Login shells may print banners first; only the last non-empty line is used.
    """
    lines = [line.strip() for line in stdout.splitlines() if line.strip()]
    if not lines:
        return []
    return [entry for entry in lines[-1].split(separator) if entry]
