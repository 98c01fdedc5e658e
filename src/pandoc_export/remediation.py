"""User-facing remediation texts."""

from __future__ import annotations

from pandoc_export.platform import PROFILES, TOOL_NAME
from pandoc_export.types import OsFamily

_TYPICAL_LABELS: dict[OsFamily, str] = {
    "windows": "Windows",
    "macos": "Mac",
    "linux": "Linux",
}

_LATEX_INSTALL: dict[OsFamily, str] = {
    "windows": "install MiKTeX (https://miktex.org/)",
    "macos": "brew install --cask mactex-no-gui",
    "linux": "install the texlive-full package",
}

_HTML_ENGINE_INSTALL: dict[OsFamily, str] = {
    "windows": "download from https://wkhtmltopdf.org/downloads.html",
    "macos": "brew install wkhtmltopdf",
    "linux": "sudo apt install wkhtmltopdf",
}


def lookup_suggestion(family: OsFamily) -> str:
    """Return the terminal command that prints the converter's location."""
    return f"{PROFILES[family].lookup_command} {TOOL_NAME}"


def tool_not_found_remediation(family: OsFamily) -> str:
    """Explain how to point the settings at an installed converter."""
    typical = " or ".join(PROFILES[family].typical_paths)
    return (
        "Enter the full absolute path of pandoc in the 'pandoc_path' setting "
        f"({_TYPICAL_LABELS[family]}: usually {typical}).\n"
        f'Run "{lookup_suggestion(family)}" in a terminal to find the exact path. '
        "Even when pandoc is on your PATH, a GUI host may not inherit it."
    )


def engine_missing_remediation(family: OsFamily) -> str:
    """Explain how to install a PDF engine."""
    return (
        "Producing PDF needs a PDF engine. You can:\n"
        f"1. Install a LaTeX distribution: {_LATEX_INSTALL[family]}\n"
        "2. Or select an HTML-to-PDF engine (such as wkhtmltopdf) in the "
        f"'pdf_engine' setting and install it: {_HTML_ENGINE_INSTALL[family]}"
    )


def troubleshooting_tips(family: OsFamily, arch: str) -> tuple[str, ...]:
    """Step-by-step checklist shown after a failed converter check."""
    lookup = lookup_suggestion(family)
    tips = [
        f'Open a terminal and run "{lookup}" to see the full path of pandoc.',
        'Run "pandoc --version" to verify pandoc is installed correctly.',
        "Enter the full path in the 'pandoc_path' setting (for example "
        f'"{PROFILES[family].typical_paths[0]}").',
    ]
    if family == "windows":
        tips.append(
            "If pandoc is not installed, download it from "
            "https://pandoc.org/installing.html"
        )
    elif family == "macos":
        tips.append('If pandoc is not installed, run "brew install pandoc".')
        tips.append('Run "brew list | grep pandoc" to check for a Homebrew install.')
        if arch in {"arm64", "aarch64"}:
            tips.append(
                "On Apple silicon, Homebrew installs pandoc to /opt/homebrew/bin/pandoc."
            )
        else:
            tips.append(
                "On Intel Macs, Homebrew installs pandoc to /usr/local/bin/pandoc."
            )
    else:
        tips.append(
            'If pandoc is not installed, run "sudo apt install pandoc" or '
            '"sudo dnf install pandoc".'
        )
    return tuple(tips)
