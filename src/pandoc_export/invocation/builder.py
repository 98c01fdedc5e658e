"""Converter command construction and execution."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pandoc_export.adapters.process import SubprocessRunner
from pandoc_export.application.options import ConversionJob
from pandoc_export.application.ports import ProcessRunner
from pandoc_export.application.results import InvocationResult, ResolvedExecutable
from pandoc_export.errors import ProcessTimeout
from pandoc_export.invocation.classify import classify
from pandoc_export.platform import PlatformFacts, PlatformProfile

logger = logging.getLogger(__name__)

AUTO_ENGINE = "auto"


@dataclass(frozen=True)
class Invocation:
    """Platform-specific command ready to run.

    ``command_line`` is the rendered string (shown in logs and results);
    ``argv`` is what is actually spawned.
    """

    argv: tuple[str, ...]
    command_line: str


def assemble_arguments(job: ConversionJob) -> str:
    """Return the extra-argument string, with the PDF engine flag when set."""
    extra = job.extra_arguments.strip()
    if job.format == "pdf" and job.pdf_engine and job.pdf_engine != AUTO_ENGINE:
        logger.info("using PDF engine %s", job.pdf_engine)
        extra = f"--pdf-engine={job.pdf_engine} {extra}".strip()
    return extra


def _render(profile: PlatformProfile, argument: str) -> str:
    if argument.startswith("-"):
        return argument
    return profile.quote(argument)


def _split_windows(extra: str) -> list[str]:
    """Split ``extra`` the way the MSVC runtime splits a command line.

    Quotes toggle quoting anywhere inside a token and are dropped, so
    ``title="My Doc"`` stays one argument. ``2n`` backslashes before a quote
    become ``n`` backslashes; ``2n+1`` become ``n`` plus a literal quote.
    """
    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    quoted = False
    backslashes = 0
    for char in extra:
        if char == "\\":
            backslashes += 1
            in_token = True
            continue
        if char == '"':
            current.append("\\" * (backslashes // 2))
            if backslashes % 2:
                current.append('"')
            else:
                quoted = not quoted
            backslashes = 0
            in_token = True
            continue
        current.append("\\" * backslashes)
        backslashes = 0
        if char.isspace() and not quoted:
            if in_token:
                tokens.append("".join(current))
            current = []
            in_token = False
            continue
        current.append(char)
        in_token = True
    current.append("\\" * backslashes)
    if in_token:
        tokens.append("".join(current))
    return tokens


def build_command(
    platform: PlatformFacts,
    executable: str,
    arguments: Sequence[str],
    extra: str = "",
) -> Invocation:
    """Render a command for ``platform`` from its profile.

    Parameters
    ----------
    platform : PlatformFacts
        Host snapshot; its profile selects quoting and shell wrapping.
    executable : str
        Resolved converter path.
    arguments : Sequence[str]
        Structured arguments; anything not starting with ``-`` is quoted.
    extra : str, default=""
        Free-form arguments appended verbatim.

    Returns
    -------
    Invocation
        Rendered command line plus the argv to spawn.
    """
    profile = platform.profile
    parts = [profile.quote(executable), *(_render(profile, arg) for arg in arguments)]
    if extra:
        parts.append(extra)
    command_line = " ".join(parts)

    if profile.shell_wrapped:
        argv: tuple[str, ...] = (platform.default_shell, "-c", command_line)
    else:
        argv = (executable, *arguments, *_split_windows(extra))
    return Invocation(argv=argv, command_line=command_line)


def conversion_command(
    exe: ResolvedExecutable,
    job: ConversionJob,
    input_path: Path,
    platform: PlatformFacts,
) -> Invocation:
    """Command converting ``input_path`` into ``job.output_path``."""
    return build_command(
        platform,
        exe.path,
        [str(input_path), "-o", str(job.output_path)],
        assemble_arguments(job),
    )


def version_command(exe: ResolvedExecutable, platform: PlatformFacts) -> Invocation:
    """Command printing the converter's version banner."""
    return build_command(platform, exe.path, ["--version"])


def safe_document_name(name: str) -> str:
    """Return a filesystem-safe base name for the transient input file."""
    candidate = Path(name.strip().replace("\\", "/")).name
    if candidate in {"", ".", ".."}:
        return "document"
    return candidate


def materialize_input(job: ConversionJob, temp_dir: str | None = None) -> Path:
    """Write the job's content into a new temporary markdown file."""
    fd, raw_path = tempfile.mkstemp(
        prefix=f"{safe_document_name(job.document_name)}-",
        suffix=".md",
        dir=temp_dir,
    )
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(job.content)
    except OSError:
        _remove_quietly(path)
        raise
    return path


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("failed to remove temporary input %s: %s", path, exc)


def execute(
    invocation: Invocation,
    platform: PlatformFacts,
    runner: ProcessRunner,
    *,
    timeout: float | None = None,
    expected_output: Path | None = None,
) -> InvocationResult:
    """Run ``invocation`` with the caller's environment and classify it."""
    family = platform.os_family
    logger.info("running: %s", invocation.command_line)
    env = dict(platform.environ)
    try:
        completed = runner.run(invocation.argv, env=env, timeout=timeout)
    except ProcessTimeout as exc:
        verdict = classify(None, str(exc), family, timed_out=True)
        return InvocationResult(
            outcome=verdict.outcome,
            exit_status=None,
            stdout="",
            stderr=str(exc),
            status=verdict.status,
            remediation=verdict.remediation,
            command=invocation.command_line,
        )
    except OSError as exc:
        verdict = classify(None, "", family, spawn_error=exc)
        return InvocationResult(
            outcome=verdict.outcome,
            exit_status=None,
            stdout="",
            stderr=str(exc),
            status=verdict.status,
            remediation=verdict.remediation,
            command=invocation.command_line,
        )

    verdict = classify(completed.returncode, completed.stderr, family)
    warnings: list[str] = []
    if verdict.outcome == "success":
        if completed.stderr.strip():
            logger.warning("pandoc reported warnings: %s", completed.stderr.strip())
            warnings.append(completed.stderr.strip())
        if expected_output is not None and not expected_output.exists():
            warnings.append(f"pandoc exited cleanly but {expected_output} was not written")
    else:
        logger.error("pandoc failed (%s): %s", completed.returncode, completed.stderr.strip())

    return InvocationResult(
        outcome=verdict.outcome,
        exit_status=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
        status=verdict.status,
        remediation=verdict.remediation,
        command=invocation.command_line,
        warnings=tuple(warnings),
    )


def build(
    exe: ResolvedExecutable,
    job: ConversionJob,
    platform: PlatformFacts,
    *,
    runner: ProcessRunner | None = None,
    timeout: float | None = None,
    temp_dir: str | None = None,
) -> InvocationResult:
    """Materialize the input, run the converter and classify the result.

    The transient input file is always removed before returning.

    Parameters
    ----------
    exe : ResolvedExecutable
        Verified converter path.
    job : ConversionJob
        Export request.
    platform : PlatformFacts
        Host snapshot for this call.
    runner : ProcessRunner | None, optional
        Process adapter; defaults to :class:`SubprocessRunner`.
    timeout : float | None, optional
        Seconds before the converter is killed.
    temp_dir : str | None, optional
        Directory for the transient input; defaults to the system temp dir.

    Returns
    -------
    InvocationResult
        Classified outcome; expected failures never raise.
    """
    runner = runner or SubprocessRunner()
    try:
        input_path = materialize_input(job, temp_dir)
    except OSError as exc:
        logger.error("failed to write temporary input: %s", exc)
        return InvocationResult(
            outcome="other-failure",
            exit_status=None,
            stdout="",
            stderr=str(exc),
            status=f"Export failed: could not write temporary input ({exc})",
        )
    try:
        invocation = conversion_command(exe, job, input_path, platform)
        return execute(
            invocation,
            platform,
            runner,
            timeout=timeout,
            expected_output=job.output_path,
        )
    finally:
        _remove_quietly(input_path)
