"""Subprocess adapter."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from pandoc_export.application.ports import CompletedCommand
from pandoc_export.errors import ProcessTimeout
from pandoc_export.types import Environ

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run child processes with captured text output."""

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Environ | None = None,
        timeout: float | None = None,
    ) -> CompletedCommand:
        """Run ``argv`` without an implicit shell.

        Parameters
        ----------
        argv : Sequence[str]
            Program and arguments. Shell wrapping, when wanted, is already
            part of ``argv``.
        env : Mapping[str, str] | None, optional
            Full child environment; ``None`` inherits the parent's.
        timeout : float | None, optional
            Seconds before the child is killed.

        Returns
        -------
        CompletedCommand
            Exit status and decoded output.

        Raises
        ------
        OSError
            If the process cannot be spawned.
        ProcessTimeout
            If ``timeout`` elapses.
        """
        args = list(argv)
        logger.debug("running %s", args)
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=dict(env) if env is not None else None,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ProcessTimeout(args, timeout or 0.0) from exc
        return CompletedCommand(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
