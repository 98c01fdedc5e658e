"""Converter executable resolution."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pandoc_export.adapters.filesystem import LocalFileSystem
from pandoc_export.adapters.process import SubprocessRunner
from pandoc_export.application.ports import FileSystem, ProcessRunner
from pandoc_export.application.results import ResolvedExecutable, ToolNotFound
from pandoc_export.errors import ToolNotFoundError
from pandoc_export.platform import PlatformFacts
from pandoc_export.remediation import lookup_suggestion, tool_not_found_remediation
from pandoc_export.resolution.strategies import (
    DEFAULT_STRATEGIES,
    ResolutionContext,
    Strategy,
)

logger = logging.getLogger(__name__)


def first_success(
    strategies: Sequence[Strategy],
    ctx: ResolutionContext,
) -> ResolvedExecutable | None:
    """Run applicable strategies in order and return the first hit.

    A strategy that raises is logged and treated as a miss.
    """
    family = ctx.platform.os_family
    for strategy in strategies:
        if not strategy.applies_to(family):
            continue
        try:
            found = strategy(ctx)
        except Exception as exc:
            logger.debug("strategy %s failed: %s", strategy.name, exc, exc_info=True)
            continue
        if found is not None:
            logger.info(
                "resolved pandoc via %s: %s", found.provenance, found.path
            )
            return found
        logger.debug("strategy %s found nothing", strategy.name)
    return None


def tool_not_found(hint: str, platform: PlatformFacts) -> ToolNotFound:
    """Build the aggregate failure for ``hint`` on ``platform``."""
    suggestion = lookup_suggestion(platform.os_family)
    message = (
        f"Pandoc was not found (tried '{hint}'). It may be installed, but it "
        "could not be located from this process.\n"
        + tool_not_found_remediation(platform.os_family)
    )
    return ToolNotFound(
        hint=hint,
        os_family=platform.os_family,
        message=message,
        suggestion=suggestion,
    )


class Resolver:
    """Turn a path hint into a verified converter executable."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        runner: ProcessRunner | None = None,
        strategies: Sequence[Strategy] | None = None,
        probe_timeout: float = 10.0,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._runner = runner or SubprocessRunner()
        self._strategies = tuple(DEFAULT_STRATEGIES if strategies is None else strategies)
        self._probe_timeout = probe_timeout

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        return self._strategies

    def resolve(
        self, hint: str, platform: PlatformFacts
    ) -> ResolvedExecutable | ToolNotFound:
        """Resolve ``hint`` on ``platform``.

        Parameters
        ----------
        hint : str
            Configured converter path or bare command name.
        platform : PlatformFacts
            Host snapshot for this call.

        Returns
        -------
        ResolvedExecutable | ToolNotFound
            The first verified executable, or the aggregate failure.
        """
        ctx = ResolutionContext(
            hint=hint,
            platform=platform,
            fs=self._fs,
            runner=self._runner,
            probe_timeout=self._probe_timeout,
        )
        found = first_success(self._strategies, ctx)
        if found is not None:
            return found
        logger.debug(
            "pandoc not found for hint %r on %s; searched %s",
            hint,
            platform.os_family,
            sorted(ctx.searched),
        )
        return tool_not_found(hint, platform)

    def resolve_or_raise(self, hint: str, platform: PlatformFacts) -> ResolvedExecutable:
        """Like :meth:`resolve` but raise :class:`ToolNotFoundError` on failure."""
        result = self.resolve(hint, platform)
        if isinstance(result, ToolNotFound):
            raise ToolNotFoundError(result.message, hint=result.hint)
        return result
