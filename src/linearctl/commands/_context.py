"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Runs service coroutines inside a short-lived
session and centralizes result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import click

from linearctl.infrastructure.session import LinearSession
from linearctl.output.formatters import format_result

if TYPE_CHECKING:
    from linearctl.config.settings import LinearSettings
    from linearctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  No HTTP client is
    opened until a command actually calls :meth:`run`, so ``--help`` and
    ``--version`` never need credentials.
    """

    def __init__(self, settings: LinearSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from linearctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from linearctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def run(self, call: Callable[[LinearSession], Awaitable[ServiceResult]]) -> ServiceResult:
        """Run *call* against a fresh session and close it afterwards."""

        async def _main() -> ServiceResult:
            async with LinearSession(self.settings) as session:
                return await call(session)

        return asyncio.run(_main())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result, json_output=self.settings.json_output, verbose=self.settings.verbose
        )
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
