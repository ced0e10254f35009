"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``.  Provides a lazily built Engine and centralized
report emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramatrix.output.formatters import format_reports

if TYPE_CHECKING:
    from paramatrix.config.settings import ParamatrixSettings
    from paramatrix.services.engine import Engine
    from paramatrix.services.result import CollectionReport


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The engine (and plugin discovery) is deferred to first use so
    ``--help`` and ``--version`` never load entry points.
    """

    def __init__(self, settings: ParamatrixSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None

        from paramatrix.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

        if settings.verbose:
            from paramatrix.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def engine(self) -> Engine:
        """The engine (created lazily on first access)."""
        if self._engine is None:
            from paramatrix.plugins.manager import PluginManager
            from paramatrix.services.engine import Engine

            plugins = PluginManager()
            plugins.discover_and_load()
            self._engine = Engine(self.settings.engine, plugins)
        return self._engine

    def emit(self, reports: list[CollectionReport]) -> None:
        """Format and output collection reports with correct exit semantics.

        * Every report ok: writes to stdout, returns normally.
        * Any declaration or case failure: writes to stderr, exits with code 1.
        """
        output = format_reports(
            reports,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if all(r.ok for r in reports):
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
