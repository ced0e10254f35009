"""Subcommand modules for paramatrix.

Provides register_commands() which uses deferred imports to keep
``paramatrix --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from paramatrix.commands.collect import collect

    cli.add_command(collect)
